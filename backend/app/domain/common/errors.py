"""Error taxonomy shared by every feature area.

Each error carries a machine ``reason`` and the HTTP status the API layer
answers with. Messages are meant for end users and may name usernames.
"""

from __future__ import annotations


class CircleError(Exception):
	"""Base class for domain errors surfaced to API callers."""

	reason: str = "error"
	status_code: int = 500
	default_message: str = "Something went wrong."

	def __init__(self, message: str | None = None, *, reason: str | None = None) -> None:
		self.message = message or self.default_message
		super().__init__(self.message)
		if reason:
			self.reason = reason


class BadValuesError(CircleError):
	reason = "bad_values"
	status_code = 400
	default_message = "Invalid values."


class UnauthenticatedError(CircleError):
	reason = "unauthenticated"
	status_code = 401
	default_message = "Must be logged in!"


class NotAllowedError(CircleError):
	reason = "not_allowed"
	status_code = 403
	default_message = "Not allowed."


class NotFoundError(CircleError):
	reason = "not_found"
	status_code = 404
	default_message = "Not found."


class AlreadyExistsError(CircleError):
	reason = "already_exists"
	status_code = 409
	default_message = "Already exists."
