"""Domain-level exceptions for call sessions."""

from __future__ import annotations

from app.domain.common.errors import AlreadyExistsError, BadValuesError, NotAllowedError, NotFoundError


class CallSelfError(BadValuesError):
	reason = "self_call"
	default_message = "Caller and recipient cannot be the same user."


class CallConflict(AlreadyExistsError):
	reason = "call_in_progress"
	default_message = "One of the participants is already in a call."


class CallNotFound(NotFoundError):
	reason = "call_not_found"
	default_message = "Call not found."


class NoPendingCall(NotFoundError):
	reason = "no_pending_call"
	default_message = "No one is calling you."


class NotInCall(NotFoundError):
	reason = "not_in_call"
	default_message = "You are not currently in any call to end."


class CallAlreadyEnded(BadValuesError):
	reason = "call_ended"
	default_message = "Call has already ended."


class CallNotPending(BadValuesError):
	reason = "call_not_pending"
	default_message = "Call is no longer waiting to be answered."


class CallForbidden(NotAllowedError):
	reason = "not_call_recipient"
	default_message = "Only the person being called can answer this call."
