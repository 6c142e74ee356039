"""Session-based authentication dependencies for FastAPI endpoints.

The session token travels in the ``circle_session`` cookie; clients that
cannot keep cookies may send the same token as a Bearer credential.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.container import Services, get_services
from app.domain.common.errors import NotAllowedError, UnauthenticatedError
from app.obs import logging as obs_logging
from app.settings import settings


@dataclass(slots=True)
class AuthenticatedUser:
	id: str
	session_id: str


@dataclass(slots=True)
class SessionContext:
	"""What the transport session says about the caller, possibly nobody."""

	session_id: Optional[str] = None
	user_id: Optional[str] = None

	@property
	def is_logged_in(self) -> bool:
		return self.user_id is not None


class LoggedInError(NotAllowedError):
	reason = "logged_in"
	default_message = "Must be logged out!"


_bearer_scheme = HTTPBearer(auto_error=False)


def _session_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
	if credentials and credentials.scheme.lower() == "bearer":
		return credentials.credentials
	return request.cookies.get(settings.session_cookie_name)


async def get_session(
	request: Request,
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
	services: Services = Depends(get_services),
) -> SessionContext:
	session_id, user_id = await services.sessions.resolve(_session_token(request, credentials))
	return SessionContext(session_id=session_id, user_id=user_id)


async def get_current_user(session: SessionContext = Depends(get_session)) -> AuthenticatedUser:
	if not session.is_logged_in:
		raise UnauthenticatedError()
	obs_logging.bind_context(user_id=session.user_id)
	return AuthenticatedUser(id=str(session.user_id), session_id=str(session.session_id))


async def require_logged_out(session: SessionContext = Depends(get_session)) -> SessionContext:
	if session.is_logged_in:
		raise LoggedInError()
	return session
