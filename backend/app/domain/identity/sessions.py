"""Login session bookkeeping.

A session is a Redis record ``session:{sid}`` holding the user id, plus a
per-user index ``session:user:{uid}`` so every session of a deleted account
can be revoked. Clients hold a signed token that names the session.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from jwt import InvalidTokenError

from app.infra import jwt as jwt_helper
from app.infra.redis import RedisProxy, redis_client
from app.obs import metrics as obs_metrics
from app.settings import settings

logger = logging.getLogger(__name__)


def _session_key(session_id: str) -> str:
	return f"session:{session_id}"


def _user_sessions_key(user_id: str) -> str:
	return f"session:user:{user_id}"


@dataclass(slots=True)
class IssuedSession:
	session_id: str
	user_id: str
	token: str
	expires_in: int


class SessionStore:
	def __init__(self, client: RedisProxy = redis_client, *, ttl_seconds: Optional[int] = None) -> None:
		self._client = client
		self._ttl = ttl_seconds or settings.session_ttl_seconds

	async def start(self, user_id: str) -> IssuedSession:
		session_id = secrets.token_urlsafe(24)
		async with self._client.pipeline(transaction=True) as pipe:
			pipe.set(_session_key(session_id), user_id, ex=self._ttl)
			pipe.sadd(_user_sessions_key(user_id), session_id)
			pipe.expire(_user_sessions_key(user_id), self._ttl)
			await pipe.execute()
		token = jwt_helper.encode_session(session_id=session_id, user_id=user_id, ttl_seconds=self._ttl)
		obs_metrics.inc_session("start")
		logger.info("session_started", extra={"user_id": user_id})
		return IssuedSession(session_id=session_id, user_id=user_id, token=token, expires_in=self._ttl)

	async def resolve(self, token: str | None) -> tuple[Optional[str], Optional[str]]:
		"""Return ``(session_id, user_id)`` for a live session token.

		Invalid, expired, or revoked tokens resolve to ``(None, None)``.
		"""
		if not token:
			return None, None
		try:
			payload = jwt_helper.decode_session(token)
		except InvalidTokenError:
			return None, None
		session_id = str(payload["sid"])
		user_id = await self._client.get(_session_key(session_id))
		if user_id is None or str(user_id) != str(payload["sub"]):
			return None, None
		return session_id, str(user_id)

	async def end(self, session_id: str) -> None:
		user_id = await self._client.get(_session_key(session_id))
		async with self._client.pipeline(transaction=True) as pipe:
			pipe.delete(_session_key(session_id))
			if user_id is not None:
				pipe.srem(_user_sessions_key(str(user_id)), session_id)
			await pipe.execute()
		obs_metrics.inc_session("end")

	async def end_all_for_user(self, user_id: str) -> int:
		session_ids = await self._client.smembers(_user_sessions_key(user_id))
		async with self._client.pipeline(transaction=True) as pipe:
			for session_id in session_ids:
				pipe.delete(_session_key(session_id))
			pipe.delete(_user_sessions_key(user_id))
			await pipe.execute()
		obs_metrics.inc_session("revoke_all")
		return len(session_ids)
