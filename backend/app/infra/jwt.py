"""JWT helpers for session tokens.

A session token is an HS256 JWT that points at a server-side session record;
revoking the record invalidates the token even before it expires.
"""

from __future__ import annotations

import time
from typing import Any, Dict

import jwt
from jwt import InvalidTokenError

from app.settings import settings


ISSUER = "circle-api"
AUDIENCE = "circle-fe"


def encode_session(*, session_id: str, user_id: str, ttl_seconds: int) -> str:
    now = int(time.time())
    body: Dict[str, Any] = {
        "iss": ISSUER,
        "aud": AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "sid": session_id,
        "sub": user_id,
    }
    return jwt.encode(body, settings.secret_key, algorithm="HS256")


def decode_session(token: str) -> dict[str, Any]:
    """Decode and validate a session token.

    Raises jwt.InvalidTokenError subclasses on failure.
    """
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=["HS256"],
        audience=AUDIENCE,
        issuer=ISSUER,
        leeway=5,
        options={"require": ["exp", "iat", "iss", "aud"]},
    )
    for k in ("sid", "sub"):
        if not payload.get(k):
            raise InvalidTokenError(f"missing_claim:{k}")
    return payload
