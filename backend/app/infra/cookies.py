"""Cookie helpers for login sessions."""

from __future__ import annotations

from fastapi import Response

from app.settings import settings


SESSION_COOKIE_PATH = "/"


def set_session_cookie(response: Response, token: str) -> None:
    max_age = int(settings.session_ttl_seconds)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=max_age,
        expires=max_age,
        path=SESSION_COOKIE_PATH,
        secure=bool(settings.cookie_secure),
        httponly=True,
        samesite=settings.cookie_samesite,
        domain=settings.cookie_domain or None,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=SESSION_COOKIE_PATH,
        domain=settings.cookie_domain or None,
    )
