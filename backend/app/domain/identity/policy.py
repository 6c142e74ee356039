"""Validation helpers for account flows."""

from __future__ import annotations

import re

from app.domain.common.errors import BadValuesError

USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_.-]{1,30}$")
PASSWORD_MAX_LEN = 256


def normalise_username(username: str | None) -> str:
	value = (username or "").strip()
	if not value:
		raise BadValuesError("Username and password must be non-empty!", reason="empty_credentials")
	if not USERNAME_REGEX.match(value):
		raise BadValuesError(
			"Username may only contain letters, digits, '.', '_' or '-' (max 30).",
			reason="username_format",
		)
	return value


def guard_password(password: str | None) -> str:
	if not password:
		raise BadValuesError("Username and password must be non-empty!", reason="empty_credentials")
	if len(password) > PASSWORD_MAX_LEN:
		raise BadValuesError("Password is too long.", reason="password_too_long")
	return password
