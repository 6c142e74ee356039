"""JSON logging with request-scoped context.

The middleware binds ``request_id``/``client_ip`` and the auth dependency
adds ``user_id``; every record logged while handling that request carries
them. Fields whose name mentions a credential or message text are redacted.
"""

from __future__ import annotations

import json
import logging
import random
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from app.settings import settings

_LOGGER_NAME = "circle"
_REDACTED = "[redacted]"
_SENSITIVE = ("password", "token", "cookie", "secret", "authorization", "content")

_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar("circle_log_context", default={})

# Attributes every LogRecord has; anything else on a record came from ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def bind_context(**fields: Optional[str]) -> Token:
	"""Add fields to the logging context; pass the token to ``reset_context``."""
	merged = dict(_CONTEXT.get())
	merged.update({key: str(value) for key, value in fields.items() if value is not None})
	return _CONTEXT.set(merged)


def reset_context(token: Token) -> None:
	_CONTEXT.reset(token)


def current_request_id() -> Optional[str]:
	return _CONTEXT.get().get("request_id")


def redact(fields: Mapping[str, Any]) -> Dict[str, Any]:
	return {key: _REDACTED if any(word in key.lower() for word in _SENSITIVE) else value for key, value in fields.items()}


class JSONLogFormatter(logging.Formatter):
	def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (match logging api)
		payload: Dict[str, Any] = {
			"ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname.lower(),
			"logger": record.name,
			"msg": record.getMessage(),
			"service": settings.service_name,
			"env": settings.environment,
		}
		payload.update(_CONTEXT.get())
		extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
		payload.update(redact(extra))
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		return json.dumps(payload, default=str, separators=(",", ":"))


def _sample_info(record: logging.LogRecord) -> bool:
	if record.levelno != logging.INFO:
		return True
	return random.random() < settings.obs_log_sampling_rate_info


def configure_logging() -> logging.Logger:
	"""Send every record through one JSON handler on the root logger."""
	handler = logging.StreamHandler()
	handler.setFormatter(JSONLogFormatter())
	handler.addFilter(_sample_info)
	root = logging.getLogger()
	root.handlers[:] = [handler]
	root.setLevel(settings.obs_log_level)
	return logging.getLogger(_LOGGER_NAME)


def get_logger(name: Optional[str] = None) -> logging.Logger:
	return logging.getLogger(name or _LOGGER_NAME)
