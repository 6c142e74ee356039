"""Settings for the Circle backend."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	redis_url: str = _env_field("redis://localhost:6379/0", "REDIS_URL")
	secret_key: str = _env_field("dev-secret-change-me", "SECRET_KEY")

	environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
	service_name: str = _env_field("circle-api", "SERVICE_NAME")
	git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")
	obs_enabled: bool = _env_field(True, "OBS_ENABLED")
	obs_metrics_public: bool = _env_field(False, "OBS_METRICS_PUBLIC")
	obs_admin_token: Optional[str] = _env_field(None, "OBS_ADMIN_TOKEN")
	obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
	obs_log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")

	# Login sessions live in Redis; the cookie only carries a signed pointer.
	session_ttl_seconds: int = _env_field(7 * 24 * 60 * 60, "SESSION_TTL_SECONDS")
	session_cookie_name: str = _env_field("circle_session", "SESSION_COOKIE_NAME")
	cookie_secure: bool = _env_field(False, "COOKIE_SECURE")
	cookie_samesite: str = _env_field("lax", "COOKIE_SAMESITE")
	cookie_domain: Optional[str] = _env_field(None, "COOKIE_DOMAIN")
	cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

	# Attempts before a contended compare-and-swap write gives up.
	docstore_cas_retries: int = _env_field(8, "DOCSTORE_CAS_RETRIES")

	def is_prod(self) -> bool:
		return self.environment.lower() in ("prod", "production", "live")

	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		extra="ignore",
	)

	@field_validator("cors_allow_origins", mode="before")
	def _split_cors(cls, value):  # type: ignore[override]
		if value in (None, ""):
			return ()
		if isinstance(value, str):
			return tuple(part.strip() for part in value.split(",") if part.strip())
		if isinstance(value, (list, tuple, set)):
			return tuple(str(item).strip() for item in value if str(item).strip())
		return ()

	@field_validator("cookie_samesite", mode="before")
	def _normalise_samesite(cls, value):  # type: ignore[override]
		text = str(value or "lax").strip().lower()
		return text if text in ("lax", "strict", "none") else "lax"


def _normalise_level(level: str) -> str:
	return level.upper()


settings = Settings()
settings.obs_log_level = _normalise_level(settings.obs_log_level)

