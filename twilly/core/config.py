"""
twilly.core.config
───────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; a bad value fails when the
settings are first loaded, not halfway through a session.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_profile_dir() -> Path:
    return Path.home() / ".config"


class TwillySettings(BaseSettings):
    """
    Settings for the library and the terminal client.
    Library knobs are prefixed TWILLY_; credentials use Twilio's own names.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Application ───────────────────────────────────────────────────────────
    app_name: str = Field(default="twilly", alias="TWILLY_APP_NAME")
    profile_dir: Path = Field(default_factory=_default_profile_dir, alias="TWILLY_PROFILE_DIR")

    # ── HTTP ──────────────────────────────────────────────────────────────────
    timeout_seconds: float = Field(default=30.0, gt=0, alias="TWILLY_TIMEOUT")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="WARNING", alias="TWILLY_LOG_LEVEL")
    log_format: str = Field(default="console", alias="TWILLY_LOG_FORMAT")

    # ── Terminal client ───────────────────────────────────────────────────────
    bulk_delay_seconds: float = Field(default=1.0, ge=0, alias="TWILLY_BULK_DELAY")

    # ── Credentials (optional source for the terminal client) ─────────────────
    account_sid: str | None = Field(default=None, alias="TWILIO_ACCOUNT_SID")
    auth_token: str | None = Field(default=None, alias="TWILIO_AUTH_TOKEN")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got {v!r}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"console", "json"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @property
    def profile_path(self) -> Path:
        return self.profile_dir / self.app_name / "profile.json"

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_sid and self.auth_token)


@lru_cache(maxsize=1)
def get_config() -> TwillySettings:
    """
    Return the singleton settings. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return TwillySettings()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["TwillySettings", "get_config"]
