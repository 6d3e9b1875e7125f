"""
twilly_cli.profile
───────────────────
Remembers the last verified credential pair between sessions, as a JSON
file readable only by its owner:

    <TWILLY_PROFILE_DIR>/<TWILLY_APP_NAME>/profile.json
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError as PydanticValidationError

from twilly.core.config import get_config
from twilly.core.credentials import Credentials
from twilly.core.errors import ConfigurationError
from twilly.core.logging import get_logger

log = get_logger(__name__)


class ProfileFile(BaseModel):
    account_sid: str
    auth_token: str


class ProfileStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_config().profile_path

    def load(self) -> Credentials | None:
        """
        Return the stored credentials, or None when there are none.
        An unreadable or invalid profile is reported and treated as absent.
        """
        if not self.path.exists():
            log.debug("profile.missing", path=str(self.path))
            return None
        try:
            profile = ProfileFile.model_validate_json(self.path.read_bytes())
            return Credentials.build(profile.account_sid, profile.auth_token)
        except (OSError, PydanticValidationError, ConfigurationError) as exc:
            print(f"Unable to load profile configuration: {exc}", file=sys.stderr)
            return None

    def store(self, credentials: Credentials) -> bool:
        """Persist *credentials*; failures are reported, not raised."""
        profile = {
            "account_sid": credentials.account_sid,
            "auth_token": credentials.auth_token.get_secret_value(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(profile, fh)
        except OSError as exc:
            print(f"Unable to store profile configuration: {exc}", file=sys.stderr)
            return False
        log.debug("profile.stored", path=str(self.path))
        return True


__all__ = ["ProfileStore"]
