"""
twilly.core.credentials
────────────────────────
Account SID & auth token pair used to authenticate every request.
The token is wrapped in SecretStr so it never reaches logs, repr, or
tracebacks.

Validated once, at construction:
  - the account SID starts with "AC" and is 34 characters long
  - the auth token is 32 characters long
"""
from __future__ import annotations

from dataclasses import dataclass

from twilly.core.errors import ConfigurationError

ACCOUNT_SID_PREFIX = "AC"
ACCOUNT_SID_LENGTH = 34
AUTH_TOKEN_LENGTH = 32


# ── SecretStr ───────────────────────────────────────────────────────────────────

class SecretStr:
    """
    Wrapper that hides the secret value from logs, repr, and JSON.
    Access the raw value only via .get_secret_value().
    """

    def __init__(self, value: str) -> None:
        self._value = value

    def get_secret_value(self) -> str:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __repr__(self) -> str:
        return "SecretStr('**********')"

    def __str__(self) -> str:
        return "**********"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SecretStr):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value)


# ── Credentials ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Credentials:
    """
    Raises ConfigurationError naming the first violated constraint, whether
    built directly or through build().
    """

    account_sid: str
    auth_token: SecretStr

    def __post_init__(self) -> None:
        if not isinstance(self.auth_token, SecretStr):
            object.__setattr__(self, "auth_token", SecretStr(self.auth_token))

        if not self.account_sid.startswith(ACCOUNT_SID_PREFIX):
            raise ConfigurationError("Account SID must start with AC")
        if len(self.account_sid) != ACCOUNT_SID_LENGTH:
            raise ConfigurationError(
                f"Account SID should be {ACCOUNT_SID_LENGTH} characters in length. "
                f"Was {len(self.account_sid)}"
            )
        if len(self.auth_token) != AUTH_TOKEN_LENGTH:
            raise ConfigurationError(
                f"Auth token should be {AUTH_TOKEN_LENGTH} characters in length. "
                f"Was {len(self.auth_token)}"
            )

    @classmethod
    def build(cls, account_sid: str, auth_token: str | SecretStr) -> Credentials:
        """
        Wrap a plain token and validate the pair.

        Usage:
            creds = Credentials.build("AC" + "1" * 32, "1" * 32)
        """
        token = auth_token if isinstance(auth_token, SecretStr) else SecretStr(auth_token)
        return cls(account_sid=account_sid, auth_token=token)

    def basic_auth(self) -> tuple[str, str]:
        """(username, password) pair for HTTP basic auth."""
        return self.account_sid, self.auth_token.get_secret_value()


__all__ = ["SecretStr", "Credentials"]
