"""
twilly
──────
Async client for the Twilio REST APIs. Import from here, not from
sub-modules directly. Every name exported here is part of the public API.

    from twilly import Client, Credentials

    async with Client(Credentials.build(account_sid, auth_token)) as twilio:
        await twilio.conversations().delete("CH...")
"""
from twilly.core.errors import (
    TwilioError,
    ErrorKind,
    NetworkError,
    ApiError,
    ParseError,
    ValidationError,
    ConfigurationError,
    TwilioApiError,
    is_not_found,
)
from twilly.core.credentials import Credentials, SecretStr
from twilly.core.config import get_config, TwillySettings
from twilly.core.logging import get_logger, configure_logging
from twilly.core.http import HTTP, Method

from twilly.runtime.serialize import deserialize, encode_params, to_dict
from twilly.runtime.validate import validate_input

from twilly.pagination import Page, PageMeta, collect_pages, iter_pages, paginate
from twilly.client import Client

__version__ = "0.1.0"
__all__ = [
    # client
    "Client",
    # credentials
    "Credentials", "SecretStr",
    # errors
    "TwilioError", "ErrorKind", "NetworkError", "ApiError", "ParseError",
    "ValidationError", "ConfigurationError", "TwilioApiError", "is_not_found",
    # config
    "get_config", "TwillySettings",
    # logging
    "get_logger", "configure_logging",
    # http
    "HTTP", "Method",
    # serialization & validation
    "deserialize", "encode_params", "to_dict", "validate_input",
    # pagination
    "Page", "PageMeta", "collect_pages", "iter_pages", "paginate",
]
