"""
Dragonchain SDK

A Python client library that signs requests to a Dragonchain REST API
with the DC1 HMAC authorization scheme.

Example usage:
    from dragonchain_sdk import DragonchainClient

    client = DragonchainClient("your-dragonchain-id")
    response = client.get_status()
"""

import logging
import os
from typing import Optional

from .client import DragonchainClient
from .configuration import EndpointResolver, resolve_dragonchain_id
from .credentials import CredentialResolver
from .exceptions import (
    DragonchainError,
    BadRequestError,
    NotFoundError,
    UnexpectedError,
    ConfigurationError,
    HTTPError
)
from .constants import (
    HEADER_DRAGONCHAIN,
    HEADER_AUTHORIZATION,
    HEADER_TIMESTAMP,
    HEADER_CALLBACK_URL,
    DEFAULT_CONFIG,
    ENV_LOG_LEVEL
)
from .models import ClientIdentity, Credentials
from .signing import HmacAlgorithm, get_hmac_message_string, sign, verify_authorization_header

__version__ = "1.0.0"
__all__ = [
    "DragonchainClient",
    "CredentialResolver",
    "EndpointResolver",
    "resolve_dragonchain_id",
    "ClientIdentity",
    "Credentials",
    "HmacAlgorithm",
    "get_hmac_message_string",
    "sign",
    "verify_authorization_header",
    "DragonchainError",
    "BadRequestError",
    "NotFoundError",
    "UnexpectedError",
    "ConfigurationError",
    "HTTPError",
    "HEADER_DRAGONCHAIN",
    "HEADER_AUTHORIZATION",
    "HEADER_TIMESTAMP",
    "HEADER_CALLBACK_URL",
    "DEFAULT_CONFIG",
    "set_stream_logger",
]

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())


def set_stream_logger(name: str = __name__, level: Optional[str] = None,
                      format_string: Optional[str] = None) -> logging.Logger:
    """
    Send SDK logs to stderr.

    Args:
        name: Logger name, the whole SDK by default
        level: Level name, defaults to DRAGONCHAIN_LOG_LEVEL or INFO
        format_string: Log record format

    Returns:
        The configured logger
    """
    level_name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    sdk_logger = logging.getLogger(name)
    sdk_logger.setLevel(getattr(logging, level_name, logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        format_string or "%(asctime)s %(levelname)s %(name)s %(message)s"
    ))
    sdk_logger.addHandler(handler)
    return sdk_logger
