"""
Custom exceptions for the Dragonchain SDK.
"""


class DragonchainError(Exception):
    """Base exception for Dragonchain SDK errors."""
    code = "DRAGONCHAIN_ERROR"


class BadRequestError(DragonchainError):
    """Raised when caller supplied parameters fail local validation."""
    code = "BAD_REQUEST"


class NotFoundError(DragonchainError):
    """Raised when every source of a resolution chain has been exhausted."""
    code = "NOT_FOUND"


class UnexpectedError(DragonchainError):
    """Raised when local credential or file inspection fails unexpectedly."""
    code = "UNEXPECTED_ERROR"


class ConfigurationError(DragonchainError):
    """Raised when client configuration is invalid."""
    code = "CONFIGURATION_ERROR"


class HTTPError(DragonchainError):
    """Raised when an HTTP request fails at the transport level."""
    code = "HTTP_ERROR"
