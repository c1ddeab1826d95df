"""
HMAC request signing compatible with Dragonchain's DC1 authorization scheme.

A request is reduced to a canonical message string:

    METHOD\\npath?query\\ndragonchain_id\\ntimestamp\\ncontent_type\\nbase64(digest(body))

which is then signed with the caller's auth key. The resulting header value is

    DC1-HMAC-<ALGORITHM> <auth_key_id>:<base64(hmac)>

and the node recomputes it from the same request to authenticate the caller.
"""

import base64
import hashlib
import hmac
from enum import Enum
from typing import Union

from .constants import AUTH_SCHEME_VERSION
from .exceptions import ConfigurationError
from .models import Credentials


class HmacAlgorithm(str, Enum):
    """Digest algorithms accepted by Dragonchain nodes."""
    SHA256 = "SHA256"
    SHA3_256 = "SHA3-256"
    BLAKE2B512 = "BLAKE2b512"

    @property
    def hash_function(self):
        return _HASH_FUNCTIONS[self]

    @classmethod
    def parse(cls, value: Union[str, "HmacAlgorithm"]) -> "HmacAlgorithm":
        """
        Look up an algorithm by its header token.

        Raises:
            ConfigurationError: If the algorithm is not supported
        """
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(a.value for a in cls)
            raise ConfigurationError(
                f"Unsupported HMAC algorithm {value!r} (supported: {supported})"
            ) from None


_HASH_FUNCTIONS = {
    HmacAlgorithm.SHA256: hashlib.sha256,
    HmacAlgorithm.SHA3_256: hashlib.sha3_256,
    HmacAlgorithm.BLAKE2B512: hashlib.blake2b,
}


def _to_bytes(data: Union[str, bytes, None]) -> bytes:
    if data is None:
        return b""
    if isinstance(data, bytes):
        return data
    return data.encode("utf-8")


def hash_content(body: Union[str, bytes, None], algorithm: HmacAlgorithm) -> str:
    """Return the base64 digest of a request body (empty body if None)."""
    algorithm = HmacAlgorithm.parse(algorithm)
    digest = algorithm.hash_function(_to_bytes(body)).digest()
    return base64.b64encode(digest).decode("ascii")


def get_hmac_message_string(
    method: str,
    path: str,
    dragonchain_id: str,
    timestamp: str,
    content_type: str,
    body: Union[str, bytes, None],
    algorithm: HmacAlgorithm,
) -> str:
    """
    Build the canonical message that gets signed for a request.

    Args:
        method: HTTP method (case-insensitive)
        path: Request path including the query string, verbatim
        dragonchain_id: Id of the chain being called
        timestamp: The same timestamp sent in the timestamp header
        content_type: Content type of the body, empty string without a body
        body: Raw request body
        algorithm: Digest algorithm for the content hash

    Returns:
        Newline joined message string
    """
    return "\n".join([
        method.upper(),
        path,
        dragonchain_id,
        timestamp,
        content_type,
        hash_content(body, algorithm),
    ])


def sign(message: str, credentials: Credentials, algorithm: HmacAlgorithm) -> str:
    """
    Sign a canonical message and format it as an Authorization header value.

    Args:
        message: Canonical message from get_hmac_message_string()
        credentials: Key pair used for the HMAC
        algorithm: Digest algorithm for the HMAC

    Returns:
        "DC1-HMAC-<ALGORITHM> <auth_key_id>:<signature>"
    """
    algorithm = HmacAlgorithm.parse(algorithm)
    mac = hmac.new(
        credentials.auth_key.encode("utf-8"),
        message.encode("utf-8"),
        algorithm.hash_function,
    )
    signature = base64.b64encode(mac.digest()).decode("ascii")
    return f"DC{AUTH_SCHEME_VERSION}-HMAC-{algorithm.value} {credentials.auth_key_id}:{signature}"


def get_authorization_header(
    credentials: Credentials,
    method: str,
    path: str,
    dragonchain_id: str,
    timestamp: str,
    content_type: str,
    body: Union[str, bytes, None],
    algorithm: HmacAlgorithm = HmacAlgorithm.SHA256,
) -> str:
    """Canonicalize a request and sign it in one step."""
    message = get_hmac_message_string(
        method, path, dragonchain_id, timestamp, content_type, body, algorithm
    )
    return sign(message, credentials, algorithm)


def verify_authorization_header(
    header: str,
    message: str,
    credentials: Credentials,
) -> bool:
    """
    Recompute a signature the way a node does and compare it to a header.

    The algorithm is taken from the header's scheme tag.

    Returns:
        True if the header was produced from message with credentials
    """
    try:
        scheme, _ = header.split(" ", 1)
        algorithm = scheme.split("-HMAC-", 1)[1]
        expected = sign(message, credentials, algorithm)
    except (ValueError, IndexError, ConfigurationError):
        return False

    # Use constant-time comparison
    return hmac.compare_digest(expected.encode("utf-8"), header.encode("utf-8"))
