"""
Value types shared by the resolvers and the client.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClientIdentity:
    """The chain a client talks to: its id and base URL."""
    id: str
    endpoint: str

    def __post_init__(self):
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))


@dataclass(frozen=True)
class Credentials:
    """An HMAC key pair. The secret half is kept out of repr."""
    auth_key: str = field(repr=False)
    auth_key_id: str

    @classmethod
    def from_pair(cls, auth_key, auth_key_id):
        """Return Credentials, or None unless both halves are non-empty."""
        if not auth_key or not auth_key_id:
            return None
        return cls(auth_key=auth_key, auth_key_id=auth_key_id)
