"""
Request descriptors and query string helpers.
"""

import datetime
import json
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlencode

from .constants import CONTENT_TYPE_JSON, DEFAULT_QUERY_LIMIT, DEFAULT_QUERY_OFFSET
from .exceptions import BadRequestError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


def get_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2019-05-01T12:00:00.000Z."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_body(body: Any) -> str:
    """Serialize a request body; strings are sent unchanged, None is no body."""
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadRequestError(f"Request body is not valid UTF-8: {e}") from e
    return json.dumps(body, separators=(",", ":"))


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything that goes into signing one outgoing request."""
    method: str
    path: str
    timestamp: str
    content_type: str = ""
    body: str = ""

    @classmethod
    def build(cls, method: str, path: str, body: Any = None) -> "RequestDescriptor":
        """
        Build a descriptor stamped with the current time.

        Args:
            method: HTTP method
            path: Request path including query string
            body: JSON serializable body, raw string, or None

        Returns:
            RequestDescriptor with content type application/json iff a body is present

        Raises:
            BadRequestError: If the method or path is invalid
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise BadRequestError(f"Unsupported HTTP method {method}")
        if not path.startswith("/"):
            raise BadRequestError(f"Path must begin with '/': {path}")

        serialized = serialize_body(body)
        return cls(
            method=method,
            path=path,
            timestamp=get_timestamp(),
            content_type=CONTENT_TYPE_JSON if serialized else "",
            body=serialized,
        )


def get_lucene_query_params(
    query: Optional[str] = None,
    sort: Optional[str] = None,
    offset: int = DEFAULT_QUERY_OFFSET,
    limit: int = DEFAULT_QUERY_LIMIT,
) -> str:
    """
    Build the query string for search endpoints.

    q and sort are omitted when empty; offset and limit always appear.

    Raises:
        BadRequestError: If offset or limit is not a non-negative integer
    """
    for name, value in (("offset", offset), ("limit", limit)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise BadRequestError(f"{name} must be a non-negative integer")

    params = []
    if query:
        params.append(("q", query))
    if sort:
        params.append(("sort", sort))
    params.append(("offset", str(offset)))
    params.append(("limit", str(limit)))
    return "?" + urlencode(params)
