"""
Configuration lookup for the Dragonchain SDK.

Resolves which chain to talk to and where it lives. Every lookup walks an
ordered chain of sources and the first hit wins:

    dragonchain id: explicit value -> DRAGONCHAIN_ID -> [default] dragonchain_id
    endpoint:       DRAGONCHAIN_ENDPOINT -> [<id>] endpoint -> matchmaking service

The configuration file is INI formatted and lives at
~/.dragonchain/credentials (%LOCALAPPDATA%\\dragonchain\\credentials on Windows).
"""

import configparser
import logging
import os
import sys
from typing import List, Optional

import requests

from .constants import (
    CONFIG_DEFAULT_SECTION,
    CONFIG_DRAGONCHAIN_ID,
    CONFIG_ENDPOINT,
    DISCOVERY_TIMEOUT,
    DISCOVERY_URL,
    ENV_DRAGONCHAIN_ENDPOINT,
    ENV_DRAGONCHAIN_ID,
)
from .exceptions import NotFoundError

logger = logging.getLogger(__name__)


def get_config_file_path() -> str:
    """Return the platform specific path of the Dragonchain config file."""
    if sys.platform == "win32":
        return os.path.join(os.environ.get("LOCALAPPDATA", ""), "dragonchain", "credentials")
    return os.path.join(os.path.expanduser("~"), ".dragonchain", "credentials")


def read_config_file(path: Optional[str] = None, log: Optional[logging.Logger] = None) -> Optional[configparser.ConfigParser]:
    """
    Parse the config file.

    A missing, unreadable or malformed file is reported as None so callers
    can move on to their next source.
    """
    log = log or logger
    path = path or get_config_file_path()
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        log.debug("Could not load config file %s: %s", path, e)
        return None
    return parser


def get_config_value(section: str, option: str, path: Optional[str] = None, log: Optional[logging.Logger] = None) -> str:
    """Return a value from the config file, or an empty string if absent."""
    parser = read_config_file(path, log)
    if parser is None or not parser.has_section(section):
        return ""
    return parser.get(section, option, fallback="").strip()


def resolve_dragonchain_id(
    dragonchain_id: Optional[str] = None,
    config_path: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """
    Determine the dragonchain id to use.

    Args:
        dragonchain_id: Explicit id, used as-is when given
        config_path: Override for the config file location
        log: Logger for fallback tracing

    Returns:
        The dragonchain id

    Raises:
        NotFoundError: If no source provides an id
    """
    log = log or logger
    if dragonchain_id:
        return dragonchain_id

    log.debug("Checking if dragonchain id is in the environment")
    dragonchain_id = os.environ.get(ENV_DRAGONCHAIN_ID, "")
    if dragonchain_id:
        return dragonchain_id

    log.debug("Dragonchain id not provided in environment, will search on disk")
    dragonchain_id = get_config_value(CONFIG_DEFAULT_SECTION, CONFIG_DRAGONCHAIN_ID, config_path, log)
    if dragonchain_id:
        return dragonchain_id

    raise NotFoundError("Configuration file is missing a default dragonchain id")


class EndpointSource:
    """A single place an endpoint may be found."""

    def try_resolve(self, dragonchain_id: str) -> Optional[str]:
        """Return the endpoint for dragonchain_id, or None to defer to the next source."""
        raise NotImplementedError


class EnvironmentEndpointSource(EndpointSource):
    def try_resolve(self, dragonchain_id: str) -> Optional[str]:
        return os.environ.get(ENV_DRAGONCHAIN_ENDPOINT) or None


class ConfigFileEndpointSource(EndpointSource):
    def __init__(self, path: Optional[str] = None, log: Optional[logging.Logger] = None):
        self.path = path
        self.log = log or logger

    def try_resolve(self, dragonchain_id: str) -> Optional[str]:
        return get_config_value(dragonchain_id, CONFIG_ENDPOINT, self.path, self.log) or None


class RemoteEndpointSource(EndpointSource):
    """
    Ask the matchmaking service where a chain lives.

    Being the last resort, this source raises NotFoundError instead of
    returning None when the lookup fails.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DISCOVERY_TIMEOUT,
        url_template: str = DISCOVERY_URL,
    ):
        self.session = session
        self.timeout = timeout
        self.url_template = url_template

    def try_resolve(self, dragonchain_id: str) -> Optional[str]:
        url = self.url_template.format(dragonchain_id=dragonchain_id)
        get = self.session.get if self.session is not None else requests.get
        try:
            response = get(url, timeout=self.timeout)
            body = response.json()
            endpoint = body.get("url") if isinstance(body, dict) else None
        except (requests.RequestException, ValueError) as e:
            raise NotFoundError(
                f"Failure to retrieve dragonchain endpoint from remote service: {e}"
            ) from e
        if not isinstance(endpoint, str) or not endpoint:
            raise NotFoundError(f"Bad response from remote service: {body!r}")
        return endpoint


class EndpointResolver:
    """
    Resolve the base URL of a chain by trying each source in order.
    """

    def __init__(self, sources: List[EndpointSource], log: Optional[logging.Logger] = None):
        self.sources = list(sources)
        self.log = log or logger

    @classmethod
    def default(
        cls,
        config_path: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DISCOVERY_TIMEOUT,
        log: Optional[logging.Logger] = None,
    ) -> "EndpointResolver":
        """Environment, then config file, then the matchmaking service."""
        return cls(
            [
                EnvironmentEndpointSource(),
                ConfigFileEndpointSource(config_path, log),
                RemoteEndpointSource(session, timeout),
            ],
            log,
        )

    def resolve(self, dragonchain_id: str) -> str:
        """
        Raises:
            NotFoundError: If no source knows the endpoint
        """
        for source in self.sources:
            endpoint = source.try_resolve(dragonchain_id)
            if endpoint:
                return endpoint.rstrip("/")
            self.log.debug("Endpoint not found by %s, trying next source", type(source).__name__)
        raise NotFoundError(f"Endpoint for {dragonchain_id} could not be found")
