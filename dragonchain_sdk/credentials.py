"""
Credential resolution for the Dragonchain SDK.

Credentials are looked up from an ordered chain of sources. The first
source that yields a complete auth key / auth key id pair wins; a source
holding only half a pair is a miss and sources are never merged.
"""

import logging
import os
from typing import List, Optional

from .configuration import read_config_file
from .constants import (
    CONFIG_AUTH_KEY,
    CONFIG_AUTH_KEY_ID,
    ENV_AUTH_KEY,
    ENV_AUTH_KEY_ID,
    ENV_SMART_CONTRACT_ID,
    SECRET_AUTH_KEY,
    SECRET_AUTH_KEY_ID,
    SECRET_PREFIX,
    SECRETS_BASE_DIR,
)
from .exceptions import BadRequestError, NotFoundError, UnexpectedError
from .models import Credentials

logger = logging.getLogger(__name__)


class CredentialSource:
    """A single place credentials may be found."""

    def try_resolve(self, dragonchain_id: str) -> Optional[Credentials]:
        """Return credentials for dragonchain_id, or None to defer to the next source."""
        raise NotImplementedError


class ExplicitCredentialSource(CredentialSource):
    """Credentials handed to the client by the caller."""

    def __init__(self, auth_key: Optional[str], auth_key_id: Optional[str]):
        self.credentials = Credentials.from_pair(auth_key, auth_key_id)

    def try_resolve(self, dragonchain_id: str) -> Optional[Credentials]:
        return self.credentials


class EnvironmentCredentialSource(CredentialSource):
    """AUTH_KEY and AUTH_KEY_ID, read together."""

    def try_resolve(self, dragonchain_id: str) -> Optional[Credentials]:
        return Credentials.from_pair(os.environ.get(ENV_AUTH_KEY), os.environ.get(ENV_AUTH_KEY_ID))


class ConfigFileCredentialSource(CredentialSource):
    """auth_key / auth_key_id from the [<dragonchain id>] section of the config file."""

    def __init__(self, path: Optional[str] = None, log: Optional[logging.Logger] = None):
        self.path = path
        self.log = log or logger

    def try_resolve(self, dragonchain_id: str) -> Optional[Credentials]:
        parser = read_config_file(self.path, self.log)
        if parser is None:
            return None
        if not parser.has_section(dragonchain_id):
            self.log.debug("Config file has no section for %s", dragonchain_id)
            return None
        section = parser[dragonchain_id]
        return Credentials.from_pair(
            section.get(CONFIG_AUTH_KEY, "").strip(),
            section.get(CONFIG_AUTH_KEY_ID, "").strip(),
        )


class SmartContractCredentialSource(CredentialSource):
    """
    Credentials mounted as secrets for a running smart contract.

    Files are named sc-<SMART_CONTRACT_ID>-auth-key-id and
    sc-<SMART_CONTRACT_ID>-secret-key under the secrets directory.
    """

    def __init__(self, base_dir: str = SECRETS_BASE_DIR, log: Optional[logging.Logger] = None):
        self.base_dir = base_dir
        self.log = log or logger

    def try_resolve(self, dragonchain_id: str) -> Optional[Credentials]:
        if not os.environ.get(ENV_SMART_CONTRACT_ID):
            return None
        try:
            auth_key_id = read_smart_contract_secret(SECRET_AUTH_KEY_ID, self.base_dir)
            auth_key = read_smart_contract_secret(SECRET_AUTH_KEY, self.base_dir)
        except (NotFoundError, UnexpectedError) as e:
            self.log.debug("Error loading credentials from smart contract secrets: %s", e)
            return None
        return Credentials.from_pair(auth_key, auth_key_id)


def read_smart_contract_secret(secret_name: str, base_dir: str = SECRETS_BASE_DIR) -> str:
    """
    Read a secret mounted for the running smart contract.

    Args:
        secret_name: Name the secret was registered under
        base_dir: Secrets mount directory

    Returns:
        The secret value, stripped of surrounding whitespace

    Raises:
        BadRequestError: If secret_name is empty
        NotFoundError: If the contract id is unset or the secret file is missing
        UnexpectedError: If the secret file exists but cannot be read
    """
    if not secret_name:
        raise BadRequestError("secret_name is required")
    smart_contract_id = os.environ.get(ENV_SMART_CONTRACT_ID)
    if not smart_contract_id:
        raise NotFoundError(f"{ENV_SMART_CONTRACT_ID} is not set, not running as a smart contract")
    path = os.path.join(base_dir, f"{SECRET_PREFIX}-{smart_contract_id}-{secret_name}")
    try:
        with open(path, encoding="utf-8") as secret_file:
            return secret_file.read().strip()
    except FileNotFoundError as e:
        raise NotFoundError(f"Secret {secret_name} not found at {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise UnexpectedError(f"Something unexpected happened while reading {path}: {e}") from e


class CredentialResolver:
    """
    Resolve credentials for a chain by trying each source in order.

    Nothing is cached: every call to resolve() reads the sources again.
    """

    def __init__(self, sources: List[CredentialSource], log: Optional[logging.Logger] = None):
        self.sources = list(sources)
        self.log = log or logger

    @classmethod
    def default(
        cls,
        auth_key: Optional[str] = None,
        auth_key_id: Optional[str] = None,
        config_path: Optional[str] = None,
        secrets_dir: str = SECRETS_BASE_DIR,
        log: Optional[logging.Logger] = None,
    ) -> "CredentialResolver":
        """Explicit values, environment, config file, then smart contract secrets."""
        return cls(
            [
                ExplicitCredentialSource(auth_key, auth_key_id),
                EnvironmentCredentialSource(),
                ConfigFileCredentialSource(config_path, log),
                SmartContractCredentialSource(secrets_dir, log),
            ],
            log,
        )

    def resolve(self, dragonchain_id: str) -> Credentials:
        """
        Raises:
            NotFoundError: If no source yields a complete key pair
        """
        for source in self.sources:
            credentials = source.try_resolve(dragonchain_id)
            if credentials is not None:
                return credentials
            self.log.debug("Credentials not found by %s, trying next source", type(source).__name__)
        raise NotFoundError(f"Credentials for {dragonchain_id} could not be found")
