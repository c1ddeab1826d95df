"""
Shared fixtures for Dragonchain SDK tests.
"""

import pytest

from dragonchain_sdk.constants import (
    ENV_AUTH_KEY,
    ENV_AUTH_KEY_ID,
    ENV_DRAGONCHAIN_ENDPOINT,
    ENV_DRAGONCHAIN_ID,
    ENV_SMART_CONTRACT_ID,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's own Dragonchain environment out of the tests."""
    for name in (ENV_AUTH_KEY, ENV_AUTH_KEY_ID, ENV_DRAGONCHAIN_ENDPOINT,
                 ENV_DRAGONCHAIN_ID, ENV_SMART_CONTRACT_ID):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Write an INI config file and return its path."""
    def write(content):
        path = tmp_path / "credentials"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return write
