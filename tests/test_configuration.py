"""
Unit tests for dragonchain id and endpoint resolution.
"""

import os
import sys
from unittest.mock import Mock, patch

import pytest
import requests

from dragonchain_sdk import EndpointResolver, NotFoundError, resolve_dragonchain_id
from dragonchain_sdk.configuration import (
    ConfigFileEndpointSource,
    EnvironmentEndpointSource,
    RemoteEndpointSource,
    get_config_file_path,
    get_config_value,
)

CONFIG = """
[default]
dragonchain_id = testId

[testId]
endpoint = https://file.example.com/
auth_key = fileKey
auth_key_id = fileKeyId
"""


def remote_session(body=None, exc=None):
    """A session whose GET returns body as JSON, or raises exc."""
    session = Mock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        session.get.return_value.json.return_value = body
    return session


class TestConfigFile:
    """Test config file location and parsing."""

    def test_default_path(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        expected = os.path.join(os.path.expanduser("~"), ".dragonchain", "credentials")
        assert get_config_file_path() == expected

    def test_windows_path(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "win32")
        monkeypatch.setenv("LOCALAPPDATA", "C:/Users/someone/AppData/Local")
        expected = os.path.join("C:/Users/someone/AppData/Local", "dragonchain", "credentials")
        assert get_config_file_path() == expected

    def test_get_config_value(self, config_file):
        path = config_file(CONFIG)
        assert get_config_value("default", "dragonchain_id", path) == "testId"
        assert get_config_value("testId", "missing", path) == ""
        assert get_config_value("missing", "endpoint", path) == ""

    def test_get_config_value_no_interpolation(self, config_file):
        path = config_file("[testId]\nauth_key = abc%def\n")
        assert get_config_value("testId", "auth_key", path) == "abc%def"


class TestDragonchainId:
    """Test dragonchain id resolution order."""

    def test_explicit(self, config_file, monkeypatch):
        monkeypatch.setenv("DRAGONCHAIN_ID", "envId")
        assert resolve_dragonchain_id("explicitId", config_file(CONFIG)) == "explicitId"

    def test_environment(self, config_file, monkeypatch):
        monkeypatch.setenv("DRAGONCHAIN_ID", "envId")
        assert resolve_dragonchain_id(None, config_file(CONFIG)) == "envId"

    def test_config_file_default(self, config_file):
        assert resolve_dragonchain_id(None, config_file(CONFIG)) == "testId"

    def test_not_found(self, config_file):
        with pytest.raises(NotFoundError):
            resolve_dragonchain_id(None, config_file("[testId]\nendpoint = x\n"))


class TestEndpointResolver:
    """Test endpoint resolution order."""

    def test_environment_first(self, config_file, monkeypatch):
        monkeypatch.setenv("DRAGONCHAIN_ENDPOINT", "https://env.example.com")
        session = remote_session({"url": "https://remote.example.com"})
        resolver = EndpointResolver.default(config_file(CONFIG), session)

        assert resolver.resolve("testId") == "https://env.example.com"
        session.get.assert_not_called()

    def test_config_file_second(self, config_file):
        session = remote_session({"url": "https://remote.example.com"})
        resolver = EndpointResolver.default(config_file(CONFIG), session)

        assert resolver.resolve("testId") == "https://file.example.com"
        session.get.assert_not_called()

    def test_remote_last(self, config_file):
        session = remote_session({"url": "https://remote.example.com"})
        resolver = EndpointResolver.default(config_file(CONFIG), session)

        assert resolver.resolve("otherId") == "https://remote.example.com"
        session.get.assert_called_once_with(
            "https://matchmaking.api.dragonchain.com/registration/otherId", timeout=30
        )

    def test_remote_missing_url(self, config_file):
        resolver = EndpointResolver.default(config_file(CONFIG), remote_session({"error": "nope"}))
        with pytest.raises(NotFoundError):
            resolver.resolve("otherId")

    @pytest.mark.parametrize("body", [{"url": 5}, {"url": ["https://remote.example.com"]}, {"url": ""}])
    def test_remote_url_not_a_string(self, config_file, body):
        resolver = EndpointResolver.default(config_file(CONFIG), remote_session(body))
        with pytest.raises(NotFoundError):
            resolver.resolve("otherId")

    def test_remote_without_session(self):
        with patch("dragonchain_sdk.configuration.requests.get") as mock_get:
            mock_get.return_value.json.return_value = {"url": "https://remote.example.com"}

            assert RemoteEndpointSource().try_resolve("otherId") == "https://remote.example.com"
            mock_get.assert_called_once_with(
                "https://matchmaking.api.dragonchain.com/registration/otherId", timeout=30
            )

    def test_remote_non_object_body(self):
        with pytest.raises(NotFoundError):
            RemoteEndpointSource(remote_session(["url"])).try_resolve("otherId")

    def test_remote_invalid_json(self):
        session = Mock()
        session.get.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(NotFoundError):
            RemoteEndpointSource(session).try_resolve("otherId")

    @pytest.mark.parametrize("exc", [
        requests.Timeout("timed out"),
        requests.ConnectionError("refused"),
    ])
    def test_remote_transport_error(self, exc):
        with pytest.raises(NotFoundError) as exc_info:
            RemoteEndpointSource(remote_session(exc=exc)).try_resolve("otherId")
        assert isinstance(exc_info.value.__cause__, requests.RequestException)

    def test_remote_custom_timeout(self):
        session = remote_session({"url": "https://remote.example.com"})
        RemoteEndpointSource(session, timeout=5).try_resolve("otherId")
        assert session.get.call_args[1]["timeout"] == 5

    def test_sources_in_isolation(self, config_file):
        assert EnvironmentEndpointSource().try_resolve("testId") is None
        assert ConfigFileEndpointSource(config_file(CONFIG)).try_resolve("otherId") is None

    def test_exhausted_without_remote(self, tmp_path):
        resolver = EndpointResolver([
            EnvironmentEndpointSource(),
            ConfigFileEndpointSource(str(tmp_path / "missing")),
        ])
        with pytest.raises(NotFoundError):
            resolver.resolve("testId")

    def test_idempotent(self, config_file):
        resolver = EndpointResolver.default(config_file(CONFIG), remote_session())
        assert resolver.resolve("testId") == resolver.resolve("testId")
