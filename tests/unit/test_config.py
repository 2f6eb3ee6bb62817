"""Tests for ClientConfig and the debug helper."""

import pytest

from menmos._core.config import DEFAULT_TIMEOUT, USER_AGENT, ClientConfig
from menmos._core.debug import debug


class TestClientConfig:
    def test_defaults(self, mock_env_clear):
        config = ClientConfig(host="https://menmos.test")
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.resolve_token() is None

    def test_trailing_slash_is_stripped(self, mock_env_clear):
        assert ClientConfig(host="https://menmos.test/").resolve_host() == "https://menmos.test"

    def test_host_falls_back_to_environment(self, monkeypatch, mock_env_clear):
        monkeypatch.setenv("MENMOS_HOST", "http://localhost:3030")
        assert ClientConfig().resolve_host() == "http://localhost:3030"

    def test_explicit_host_wins(self, monkeypatch, mock_env_clear):
        monkeypatch.setenv("MENMOS_HOST", "http://localhost:3030")
        assert ClientConfig(host="https://menmos.test").resolve_host() == "https://menmos.test"

    def test_missing_host(self, mock_env_clear):
        with pytest.raises(RuntimeError, match="Missing menmos host"):
            ClientConfig().resolve_host()

    def test_token_falls_back_to_environment(self, monkeypatch, mock_env_clear, mock_token):
        monkeypatch.setenv("MENMOS_TOKEN", mock_token)
        assert ClientConfig().resolve_token() == mock_token

    def test_auth_headers(self, mock_env_clear, mock_token):
        headers = ClientConfig(
            host="https://menmos.test", token=mock_token, headers={"x-trace": "1"}
        ).get_auth_headers()

        assert headers == {
            "accept": "application/json",
            "user-agent": USER_AGENT,
            "authorization": f"Bearer {mock_token}",
            "x-trace": "1",
        }

    def test_no_authorization_without_token(self, mock_env_clear):
        assert "authorization" not in ClientConfig(host="https://menmos.test").get_auth_headers()

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/query", "https://menmos.test/query"),
            ("query", "https://menmos.test/query"),
            ("https://node-1:8443/blob/x", "https://node-1:8443/blob/x"),
            ("http://node-1/blob/x", "http://node-1/blob/x"),
        ],
    )
    def test_build_url(self, mock_env_clear, path, expected):
        assert ClientConfig(host="https://menmos.test/").build_url(path) == expected


class TestDebug:
    def test_silent_by_default(self, capsys, mock_env_clear):
        debug("hello")
        assert capsys.readouterr().out == ""

    def test_enabled_by_debug_variable(self, capsys, monkeypatch, mock_env_clear):
        monkeypatch.setenv("DEBUG", "httpx,menmos")
        debug("resolved", "node-1")
        assert "menmos: resolved node-1" in capsys.readouterr().out
