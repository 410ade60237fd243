#!/usr/bin/env python3
"""Tests for configuration loading and the HTTP client setup."""

import httpx
import pytest

from dubco_mcp.client import DubcoClient, describe_http_error, format_failure
from dubco_mcp.config import API_BASE_URL, ConfigurationError, Settings


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env({"DUBCO_API_KEY": "dub_test"})
        assert settings.api_key == "dub_test"
        assert settings.base_url == API_BASE_URL
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = Settings.from_env({
            "DUBCO_API_KEY": "dub_test",
            "DUBCO_API_BASE_URL": "http://localhost:8888",
            "DUBCO_LOG_LEVEL": "debug",
        })
        assert settings.base_url == "http://localhost:8888"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("env", [{}, {"DUBCO_API_KEY": ""}, {"DUBCO_API_KEY": "   "}])
    def test_missing_key(self, env):
        with pytest.raises(ConfigurationError):
            Settings.from_env(env)

    @pytest.mark.parametrize("level", ["verbose", "trace"])
    def test_unknown_log_level(self, level):
        with pytest.raises(ConfigurationError) as exc:
            Settings.from_env({"DUBCO_API_KEY": "dub_test", "DUBCO_LOG_LEVEL": level})
        assert level.upper() in str(exc.value)

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DUBCO_API_KEY", "dub_env")
        assert Settings.from_env().api_key == "dub_env"


class TestDubcoClient:
    """Tests for client construction and request headers."""

    def test_requires_key(self):
        with pytest.raises(ConfigurationError) as exc:
            DubcoClient("")
        assert str(exc.value) == "api_key is required"

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with DubcoClient("dub_secret", transport=httpx.MockTransport(handler)) as client:
            assert await client.list_domains() == []

        assert seen[0].url == "https://api.dub.co/domains"
        assert seen[0].headers["Authorization"] == "Bearer dub_secret"
        assert seen[0].headers["Content-Type"] == "application/json"


def _status_error(status: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.dub.co/domains")
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError("Client error", request=request, response=response)


class TestErrorShaping:
    """Tests for describe_http_error / format_failure."""

    def test_error_field(self):
        assert describe_http_error(_status_error(400, json={"error": "Bad URL"})) == (400, "Bad URL")

    def test_nested_error_object(self):
        error = _status_error(404, json={"error": {"code": "not_found", "message": "Link not found"}})
        assert describe_http_error(error) == (404, "Link not found")

    def test_message_field(self):
        assert describe_http_error(_status_error(409, json={"message": "Key taken"})) == (409, "Key taken")

    def test_falls_back_to_exception_text(self):
        assert describe_http_error(_status_error(500, text="<html>oops</html>")) == (500, "Client error")

    def test_transport_error_has_no_status(self):
        error = httpx.ConnectError("Connection refused")
        assert describe_http_error(error) == (None, "Connection refused")
        assert format_failure("creating link", error) == "Error creating link: Connection refused"

    def test_format_with_status(self):
        error = _status_error(422, json={"error": "Invalid domain"})
        assert format_failure("upserting link", error) == "Error upserting link: 422 - Invalid domain"
