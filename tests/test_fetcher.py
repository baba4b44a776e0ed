import asyncio
import json

import httpx
import pytest

from nomad_guide.client.errors import ConfigurationError, LogicalFailure, TransportError
from nomad_guide.client.fetcher import COUNTRY_LIST_ACTION, CountryFetcher
from nomad_guide.models.directory import DirectoryConfig

TITLE = "Sorry, Something Went Wrong"


def _fetch(config: DirectoryConfig, handler):
    calls = []

    def recording(request):
        calls.append(request)
        return handler(request)

    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(recording)) as http:
            return await CountryFetcher(config, client=http).fetch_countries()

    return asyncio.run(_run()), calls


def _fetch_error(config: DirectoryConfig, handler):
    with pytest.raises(Exception) as excinfo:
        _fetch(config, handler)
    return excinfo.value


class TestSuccess:

    def test_returns_country_mapping(self, directory_config, serve, raw_countries):
        countries, _ = _fetch(directory_config, serve)
        assert countries == raw_countries

    def test_request_carries_action_and_nonce(self, directory_config, serve):
        _, calls = _fetch(directory_config, serve)
        assert len(calls) == 1
        request = calls[0]
        assert request.method == "POST"
        assert str(request.url) == "http://testserver/ajax"
        assert json.loads(request.content) == {
            "action": COUNTRY_LIST_ACTION,
            "nonce": directory_config.nonce,
        }


class TestConfigurationError:

    @pytest.mark.parametrize("config", [
        DirectoryConfig(ajax_url="", nonce="abc"),
        DirectoryConfig(ajax_url="http://testserver/ajax", nonce=""),
    ])
    def test_fails_before_any_request(self, config, serve):
        calls = []

        def handler(request):
            calls.append(request)
            return serve(request)

        error = _fetch_error(config, handler)
        assert isinstance(error, ConfigurationError)
        assert error.message == f"{TITLE}: AJAX information is unavailable."
        assert calls == []


class TestTransportError:

    def test_network_failure(self, directory_config):
        def handler(request):
            raise httpx.ConnectError("Connection refused")

        error = _fetch_error(directory_config, handler)
        assert isinstance(error, TransportError)
        assert error.message == f"{TITLE}: Network error or Connection refused"

    def test_timeout(self, directory_config):
        def handler(request):
            raise httpx.ReadTimeout("timed out")

        error = _fetch_error(directory_config, handler)
        assert isinstance(error, TransportError)

    def test_http_error_status_uses_reason_phrase(self, directory_config):
        error = _fetch_error(directory_config, lambda r: httpx.Response(403, text="-1"))
        assert isinstance(error, TransportError)
        assert error.message == f"{TITLE}: Network error or Forbidden"

    def test_body_that_is_not_json(self, directory_config):
        error = _fetch_error(directory_config, lambda r: httpx.Response(200, text="<html>"))
        assert isinstance(error, TransportError)
        assert error.message.startswith(f"{TITLE}: Network error or ")


class TestLogicalFailure:

    def test_uses_server_message(self, directory_config):
        envelope = {"success": False, "data": {"message": "You do not have permission to perform this action."}}
        error = _fetch_error(directory_config, lambda r: httpx.Response(200, json=envelope))
        assert isinstance(error, LogicalFailure)
        assert error.message == "You do not have permission to perform this action."

    @pytest.mark.parametrize("envelope", [
        {"success": False},
        {"success": False, "data": {}},
        {"success": False, "data": "nope"},
        ["not", "an", "object"],
    ])
    def test_falls_back_to_generic_message(self, directory_config, envelope):
        error = _fetch_error(directory_config, lambda r: httpx.Response(200, json=envelope))
        assert isinstance(error, LogicalFailure)
        assert error.message == f"{TITLE}: Server error."

    def test_success_without_countries(self, directory_config):
        error = _fetch_error(directory_config, lambda r: httpx.Response(200, json={"success": True, "data": {}}))
        assert isinstance(error, LogicalFailure)
        assert error.message == f"{TITLE}: Server error."
