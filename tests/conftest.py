import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from nomad_guide.client.controller import DirectoryController
from nomad_guide.client.fetcher import CountryFetcher
from nomad_guide.client.renderer import HtmlSurface
from nomad_guide.main import app
from nomad_guide.models.directory import DirectoryConfig
from nomad_guide.routers import ajax


@pytest.fixture(autouse=True)
def no_rate_limit():
    previous = ajax.limiter.enabled
    ajax.limiter.enabled = False
    yield
    ajax.limiter.enabled = previous


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def raw_countries() -> dict:
    return {
        "portugal": {
            "name": "Portugal",
            "flag": "🇵🇹",
            "income": "Approx. €3,280 monthly",
            "cost_of_living": "Medium to High",
            "family": "Allowed",
            "tax": "NHR regime",
            "link": "https://vistos.mne.gov.pt/en/",
            "guide": "Apply at the Portuguese Consulate.",
        },
        "spain": {
            "name": "Spain",
            "flag": "🇪🇸",
            "income": "Approx. €2,100 monthly",
            "cost_of_living": "Medium",
            "family": "Allowed",
            "tax": "Beckham Law",
            "link": "https://www.exteriores.gob.es/",
            "guide": "Contact Spain's Visa Center.",
        },
    }


@pytest.fixture
def directory_config() -> DirectoryConfig:
    return DirectoryConfig(ajax_url="http://testserver/ajax", nonce="0123456789")


def success_envelope(countries: dict) -> dict:
    return {"success": True, "data": {"countries": countries}}


@pytest.fixture
def start_controller(directory_config):
    """Start a controller against a mocked ajax endpoint.

    ``handler`` receives the httpx.Request and returns an httpx.Response (or
    raises). Every request is recorded in ``controller.requests``.
    """

    def _start(handler, config: DirectoryConfig | None = None) -> DirectoryController:
        cfg = config or directory_config
        surface = HtmlSurface(cfg.strings.loading)
        requests: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        async def _run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(recording)) as http:
                controller = DirectoryController(cfg, surface, CountryFetcher(cfg, client=http))
                await controller.start()
                return controller

        controller = asyncio.run(_run())
        controller.requests = requests
        return controller

    return _start


@pytest.fixture
def serve(raw_countries):
    """Handler that answers every request with the two sample countries."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=success_envelope(raw_countries))

    return handler
