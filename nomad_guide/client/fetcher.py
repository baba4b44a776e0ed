"""Ajax client for the country list endpoint."""

import logging
from typing import Any

import httpx

from nomad_guide.client.errors import ConfigurationError, LogicalFailure, TransportError
from nomad_guide.models.directory import DirectoryConfig

logger = logging.getLogger(__name__)

COUNTRY_LIST_ACTION = "ssm_dng_get_country_list"


class CountryFetcher:
    def __init__(self, config: DirectoryConfig, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client

    async def post(self, action: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send one ajax action and return the ``data`` of a success envelope.

        Raises ConfigurationError, TransportError or LogicalFailure.
        """
        config = self._config
        error_title = config.strings.error_title
        if not config.ajax_url or not config.nonce:
            logger.error("Missing ajax_url or nonce in directory config")
            raise ConfigurationError(f"{error_title}: AJAX information is unavailable.")

        body = {"action": action, "nonce": config.nonce, **(payload or {})}
        try:
            if self._client is not None:
                response = await self._client.post(config.ajax_url, json=body)
            else:
                async with httpx.AsyncClient(timeout=config.timeout_seconds) as client:
                    response = await client.post(config.ajax_url, json=body)
            response.raise_for_status()
            envelope = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{error_title}: Network error or {e.response.reason_phrase}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a body that is not JSON
            detail = str(e) or type(e).__name__
            raise TransportError(f"{error_title}: Network error or {detail}") from e

        if not isinstance(envelope, dict):
            raise LogicalFailure(f"{error_title}: Server error.")

        data = envelope.get("data")
        if not envelope.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            raise LogicalFailure(message or f"{error_title}: Server error.")
        return data if isinstance(data, dict) else {}

    async def fetch_countries(self) -> dict[str, Any]:
        data = await self.post(COUNTRY_LIST_ACTION)
        countries = data.get("countries")
        if not isinstance(countries, dict):
            raise LogicalFailure(f"{self._config.strings.error_title}: Server error.")
        return countries
