"""
Thin async HTTP client for the Supadata REST API.
"""
from typing import Any, Optional

import httpx
from loguru import logger

from app.core.constants import SupadataConfig
from app.core.exceptions import ConfigurationError, NotFoundError, RateLimitError


class SupadataClient:
    """
    Authenticated JSON client for Supadata.

    Maps HTTP 429 to `RateLimitError` and HTTP 404 to `NotFoundError`; other
    error statuses raise `httpx.HTTPStatusError` and transport failures
    propagate unchanged.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = SupadataConfig.BASE_URL,
        timeout_seconds: float = SupadataConfig.REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Supadata API key.
            base_url: API root, e.g. "https://api.supadata.ai/v1".
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (used to stub the API in tests).

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not api_key:
            raise ConfigurationError("SUPADATA_API_KEY")
        self._api_key = api_key
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                SupadataConfig.API_KEY_HEADER: self._api_key,
                "Content-Type": "application/json",
            },
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        logger.debug(f"Supadata {method} {path}")
        async with self._client() as client:
            response = await client.request(method, path, params=params, json=json)

        if response.status_code == 429:
            logger.warning(f"Supadata rate limit hit on {method} {path}")
            raise RateLimitError()
        if response.status_code == 404:
            logger.warning(f"Supadata returned 404 for {method} {path}")
            raise NotFoundError()
        response.raise_for_status()
        return response.json()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=json)
