"""
HTTP catalog client

Talks to a REST character catalog (the Rick and Morty API by default):
GET {base_url} returns {"info": {"count": N}, ...} and
GET {base_url}/{id} returns a single character record.
"""

import logging
from typing import Optional

import httpx

from .base import CatalogClient, Entity, FetchError, InvalidPayloadError
from ..config import config

logger = logging.getLogger(__name__)


class HttpCatalogClient(CatalogClient):
    """
    Async catalog client backed by httpx.

    No retries and no caching: every call is one GET. Callers decide
    what to cache.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Catalog root (falls back to config / CATALOG_URL)
            client: Pre-built httpx client, mostly for tests
        """
        self._base_url = (base_url or config.catalog.base_url).rstrip("/")
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(headers={"Accept": "application/json"})
            self._owns_client = True
        return self._client

    @property
    def name(self) -> str:
        return "http"

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_json(self, url: str, failure_message: str) -> dict:
        client = self._get_client()
        logger.debug(f"GET {url}")

        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                failure_message,
                status_code=e.response.status_code,
                url=url,
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"{failure_message} ({e.__class__.__name__})", url=url) from e

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidPayloadError(f"Response from {url} is not JSON") from e

        if not isinstance(data, dict):
            raise InvalidPayloadError(f"Response from {url} is not a JSON object")
        return data

    async def fetch_total_count(self) -> int:
        """Read info.count from the catalog root."""
        data = await self._get_json(
            self._base_url,
            "Failed to fetch total character count.",
        )
        try:
            count = int(data["info"]["count"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Catalog root has no info.count: {e!r}")

        logger.debug(f"Catalog reports {count} characters")
        return count

    async def fetch_entity(self, entity_id: int) -> Entity:
        """Fetch one character record by id."""
        data = await self._get_json(
            f"{self._base_url}/{entity_id}",
            f"Failed to fetch character with ID: {entity_id}",
        )
        return Entity.from_dict(data)

    async def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
