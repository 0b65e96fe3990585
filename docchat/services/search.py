"""
Azure Cognitive Search client.

Issues a single POST per query against the index's docs/search endpoint
and returns the raw hit dictionaries. Any failure is raised as
SearchServiceError; callers decide how to degrade.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from docchat.core.config import Settings
from docchat.services.http import ServiceError, error_message
from docchat.utils.logging import get_logger

logger = get_logger("docchat.services.search")


class SearchServiceError(ServiceError):
    """Transport failure, non-2xx status, or malformed search response."""


class SearchClient:
    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.endpoint = settings.azure_search_endpoint.rstrip("/")
        self.index_name = settings.azure_search_index
        self.api_key = settings.azure_search_api_key
        self.api_version = settings.azure_search_api_version
        self._http = http_client

    @property
    def url(self) -> str:
        return f"{self.endpoint}/indexes/{self.index_name}/docs/search"

    async def search(
        self,
        query: str,
        top: int,
        select: Sequence[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Return the ``value`` array of the search response."""
        body: dict[str, Any] = {"search": query, "top": top}
        if select:
            body["select"] = ", ".join(select)
        logger.debug("[SEARCH] top=%d query=%s", top, query[:80])

        try:
            response = await self._http.post(
                self.url,
                params={"api-version": self.api_version},
                json=body,
                headers={"Content-Type": "application/json", "api-key": self.api_key},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise SearchServiceError(
                f"Search returned {e.response.status_code}: {error_message(e)}"
            ) from e
        except httpx.HTTPError as e:
            raise SearchServiceError(f"Search request failed: {error_message(e)}") from e
        except ValueError as e:
            raise SearchServiceError("Search response is not valid JSON") from e

        hits = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(hits, list):
            raise SearchServiceError("Search response has no 'value' array")
        return [hit for hit in hits if isinstance(hit, dict)]
