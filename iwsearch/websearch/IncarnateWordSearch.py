"""
Incarnate Word search API client.

Sends a validated SearchParams to /api/v2/search and parses the payload into
a SearchResponse. Request failures propagate as ProviderError / NetworkError.
"""

from datetime import datetime

from ..core.logging import get_logger
from .HTTPClient import HTTPClient
from .types import SearchParams, SearchResponse

logger = get_logger(__name__)


class IncarnateWordSearch:
    """Search provider backed by the Incarnate Word v2 search endpoint."""

    provider_name = "IncarnateWord"
    search_path = "/api/v2/search"

    def __init__(self, client: HTTPClient) -> None:
        self.client = client

    def search_url(self, params: SearchParams) -> str:
        return f"{self.search_path}?{params.to_query()}"

    async def search(self, params: SearchParams) -> SearchResponse:
        start_time = datetime.now()
        logger.info(f"Performing {self.provider_name} search for: '{params.q}' (page {params.page})")

        data = await self.client.get(self.search_url(params))
        if not isinstance(data, dict):
            logger.warning(f"Unexpected search payload type: {type(data).__name__}")
            data = {}

        response = SearchResponse.from_api(data)
        search_time_ms = int((datetime.now() - start_time).total_seconds() * 1000)

        if not response.results:
            logger.warning(f"No results found for query: '{params.q}'")
        logger.info(
            f"Search returned {len(response.results)} results in {search_time_ms}ms",
            extra={"total": response.total_count, "pages": response.total_pages},
        )
        return response
