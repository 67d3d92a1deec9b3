from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..core.logging import get_logger
from ..core.settings import settings
from .ChapterFetcher import ChapterCache, ChapterFetcher
from .DeepLinks import build_deep_url, page_url, to_citation
from .HTTPClient import HTTPClient
from .IncarnateWordSearch import IncarnateWordSearch
from .ParagraphMatcher import extract_search_hit, find_paragraph_ids
from .text import strip_html
from .types import DeepLinkMode, SearchParams, SearchResponse, SearchResult

logger = get_logger(__name__)


class SearchManager:
    """
    Runs a search and enriches every hit with a deep link and a citation.

    The chapter cache is created per run unless one is passed in, so a chapter
    is fetched at most once for a batch of results.
    """

    def __init__(
        self,
        client: HTTPClient,
        search_provider: Optional[IncarnateWordSearch] = None,
        fetcher: Optional[ChapterFetcher] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.client = client
        self.search_provider = search_provider or IncarnateWordSearch(client)
        self.fetcher = fetcher or ChapterFetcher(client)
        self.base_url = base_url if base_url is not None else settings.base_url

    async def run(
        self, params: SearchParams, cache: Optional[ChapterCache] = None
    ) -> Dict[str, Any]:
        """
        Search, build deep links and citations, and assemble the output document.

        Returns:
            {query, total, pages, results, suggesters, citations}
        """
        response = await self.search_provider.search(params)
        cleaned = self.clean_results(response.results, params)
        deep_urls = await self.build_deep_urls(
            response.results, params, cache if cache is not None else ChapterCache()
        )
        return self.build_output(params, response, cleaned, deep_urls)

    def clean_results(
        self, results: List[SearchResult], params: SearchParams
    ) -> List[SearchResult]:
        """Copies of the results with display-cleaned snippets; raw results stay intact."""
        cleaned = []
        for result in results:
            snippet = strip_html(result.snippet) if params.strip_html else result.snippet
            if params.max_snippet is not None:
                snippet = snippet[: params.max_snippet]
            cleaned.append(replace(result, snippet=snippet))
        return cleaned

    async def build_deep_urls(
        self,
        results: List[SearchResult],
        params: SearchParams,
        cache: ChapterCache,
    ) -> List[Optional[str]]:
        """
        One deep link (or None) per result, from the raw, unstripped snippets.

        The <strong> highlight in the raw snippet is the text as it appears on
        the page, which is what the reader's highlighter and the paragraph
        matcher both need.
        """
        mode = params.deep_link
        if mode.wants_paragraph:
            await self.fetcher.fetch_chapters((r.url for r in results if r.url), cache)

        return [self.deep_url_for(result, params.q, mode, cache) for result in results]

    def deep_url_for(
        self,
        result: SearchResult,
        query: str,
        mode: DeepLinkMode,
        cache: ChapterCache,
    ) -> Optional[str]:
        if mode is DeepLinkMode.NONE or not result.url:
            return None

        url = page_url(result, self.base_url)
        search_hit = extract_search_hit(result.snippet, query)
        if mode is DeepLinkMode.SEARCH:
            return build_deep_url(url, search_hit, [], mode)

        paragraphs = cache.get(result.url)
        paragraph_ids = (
            find_paragraph_ids(paragraphs, search_hit)
            if paragraphs is not None and search_hit
            else []
        )
        if paragraphs is not None and not paragraph_ids:
            logger.warning(
                f"No paragraph match for \"{search_hit[:50]}...\" in {result.url}"
            )
        return build_deep_url(url, search_hit, paragraph_ids, mode)

    def build_output(
        self,
        params: SearchParams,
        response: SearchResponse,
        cleaned: List[SearchResult],
        deep_urls: List[Optional[str]],
    ) -> Dict[str, Any]:
        return {
            "query": params.model_dump(mode="json", by_alias=True, exclude_none=True),
            "total": response.total_count,
            "pages": response.total_pages,
            "results": [r.to_dict() for r in cleaned],
            "suggesters": response.suggesters,
            "citations": [
                to_citation(r, deep_url, self.base_url).to_dict()
                for r, deep_url in zip(cleaned, deep_urls)
            ],
        }
