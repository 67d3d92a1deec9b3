"""
Chapter retrieval for paragraph matching.

Fetches chapter bodies from the chapter API and turns them into the paragraph
list the reader page shows. A chapter that cannot be fetched or has no
content is "unavailable" (None), which is different from a chapter with zero
paragraphs ([]).
"""

import asyncio
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional

from ..core.logging import get_logger
from .HTTPClient import HTTPClient, NetworkError, ProviderError
from .MarkdownRenderer import MarkdownRenderer
from .types import ChapterContent

logger = get_logger(__name__)

Paragraphs = Optional[List[str]]


class ChapterCache:
    """
    Paragraph lists keyed by chapter path, for the lifetime of one run.

    Stores None for chapters that were attempted and found unavailable, so
    they are not retried either.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Paragraphs] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, path: str) -> Paragraphs:
        return self._entries.get(path)

    def set(self, path: str, paragraphs: Paragraphs) -> None:
        self._entries[path] = paragraphs


class ChapterFetcher:
    """Fetches chapters and renders them to paragraph lists."""

    chapter_query = {"source": "", "onlyOrignalText": "false"}

    def __init__(
        self,
        client: HTTPClient,
        renderer: Optional[MarkdownRenderer] = None,
    ) -> None:
        self.client = client
        self.renderer = renderer or MarkdownRenderer()

    def chapter_api_path(self, chapter_url: str) -> str:
        # chapter_url looks like /cwsa/22/the-divine-life
        return f"/api{chapter_url}"

    async def fetch_paragraphs(self, chapter_url: str) -> Paragraphs:
        """
        Fetch one chapter and return its paragraphs as the reader page numbers them.

        Returns:
            The paragraph HTML fragments, or None if the chapter is unavailable.
        """
        api_path = self.chapter_api_path(chapter_url)
        try:
            data = await self.client.get(api_path, params=dict(self.chapter_query))
        except (ProviderError, NetworkError) as e:
            logger.warning(f"Chapter unavailable {api_path}: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error fetching {api_path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected chapter payload for {api_path}")
            return None

        paragraphs = self.renderer.chapter_paragraphs(ChapterContent.from_api(data))
        if paragraphs is None:
            logger.warning(f"No txt or items field in response for {api_path}")
        return paragraphs

    async def fetch_chapters(
        self, chapter_urls: Iterable[str], cache: ChapterCache
    ) -> ChapterCache:
        """
        Fetch every distinct chapter not yet in the cache, all at once.

        One failing chapter never affects the others; the call returns once
        every fetch has settled.
        """
        pending = [url for url in dict.fromkeys(chapter_urls) if url and url not in cache]
        if not pending:
            return cache

        logger.info(f"Fetching {len(pending)} chapters for paragraph matching...")
        start_time = datetime.now()

        async def _settle(url: str) -> Paragraphs:
            try:
                return await self.fetch_paragraphs(url)
            except Exception as e:
                logger.error(f"Critical error fetching chapter {url}: {e}")
                return None

        results = await asyncio.gather(*(_settle(url) for url in pending))

        for url, paragraphs in zip(pending, results):
            cache.set(url, paragraphs)
            logger.info(f"  {url}: {len(paragraphs) if paragraphs is not None else 'FAILED'} paragraphs")

        fetch_time_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        failed = sum(1 for p in results if p is None)
        logger.info(
            f"Fetched {len(pending) - failed}/{len(pending)} chapters in {fetch_time_ms}ms",
            extra={
                "chapter_summary": {
                    "successful": len(pending) - failed,
                    "failed": failed,
                    "total": len(pending),
                    "ms": fetch_time_ms,
                }
            },
        )
        return cache
