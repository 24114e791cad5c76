"""Resolve a free-text item name to its wiki page.

Two strategies, tried in order:

1. Direct: build the page slug from the name and fetch it.
2. Fuzzy: crawl the full page index, compare normalized titles against the
   normalized name, and fetch the closest page when it clears the threshold.

The crawl only runs when the direct fetch fails, and is rebuilt on every
fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .crawler import CrawlError, crawl_all_titles
from .matching import find_best_match, normalize
from .wiki_client import WikiClient, WikiError, page_path, page_slug

logger = logging.getLogger(__name__)

DEFAULT_ITEM_THRESHOLD = 0.4


class PageNotFoundError(LookupError):
    """Neither the direct nor the fuzzy lookup produced a page.

    ``reason`` is ``"no_match"`` when no title was close enough (or the index
    was unavailable) and ``"fetch_failed"`` when a title matched but its page
    could not be fetched; ``title`` then holds the matched title.
    """

    def __init__(self, item_name: str, *, reason: str, title: str | None = None) -> None:
        super().__init__(f"No wiki page for {item_name!r} ({reason})")
        self.item_name = item_name
        self.reason = reason
        self.title = title


@dataclass(frozen=True)
class ResolvedPage:
    title: str
    path: str
    html: str
    strategy: str
    score: float = 1.0


class ItemPageResolver:
    def __init__(
        self,
        client: WikiClient,
        *,
        index_path: str,
        threshold: float = DEFAULT_ITEM_THRESHOLD,
        max_index_pages: int = 200,
    ) -> None:
        self._client = client
        self._index_path = index_path
        self._threshold = threshold
        self._max_index_pages = max_index_pages

    async def resolve(self, item_name: str) -> ResolvedPage:
        path = page_path(page_slug(item_name))
        try:
            html = await self._client.fetch_page(path)
        except WikiError as exc:
            logger.info("[Resolver] Direct lookup failed for %r: %s", item_name, exc)
            return await self._resolve_fuzzy(item_name)

        return ResolvedPage(title=item_name, path=path, html=html, strategy="direct")

    async def _resolve_fuzzy(self, item_name: str) -> ResolvedPage:
        try:
            refs = await crawl_all_titles(self._client, self._index_path, max_pages=self._max_index_pages)
        except CrawlError as exc:
            logger.error("[Resolver] Failed fuzzy item lookup: %s", exc)
            raise PageNotFoundError(item_name, reason="no_match") from exc

        match = find_best_match(normalize(item_name), [normalize(ref.title) for ref in refs])
        if match.score < self._threshold:
            logger.info(
                "[Resolver] Best title for %r scored %.2f (< %.2f)",
                item_name, match.score, self._threshold,
            )
            raise PageNotFoundError(item_name, reason="no_match")

        ref = refs[match.index]
        logger.info("[Resolver] Fuzzy matched %r → %r (%.2f)", item_name, ref.title, match.score)

        path = page_path(ref.path_slug)
        try:
            html = await self._client.fetch_page(path)
        except WikiError as exc:
            logger.error("[Resolver] Fetch failed for matched page %r: %s", ref.title, exc)
            raise PageNotFoundError(item_name, reason="fetch_failed", title=ref.title) from exc

        return ResolvedPage(title=ref.title, path=path, html=html, strategy="fuzzy", score=match.score)
