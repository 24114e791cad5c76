"""Crawler for the wiki's ``Special:AllPages`` index."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup

from .wiki_client import WikiClient, WikiError

logger = logging.getLogger(__name__)

_PAGE_LINK_SELECTOR = "#mw-content-text li a"
_NEXT_PAGE_SELECTOR = 'a[href*="Special:AllPages?from="]'
_WIKI_PREFIX = "/wiki/"


class CrawlError(RuntimeError):
    """Raised when the index yields no pages at all."""


@dataclass(frozen=True)
class WikiPageRef:
    title: str
    path_slug: str


def parse_index_page(html: str) -> tuple[list[WikiPageRef], str | None]:
    """Extract page refs and the next-page link from one index page."""
    soup = BeautifulSoup(html, "html.parser")

    refs: list[WikiPageRef] = []
    for link in soup.select(_PAGE_LINK_SELECTOR):
        title = link.get_text().strip()
        href = link.get("href") or ""
        if not title or _WIKI_PREFIX not in href:
            continue
        refs.append(WikiPageRef(title=title, path_slug=href.replace(_WIKI_PREFIX, "", 1)))

    # The last pager link is "Next page"; the first may be "Previous page".
    next_links = soup.select(_NEXT_PAGE_SELECTOR)
    next_href = next_links[-1].get("href") if next_links else None
    return refs, next_href or None


async def crawl_all_titles(
    client: WikiClient,
    start_path: str,
    *,
    max_pages: int = 200,
) -> list[WikiPageRef]:
    """Walk the paginated index and return every page ref in discovery order.

    A failure on a later index page ends the walk with the refs gathered so
    far. Visited URLs are tracked so cyclic "next" links terminate.

    Raises:
        CrawlError: the first index page could not be fetched, or the index
            listed no pages.
    """
    visited: set[str] = set()
    refs: list[WikiPageRef] = []
    url: str | None = client.absolute_url(start_path)

    while url and url not in visited:
        if len(visited) >= max_pages:
            logger.warning("[Crawler] Stopping after %s index pages", max_pages)
            break
        visited.add(url)

        try:
            html = await client.fetch_page(url)
        except WikiError as exc:
            if len(visited) == 1:
                raise CrawlError(f"Could not load wiki index: {exc}") from exc
            logger.error("[Crawler] Failed to fetch index page %s: %s", url, exc)
            break

        try:
            page_refs, next_href = parse_index_page(html)
        except Exception as exc:
            if len(visited) == 1:
                raise
            logger.error("[Crawler] Failed to parse index page %s: %s", url, exc)
            break

        refs.extend(page_refs)
        url = client.absolute_url(next_href) if next_href else None

    if not refs:
        raise CrawlError("No valid items found from wiki.")

    logger.info("[Crawler] Collected %s titles from %s index pages", len(refs), len(visited))
    return refs
