"""Client for The Bazaar wiki (MediaWiki HTML pages)."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote, urljoin

import httpx

from .config import WikiConfig

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
# Characters JavaScript's encodeURIComponent leaves untouched (besides alnum)
_SLUG_SAFE = "-_.!~*'()"


class WikiError(RuntimeError):
    """Raised when a wiki page cannot be fetched."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def page_slug(title: str) -> str:
    """Build the percent-encoded page slug for a display title.

    Example: "Rusty  Knife" → "Rusty_Knife"
    """
    return quote(_WHITESPACE_RE.sub("_", title.strip()), safe=_SLUG_SAFE)


def page_path(slug: str) -> str:
    return f"/wiki/{slug}"


class WikiClient:
    """Async HTTP client for wiki pages.

    Use as an async context manager; the underlying connection pool is
    closed on exit.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_s: float | None = None,
        *,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        config = WikiConfig()
        self._base_url = (base_url or config.base_url).rstrip("/")
        self._timeout_s = timeout_s if timeout_s is not None else config.timeout_s
        self._user_agent = user_agent or config.user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "WikiClient":
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout_s,
            headers={"User-Agent": self._user_agent},
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def absolute_url(self, href: str) -> str:
        """Resolve a page-relative link against the wiki root."""
        return urljoin(self._base_url + "/", href)

    async def fetch_page(self, path: str) -> str:
        """Fetch a page by path (``/wiki/...``) or absolute URL and return its HTML.

        Raises:
            WikiError: host unreachable, timeout, or non-2xx status.
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        logger.info("[Wiki] GET %s", path)
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise WikiError(
                f"Wiki returned HTTP {exc.response.status_code} for {path}",
                url=str(exc.request.url),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise WikiError(f"Wiki request failed for {path}: {exc}", url=path) from exc

        return response.text
