"""Shared fixtures: an in-memory wiki served through httpx.MockTransport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from bazaar_helper.data import WikiClient

WIKI_BASE_URL = "https://thebazaar.wiki.gg"


def item_page(
    *,
    character: str | None = "Pygmalien",
    enchantments: list[tuple[str, str]] | None = None,
) -> str:
    """Minimal MediaWiki item page with an infobox and an enchantment table."""
    infobox = ""
    if character is not None:
        infobox = f"""
        <aside class="portable-infobox">
          <section><h3>Type</h3><div>Weapon</div></section>
          <section><h3>Collection</h3><div> {character} </div></section>
        </aside>
        """
    rows = "".join(
        f"<tr><td> {name} </td><td>{effect}</td></tr>" for name, effect in (enchantments or [])
    )
    return f"""
    <html><body><div id="mw-content-text">
      {infobox}
      <table class="wikitable"><caption>Tiers</caption>
        <tr><td>Bronze</td><td>3 damage</td></tr>
      </table>
      <table class="wikitable"><caption>Enchantments</caption>
        <tr><th>Enchantment</th><th>Effect</th></tr>
        {rows}
      </table>
    </div></body></html>
    """


def index_page(links: list[tuple[str, str]], next_from: str | None = None) -> str:
    """One page of Special:AllPages. ``links`` is a list of (title, slug)."""
    items = "".join(f'<li><a href="/wiki/{slug}" title="{title}">{title}</a></li>' for title, slug in links)
    nav = ""
    if next_from is not None:
        nav = (
            '<div class="mw-allpages-nav">'
            '<a href="/wiki/Special:AllPages?from=Aaa">Previous page</a> | '
            f'<a href="/wiki/Special:AllPages?from={next_from}">Next page ({next_from})</a>'
            "</div>"
        )
    return f"""
    <html><body>
      <a href="/wiki/Main_Page">Main Page</a>
      <div id="mw-content-text">
        {nav}
        <ul class="mw-allpages-chunk">{items}</ul>
        <ul><li><a href="https://example.com/external">Elsewhere</a></li></ul>
      </div>
    </body></html>
    """


class FakeWiki:
    """Serves ``pages`` keyed by ``path`` or ``path?query``; records requests.

    Keys in ``down`` fail with a transport error, keys in ``broken`` with a
    non-httpx exception.
    """

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages: dict[str, str] = dict(pages or {})
        self.requests: list[str] = []
        self.down: set[str] = set()
        self.broken: set[str] = set()

    def _handle(self, request: httpx.Request) -> httpx.Response:
        key = request.url.path
        if request.url.query:
            key = f"{key}?{request.url.query.decode()}"
        self.requests.append(key)
        if key in self.down:
            raise httpx.ConnectError("connection refused", request=request)
        if key in self.broken:
            raise RuntimeError("unexpected response from upstream")
        if key in self.pages:
            return httpx.Response(200, text=self.pages[key])
        return httpx.Response(404, text="There is currently no text in this page.")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self) -> WikiClient:
        return WikiClient(WIKI_BASE_URL, 5, transport=self.transport)


@pytest.fixture
def fake_wiki() -> FakeWiki:
    return FakeWiki()


@pytest.fixture
def client_factory(fake_wiki: FakeWiki) -> Callable[[], WikiClient]:
    return fake_wiki.client
