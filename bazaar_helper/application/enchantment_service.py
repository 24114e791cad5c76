"""Application service answering `!bazaar <item> <enchantment>` queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from bazaar_helper.data import (
    EnchantmentTables,
    ItemEnchantments,
    ItemPageResolver,
    MatchingConfig,
    PageNotFoundError,
    ResolvedPage,
    WikiClient,
    WikiConfig,
    extract_enchantments,
    find_best_match,
    parse_page,
)

from .errors import (
    BazaarQueryError,
    EmptyPageError,
    EnchantmentNotMatchedError,
    ItemNotFoundError,
    MalformedQueryError,
    NoEnchantmentsListedError,
)

logger = logging.getLogger(__name__)

LIST_KEYWORD = "list"
LIST_SEPARATOR = " • "

MISSING_QUERY_MESSAGE = "Please specify an item and enchantment."
FORMAT_HELP_MESSAGE = "Format: !bazaar [item] [enchantment]"
ITEM_NOT_FOUND_MESSAGE = (
    'Item "{item}" not found on the wiki. Please double-check the spelling or if the item exists.'
)
FALLBACK_FETCH_FAILED_MESSAGE = 'Could not find "{title}" in The Bazaar Wiki. Please check the spelling.'
EMPTY_PAGE_MESSAGE = "Failed to load data for {item}."
NO_ENCHANTMENTS_MESSAGE = "{item} does not have any enchantments listed."
ENCHANTMENT_NOT_MATCHED_MESSAGE = '"{enchantment}" is not an enchantment available on "{item}".'
LAYOUT_CHANGED_MESSAGE = (
    "The Bazaar Wiki may be down or has changed layout. Don't worry, we have been alerted "
    "and are working on a fix. Please try again later."
)

ITEM_NOT_FOUND_ALERT = '❗ Bazaar Scraper: Item not found — "{item}" requested via query "{query}"'
FALLBACK_FETCH_FAILED_ALERT = '❗ Bazaar Scraper: Fuzzy match failed for "{title}" (query: "{query}")'
LAYOUT_CHANGED_ALERT = (
    '🚨 Bazaar Scraper Alert: Wiki layout may have changed or the site is down. User query: "{query}"'
)


@dataclass(frozen=True)
class ParsedQuery:
    raw: str
    item_name: str
    enchantment: str


def parse_query(query: str | None, tables: EnchantmentTables) -> ParsedQuery:
    """Split a chat query into item name and (alias-resolved) enchantment.

    The last whitespace-separated token is the enchantment; everything before
    it is the item name.

    Raises:
        MalformedQueryError: query is empty or has fewer than two tokens.
    """
    if not query or not query.strip():
        raise MalformedQueryError(MISSING_QUERY_MESSAGE)

    tokens = query.split()
    if len(tokens) < 2:
        raise MalformedQueryError(FORMAT_HELP_MESSAGE)

    enchantment = tables.resolve(tokens[-1].lower())
    return ParsedQuery(raw=query.strip(), item_name=" ".join(tokens[:-1]), enchantment=enchantment)


class EnchantmentQueryService:
    """Answers one query per call; no state is carried between calls."""

    def __init__(
        self,
        *,
        tables: EnchantmentTables,
        alerter: Any,
        wiki_config: WikiConfig | None = None,
        matching_config: MatchingConfig | None = None,
        client_factory: Callable[[], WikiClient] | None = None,
    ) -> None:
        self._tables = tables
        self._alerter = alerter
        self._wiki_config = wiki_config or WikiConfig()
        self._matching = matching_config or MatchingConfig()
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> WikiClient:
        return WikiClient(
            self._wiki_config.base_url,
            self._wiki_config.timeout_s,
            user_agent=self._wiki_config.user_agent,
        )

    async def answer(self, query: str | None) -> str:
        """Return the chat reply for ``query``. Never raises."""
        try:
            parsed = parse_query(query, self._tables)
            return await self._answer(parsed)
        except BazaarQueryError as exc:
            if exc.alert:
                await self._alerter.notify(exc.alert)
            return exc.message
        except Exception:
            logger.exception("[Bazaar] Scraper error for query %r", query)
            await self._alerter.notify(LAYOUT_CHANGED_ALERT.format(query=query))
            return LAYOUT_CHANGED_MESSAGE

    async def _answer(self, parsed: ParsedQuery) -> str:
        page = await self._resolve_page(parsed)
        if not page.html.strip():
            logger.error("[Bazaar] No data returned from wiki page %s", page.path)
            raise EmptyPageError(EMPTY_PAGE_MESSAGE.format(item=page.title))

        enchantments = extract_enchantments(parse_page(page.html))
        logger.info(
            "[Bazaar] %s: %s enchantments, character=%s",
            page.title, len(enchantments.entries), enchantments.character_name,
        )

        if not enchantments.entries:
            raise NoEnchantmentsListedError(NO_ENCHANTMENTS_MESSAGE.format(item=page.title))
        if parsed.enchantment.lower() == LIST_KEYWORD:
            return self._format_list(page.title, enchantments)
        return self._format_match(page.title, parsed.enchantment, enchantments)

    async def _resolve_page(self, parsed: ParsedQuery) -> ResolvedPage:
        async with self._client_factory() as client:
            resolver = ItemPageResolver(
                client,
                index_path=self._wiki_config.index_path,
                threshold=self._matching.item_threshold,
                max_index_pages=self._wiki_config.max_index_pages,
            )
            try:
                return await resolver.resolve(parsed.item_name)
            except PageNotFoundError as exc:
                if exc.reason == "fetch_failed":
                    raise ItemNotFoundError(
                        FALLBACK_FETCH_FAILED_MESSAGE.format(title=exc.title),
                        alert=FALLBACK_FETCH_FAILED_ALERT.format(title=exc.title, query=parsed.raw),
                    ) from exc
                raise ItemNotFoundError(
                    ITEM_NOT_FOUND_MESSAGE.format(item=parsed.item_name),
                    alert=ITEM_NOT_FOUND_ALERT.format(item=parsed.item_name, query=parsed.raw),
                ) from exc

    def _format_match(self, item: str, enchantment: str, enchantments: ItemEnchantments) -> str:
        match = find_best_match(enchantment.lower(), [name.lower() for name in enchantments.names])
        if match.score < self._matching.enchantment_threshold:
            logger.info("[Bazaar] %r best matched %r at %.2f", enchantment, match.candidate, match.score)
            raise EnchantmentNotMatchedError(
                ENCHANTMENT_NOT_MATCHED_MESSAGE.format(enchantment=enchantment, item=item)
            )

        entry = enchantments.entries[match.index]
        emoji = self._tables.emoji_for(entry.name)
        return (
            f"{item} ✚ {entry.name}{emoji} = {entry.effect} | "
            f"This item belongs to {enchantments.character_name}."
        )

    def _format_list(self, item: str, enchantments: ItemEnchantments) -> str:
        lines = [
            f"{entry.name}{self._tables.emoji_for(entry.name)} = {entry.effect}"
            for entry in enchantments.entries
        ]
        return f"{item} ✚ {LIST_SEPARATOR.join(lines)} | This item belongs to {enchantments.character_name}."
