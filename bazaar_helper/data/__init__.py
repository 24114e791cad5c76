"""Wiki access, matching and extraction for Bazaar Helper."""

from .config import MatchingConfig, TablesConfig, WikiConfig
from .crawler import CrawlError, WikiPageRef, crawl_all_titles
from .extractor import EnchantmentEntry, ItemEnchantments, extract_enchantments, parse_page
from .matching import MatchResult, NoCandidatesError, find_best_match, normalize, similarity
from .page_resolver import ItemPageResolver, PageNotFoundError, ResolvedPage
from .tables import ENCHANTMENT_ALIASES, ENCHANTMENT_EMOJIS, EnchantmentTables, resolve_alias
from .wiki_client import WikiClient, WikiError, page_path, page_slug

__all__ = [
    "MatchingConfig",
    "TablesConfig",
    "WikiConfig",
    "CrawlError",
    "WikiPageRef",
    "crawl_all_titles",
    "EnchantmentEntry",
    "ItemEnchantments",
    "extract_enchantments",
    "parse_page",
    "MatchResult",
    "NoCandidatesError",
    "find_best_match",
    "normalize",
    "similarity",
    "ItemPageResolver",
    "PageNotFoundError",
    "ResolvedPage",
    "ENCHANTMENT_ALIASES",
    "ENCHANTMENT_EMOJIS",
    "EnchantmentTables",
    "resolve_alias",
    "WikiClient",
    "WikiError",
    "page_path",
    "page_slug",
]
