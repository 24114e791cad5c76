"""Configuration for The Bazaar wiki integration."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

DEFAULT_WIKI_BASE_URL = "https://thebazaar.wiki.gg"
DEFAULT_INDEX_PATH = "/wiki/Special:AllPages"
DEFAULT_USER_AGENT = "bazaar-helper/1.0 (+https://thebazaar.wiki.gg)"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _get_base_url() -> str:
    return os.getenv("BAZAAR_WIKI_BASE_URL", DEFAULT_WIKI_BASE_URL).rstrip("/")


@dataclass(frozen=True)
class WikiConfig:
    base_url: str = field(default_factory=_get_base_url)
    index_path: str = field(default_factory=lambda: os.getenv("BAZAAR_WIKI_INDEX_PATH", DEFAULT_INDEX_PATH))
    user_agent: str = field(default_factory=lambda: os.getenv("BAZAAR_WIKI_USER_AGENT", DEFAULT_USER_AGENT))
    timeout_s: float = field(default_factory=lambda: _env_float("BAZAAR_WIKI_TIMEOUT_S", 15.0))
    max_index_pages: int = field(default_factory=lambda: _env_int("BAZAAR_CRAWL_MAX_PAGES", 200))


@dataclass(frozen=True)
class MatchingConfig:
    """Similarity thresholds for fuzzy lookups.

    ``item_threshold`` gates the fallback page match, ``enchantment_threshold``
    gates the enchantment-name match on a resolved page.
    """

    item_threshold: float = field(default_factory=lambda: _env_float("BAZAAR_ITEM_MATCH_THRESHOLD", 0.4))
    enchantment_threshold: float = field(
        default_factory=lambda: _env_float("BAZAAR_ENCHANTMENT_MATCH_THRESHOLD", 0.5)
    )


@dataclass(frozen=True)
class TablesConfig:
    path: Path | None = field(
        default_factory=lambda: Path(os.environ["BAZAAR_TABLES_PATH"]) if os.getenv("BAZAAR_TABLES_PATH") else None
    )
