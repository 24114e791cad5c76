"""Enchantment alias and decoration tables.

Both tables are static configuration: they are built once when the process
starts and exposed as read-only mappings. Request handlers receive the same
``EnchantmentTables`` instance and never mutate it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .config import TablesConfig

logger = logging.getLogger(__name__)

# Slang → canonical enchantment name (keys are lowercase)
ENCHANTMENT_ALIASES: Mapping[str, str] = MappingProxyType({
    "invincible": "Radiant",
    "crit": "Deadly",
    "fast": "Turbo",
    "haste": "Turbo",
    "poison": "Toxic",
    "shield": "Shielded",
    "fire": "Fiery",
    "burn": "Fiery",
    "ice": "Icy",
    "freeze": "Icy",
    "cold": "Icy",
    "gold": "Golden",
    "health": "Restorative",
    "heal": "Restorative",
    "slow": "Heavy",
    "damage": "Obsidian",
})

# Canonical enchantment name → chat decoration
ENCHANTMENT_EMOJIS: Mapping[str, str] = MappingProxyType({
    "Turbo": "⚡",
    "Toxic": "☠️",
    "Shielded": "🛡️",
    "Fiery": "🔥",
    "Deadly": "🎯",
    "Icy": "❄️",
    "Golden": "🥇",
    "Restorative": "💚",
    "Heavy": "⏳",
    "Radiant": "⛔",
    "Obsidian": "🗡️",
})


def resolve_alias(token: str, aliases: Mapping[str, str] = ENCHANTMENT_ALIASES) -> str:
    """Return the canonical enchantment for ``token``, or ``token`` unchanged."""
    return aliases.get(token.lower(), token)


@dataclass(frozen=True)
class EnchantmentTables:
    aliases: Mapping[str, str] = field(default_factory=lambda: ENCHANTMENT_ALIASES)
    emojis: Mapping[str, str] = field(default_factory=lambda: ENCHANTMENT_EMOJIS)

    @classmethod
    def from_env(cls) -> "EnchantmentTables":
        config = TablesConfig()
        if config.path is None:
            return cls()
        return cls.from_file(config.path)

    @classmethod
    def from_file(cls, path: Path) -> "EnchantmentTables":
        """Load overrides from a JSON file with ``aliases``/``emojis`` objects.

        Missing sections fall back to the built-in tables. An unreadable file
        is logged and the defaults are used.
        """
        if not path.exists():
            logger.warning("[Tables] Tables file not found: %s", path)
            return cls()

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("[Tables] Failed to load %s: %s", path, exc)
            return cls()

        aliases = _string_mapping(raw.get("aliases")) if isinstance(raw, dict) else None
        emojis = _string_mapping(raw.get("emojis")) if isinstance(raw, dict) else None
        tables = cls(
            aliases=MappingProxyType({k.lower(): v for k, v in aliases.items()}) if aliases else ENCHANTMENT_ALIASES,
            emojis=MappingProxyType(dict(emojis)) if emojis else ENCHANTMENT_EMOJIS,
        )
        logger.info("[Tables] Loaded %s aliases, %s emojis from %s", len(tables.aliases), len(tables.emojis), path)
        return tables

    def resolve(self, token: str) -> str:
        return resolve_alias(token, self.aliases)

    def emoji_for(self, enchantment: str) -> str:
        return self.emojis.get(enchantment, "")


def _string_mapping(value: Any) -> dict[str, str] | None:
    if not isinstance(value, dict):
        return None
    return {str(k): str(v) for k, v in value.items()}
