"""Dependency composition root."""

from __future__ import annotations

from dataclasses import dataclass

from bazaar_helper.application import EnchantmentQueryService
from bazaar_helper.data import EnchantmentTables, MatchingConfig, WikiConfig
from bazaar_helper.observability import WebhookAlerter


@dataclass(frozen=True)
class AppContainer:
    """Wired application dependencies."""

    enchantments: EnchantmentQueryService
    tables: EnchantmentTables
    alerter: WebhookAlerter


_CONTAINER: AppContainer | None = None


def get_container() -> AppContainer:
    global _CONTAINER
    if _CONTAINER is not None:
        return _CONTAINER

    tables = EnchantmentTables.from_env()
    alerter = WebhookAlerter()
    service = EnchantmentQueryService(
        tables=tables,
        alerter=alerter,
        wiki_config=WikiConfig(),
        matching_config=MatchingConfig(),
    )

    _CONTAINER = AppContainer(enchantments=service, tables=tables, alerter=alerter)
    return _CONTAINER
