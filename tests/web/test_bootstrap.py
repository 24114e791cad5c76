"""Tests for the composition root."""

from unittest.mock import patch

from bazaar_helper.application import EnchantmentQueryService
from bazaar_helper.bootstrap import container as container_module


def test_container_is_built_once(monkeypatch):
    monkeypatch.delenv("BAZAAR_TABLES_PATH", raising=False)
    monkeypatch.delenv("BAZAAR_ALERT_WEBHOOK_URL", raising=False)

    with patch.object(container_module, "_CONTAINER", None):
        first = container_module.get_container()
        second = container_module.get_container()

        assert first is second
        assert isinstance(first.enchantments, EnchantmentQueryService)
        assert first.tables.resolve("crit") == "Deadly"
        assert first.alerter.enabled is False
