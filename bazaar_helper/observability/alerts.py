"""Operational alerts posted to a chat webhook, with safe no-op fallback."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

import httpx

logger = logging.getLogger(__name__)

# Discord rejects message content over this length.
_MAX_CONTENT_LENGTH = 2000


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AlertConfig:
    """Runtime config sourced from environment variables."""

    enabled: bool
    webhook_url: str | None
    timeout_s: float

    @classmethod
    def from_env(cls) -> "AlertConfig":
        webhook_url = (os.getenv("BAZAAR_ALERT_WEBHOOK_URL") or "").strip() or None
        enabled = _env_bool("BAZAAR_ALERTS_ENABLED", bool(webhook_url))
        timeout_s = float(os.getenv("BAZAAR_ALERT_TIMEOUT_S") or "10")
        return cls(enabled=enabled, webhook_url=webhook_url, timeout_s=timeout_s)


class WebhookAlerter:
    """Best-effort alert sink.

    ``notify`` never raises: delivery failures are logged and dropped so an
    alert can't change the response a user gets.
    """

    def __init__(
        self,
        config: AlertConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or AlertConfig.from_env()
        self._transport = transport
        if self._config.enabled and not self._config.webhook_url:
            logger.warning("Alerts disabled: BAZAAR_ALERT_WEBHOOK_URL is required.")

    @property
    def enabled(self) -> bool:
        return self._config.enabled and bool(self._config.webhook_url)

    async def notify(self, message: str) -> None:
        logger.warning("[Alerts] %s", message)
        if not self.enabled:
            return

        payload = {"content": message[:_MAX_CONTENT_LENGTH]}
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_s, transport=self._transport) as client:
                response = await client.post(self._config.webhook_url, json=payload)
                response.raise_for_status()
        except Exception as exc:
            logger.error("[Alerts] Failed to send alert: %s", exc)
