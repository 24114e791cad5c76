from .alerts import AlertConfig, WebhookAlerter

__all__ = ["AlertConfig", "WebhookAlerter"]
