"""User-facing outcomes of an enchantment query.

Each error carries the sentence sent back to chat and, when operators should
hear about it, an alert message.
"""

from __future__ import annotations


class BazaarQueryError(Exception):
    def __init__(self, message: str, *, alert: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.alert = alert

    def __str__(self) -> str:
        return self.message


class MalformedQueryError(BazaarQueryError):
    pass


class ItemNotFoundError(BazaarQueryError):
    pass


class EmptyPageError(BazaarQueryError):
    pass


class NoEnchantmentsListedError(BazaarQueryError):
    pass


class EnchantmentNotMatchedError(BazaarQueryError):
    pass
