"""Bazaar Helper: enchantment lookups for The Bazaar wiki."""

__version__ = "1.0.0"
