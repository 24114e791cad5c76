"""Application layer services."""

from .enchantment_service import EnchantmentQueryService, ParsedQuery, parse_query
from .errors import BazaarQueryError

__all__ = [
    "BazaarQueryError",
    "EnchantmentQueryService",
    "ParsedQuery",
    "parse_query",
]
