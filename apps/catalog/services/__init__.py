"""
Catalog app services layer.

Read-only search over the external card catalog.
"""

from .exceptions import (
    CatalogError,
    CatalogUnavailableError,
)

from .card_search import (
    CatalogCard,
    parse_card,
    fetch_cards,
    search_cards,
)


__all__ = [
    # Exceptions
    'CatalogError',
    'CatalogUnavailableError',

    # Card Search
    'CatalogCard',
    'parse_card',
    'fetch_cards',
    'search_cards',
]
