"""
Domain-specific exceptions for catalog app.

Search never lets these reach a view: a failed lookup is logged and
turned into an empty result list.
"""


class CatalogError(Exception):
    """Base exception for all catalog errors."""
    pass


class CatalogUnavailableError(CatalogError):
    """Raised when the catalog cannot be reached or answers with an error."""
    pass
