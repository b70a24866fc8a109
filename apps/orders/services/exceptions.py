"""
Domain-specific exceptions for orders app.

Membership and ownership failures reuse the groups exceptions, since
the group decides who may touch its orders.
"""

from apps.groups.services.exceptions import (  # noqa: F401
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    CascadeDeleteError,
)


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Raised when an order does not exist."""
    pass


class CardNotFoundError(OrdersServiceError):
    """Raised when an order card does not exist."""
    pass


class OrderClosedError(OrdersServiceError):
    """Raised when cards are changed on an order that is not open or past its deadline."""
    pass


class InvalidOrderDataError(OrdersServiceError):
    """Raised when order input breaks a business rule."""
    pass
