"""
Domain-specific exceptions for chat app.

Channel access reuses the groups and orders lookup errors.
"""

from apps.groups.services.exceptions import (  # noqa: F401
    GroupNotFoundError,
    NotMemberError,
)
from apps.orders.services.exceptions import OrderNotFoundError  # noqa: F401


class ChatServiceError(Exception):
    """Base exception for all chat service errors."""
    pass


class EmptyMessageError(ChatServiceError):
    """Raised when a message is blank after trimming."""
    pass


class MessageTooLongError(ChatServiceError):
    """Raised when a message exceeds the maximum length."""
    pass
