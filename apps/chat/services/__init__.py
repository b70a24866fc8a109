"""
Chat app services layer.
"""

from .exceptions import (
    ChatServiceError,
    EmptyMessageError,
    MessageTooLongError,
    GroupNotFoundError,
    NotMemberError,
    OrderNotFoundError,
)

from .messaging import (
    send_message,
    list_messages,
    chronological,
)


__all__ = [
    # Exceptions
    'ChatServiceError',
    'EmptyMessageError',
    'MessageTooLongError',
    'GroupNotFoundError',
    'NotMemberError',
    'OrderNotFoundError',

    # Messaging
    'send_message',
    'list_messages',
    'chronological',
]
