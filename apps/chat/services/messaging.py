"""
Chat channel service.

Each group has one group channel plus one channel per order. Messages
are append-only; clients poll ``list_messages`` for new ones.
"""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from django.conf import settings

from apps.accounts.models import User
from apps.chat.models import ChatMessage, MAX_MESSAGE_LENGTH
from apps.groups.models import Group
from apps.orders.models import Order

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    OrderNotFoundError,
    EmptyMessageError,
    MessageTooLongError,
)

logger = logging.getLogger(__name__)


def _get_channel_group(group_id: UUID, user: User, order_id: Optional[UUID]) -> Group:
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.has_member(user):
        raise NotMemberError("You must be a member of this group")

    if order_id is not None and not Order.objects.filter(id=order_id, group=group).exists():
        raise OrderNotFoundError(f"Order with ID {order_id} not found in this group")

    return group


def send_message(
    *,
    group_id: UUID,
    user: User,
    text: str,
    order_id: Optional[UUID] = None
) -> ChatMessage:
    """
    Post a message to a group or order channel (member only).

    Args:
        group_id: UUID of the group
        user: Member sending the message
        text: Message text; surrounding whitespace is dropped
        order_id: Order channel, or None for the group channel

    Returns:
        Created ChatMessage

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
        OrderNotFoundError: If the order is not part of the group
        EmptyMessageError: If text is blank
        MessageTooLongError: If text is longer than 2000 characters
    """
    text = (text or '').strip()
    if not text:
        raise EmptyMessageError("Message cannot be empty")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise MessageTooLongError(f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters")

    group = _get_channel_group(group_id, user, order_id)

    message = ChatMessage.objects.create(
        group=group,
        order_id=order_id,
        sender=user,
        sender_name=user.get_display_name(),
        message=text,
    )

    logger.debug("Message %s posted to group %s order %s", message.id, group.id, order_id)
    return message


def list_messages(
    *,
    group_id: UUID,
    user: User,
    order_id: Optional[UUID] = None,
    limit: Optional[int] = None
) -> List[ChatMessage]:
    """
    Most recent messages of a channel, newest first (member only).

    The group channel never includes order messages.

    Args:
        limit: Clamped to 1..CHAT_HISTORY_LIMIT; defaults to the maximum

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
        OrderNotFoundError: If the order is not part of the group
    """
    group = _get_channel_group(group_id, user, order_id)

    max_limit = settings.CHAT_HISTORY_LIMIT
    limit = max_limit if limit is None else max(1, min(limit, max_limit))

    queryset = (
        ChatMessage.objects
        .filter(group=group)
        .select_related('sender')
        .order_by('-created_date', '-id')
    )
    if order_id is None:
        queryset = queryset.filter(order_id__isnull=True)
    else:
        queryset = queryset.filter(order_id=order_id)

    return list(queryset[:limit])


def chronological(messages: Iterable[ChatMessage]) -> List[ChatMessage]:
    """Oldest first, for display."""
    return sorted(messages, key=lambda m: m.created_date)
