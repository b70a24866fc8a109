"""
Order management service.

Handles order creation, owner-only status/total changes and deletion.
Any member may create an order; only the group owner manages it.
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Dict
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from apps.accounts.models import User
from apps.groups.models import Group
from apps.groups.services import CascadePhase, run_cascade
from apps.orders.models import Order, OrderCard, OrderStatus, Currency

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    OrderNotFoundError,
    InvalidOrderDataError,
)

logger = logging.getLogger(__name__)


def _get_member_group(group_id: UUID, user: User) -> Group:
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.has_member(user):
        raise NotMemberError("You must be a member of this group")
    return group


def _get_order(order_id: UUID, *, for_update: bool = False) -> Order:
    queryset = Order.objects.select_related('group', 'group__owner', 'created_by')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))
    try:
        return queryset.get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def _require_owner(order: Order, user: User, action: str) -> None:
    if not order.group.is_owner(user):
        raise InsufficientPermissionsError(f"Only the group owner can {action}")


def get_order_for_member(*, order_id: UUID, user: User) -> Order:
    """
    Get an order of a group the user belongs to.

    Raises:
        OrderNotFoundError: If order doesn't exist
        NotMemberError: If user is not a member of the order's group
    """
    order = _get_order(order_id)
    if not order.group.has_member(user):
        raise NotMemberError("You must be a member of this group")
    return order


def get_group_orders(*, group_id: UUID, user: User) -> QuerySet[Order]:
    """
    Orders of a group, newest first, annotated with ``card_count``.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
    """
    group = _get_member_group(group_id, user)

    return (
        Order.objects
        .filter(group=group)
        .select_related('created_by', 'group')
        .annotate(card_count=Count('cards'))
        .order_by('-created_at')
    )


@transaction.atomic
def create_order(
    *,
    group_id: UUID,
    user: User,
    title: str,
    deadline: datetime,
    currency: str = Currency.USD,
    notes: str = ''
) -> Order:
    """
    Open a new order in a group (member only).

    Args:
        group_id: UUID of the owning group
        user: Member creating the order
        title: Order title (trimmed, required)
        deadline: Last moment cards can be added
        currency: One of USD, EUR, BRL, GBP
        notes: Optional free text

    Returns:
        Created Order with status ``open``

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
        InvalidOrderDataError: If title, deadline or currency is invalid
    """
    group = _get_member_group(group_id, user)

    title = (title or '').strip()
    if not title:
        raise InvalidOrderDataError("Title is required")
    if deadline is None:
        raise InvalidOrderDataError("Deadline is required")
    if currency not in Currency.values:
        raise InvalidOrderDataError(
            f"Invalid currency. Must be one of: {', '.join(Currency.values)}"
        )

    order = Order.objects.create(
        group=group,
        created_by=user,
        title=title,
        deadline=deadline,
        currency=currency,
        notes=(notes or '').strip(),
        status=OrderStatus.OPEN,
    )

    logger.info("Order %s opened in group %s by %s", order.id, group.id, user.email)
    return order


@transaction.atomic
def update_order_status(*, order_id: UUID, user: User, status: str) -> Order:
    """
    Set an order's status (owner only).

    Any status may follow any other; there is no transition graph.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user is not the group owner
        InvalidOrderDataError: If status is unknown
    """
    if status not in OrderStatus.values:
        raise InvalidOrderDataError(
            f"Invalid status. Must be one of: {', '.join(OrderStatus.values)}"
        )

    order = _get_order(order_id, for_update=True)
    _require_owner(order, user, "change the order status")

    previous = order.status
    order.status = status
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Order %s status %s -> %s by %s", order.id, previous, status, user.email)
    return order


@transaction.atomic
def set_total_value(*, order_id: UUID, user: User, amount) -> Order:
    """
    Record the final amount of an order (owner only).

    The value is independent of the sum of card prices.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user is not the group owner
        InvalidOrderDataError: If amount is not a non-negative number
    """
    try:
        amount = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidOrderDataError("Total value must be a number")
    if not amount.is_finite() or amount < 0:
        raise InvalidOrderDataError("Total value cannot be negative")

    order = _get_order(order_id, for_update=True)
    _require_owner(order, user, "set the order total")

    order.total_value = amount.quantize(Decimal('0.01'))
    order.save(update_fields=['total_value', 'updated_at'])
    return order


def delete_order(*, order_id: UUID, user: User) -> Dict[str, int]:
    """
    Delete an order and its cards (owner only).

    Cards go first, then the order; each phase commits on its own and a
    failed delete can simply be repeated.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user is not the group owner
        CascadeDeleteError: If a phase fails
    """
    order = _get_order(order_id)
    _require_owner(order, user, "delete orders")

    deleted = run_cascade(
        label=f"order {order_id}",
        phases=[
            CascadePhase('cards', lambda: OrderCard.objects.filter(order_id=order_id)),
            CascadePhase('order', lambda: Order.objects.filter(id=order_id)),
        ],
    )

    logger.info("Order %s deleted by %s", order_id, user.email)
    return deleted
