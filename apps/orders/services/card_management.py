"""
Card collection service.

Handles adding and removing card line-items on an order and the
per-contributor totals shown on the order page.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.orders.models import Order, OrderCard

from .exceptions import (
    NotMemberError,
    InsufficientPermissionsError,
    OrderNotFoundError,
    CardNotFoundError,
    OrderClosedError,
    InvalidOrderDataError,
)
from .order_management import get_order_for_member

logger = logging.getLogger(__name__)


@dataclass
class ContributorTotal:
    """Cards one member added to an order and what they add up to."""

    email: str
    name: str
    cards: List[Any] = field(default_factory=list)
    subtotal: Decimal = Decimal('0')

    @property
    def card_count(self) -> int:
        return len(self.cards)


@dataclass
class CardAggregation:
    contributors: List[ContributorTotal]
    grand_total: Decimal
    card_count: int


def _card_value(card, name):
    if isinstance(card, Mapping):
        return card.get(name)
    return getattr(card, name, None)


def _line_total(card) -> Decimal:
    # Missing price counts as 0 and missing quantity as 1
    price = _card_value(card, 'price') or 0
    quantity = _card_value(card, 'quantity') or 1
    return Decimal(str(price)) * quantity


def aggregate_cards(cards: Iterable[Any]) -> CardAggregation:
    """
    Group cards by the member who added them.

    Accepts OrderCard instances or plain mappings with the same field
    names. Contributors appear in the order their first card is seen.

    Returns:
        CardAggregation with per-contributor subtotals and the grand total
    """
    by_email = {}
    grand_total = Decimal('0')
    count = 0

    for card in cards:
        email = _card_value(card, 'added_by_email') or ''
        contributor = by_email.get(email)
        if contributor is None:
            contributor = ContributorTotal(
                email=email,
                name=_card_value(card, 'added_by_name') or email,
            )
            by_email[email] = contributor

        line_total = _line_total(card)
        contributor.cards.append(card)
        contributor.subtotal += line_total
        grand_total += line_total
        count += 1

    return CardAggregation(
        contributors=list(by_email.values()),
        grand_total=grand_total,
        card_count=count,
    )


def get_order_cards(*, order_id: UUID, user: User) -> QuerySet[OrderCard]:
    """
    Cards of an order, newest first (member only).

    Raises:
        OrderNotFoundError: If order doesn't exist
        NotMemberError: If user is not a member
    """
    order = get_order_for_member(order_id=order_id, user=user)
    return (
        OrderCard.objects
        .filter(order=order)
        .select_related('added_by')
        .order_by('-created_at')
    )


def get_order_summary(*, order_id: UUID, user: User) -> dict:
    """
    Per-contributor totals for an order (member only).

    Returns:
        dict with the order, its aggregation and whether cards can be added
    """
    order = get_order_for_member(order_id=order_id, user=user)
    cards = (
        OrderCard.objects
        .filter(order=order)
        .select_related('added_by')
        .order_by('-created_at')
    )
    aggregation = aggregate_cards(cards)

    return {
        'order': order,
        'currency': order.currency,
        'total_value': order.total_value,
        'can_add_cards': order.can_add_cards(),
        'grand_total': aggregation.grand_total,
        'card_count': aggregation.card_count,
        'contributors': aggregation.contributors,
    }


@transaction.atomic
def add_card(
    *,
    order_id: UUID,
    user: User,
    scryfall_id: str,
    card_name: str,
    card_image: str = '',
    set_name: str = '',
    price: Optional[Decimal] = None,
    quantity: int = 1
) -> OrderCard:
    """
    Add a card selection to an open order (member only).

    Name, image, set and price are a snapshot of the catalog entry at the
    time of adding and are never refreshed.

    Args:
        order_id: UUID of the order
        user: Member adding the card
        scryfall_id: Catalog identifier of the card
        card_name: Card name
        card_image: Image URL
        set_name: Set the printing belongs to
        price: Unit price, missing means 0
        quantity: Copies wanted, at least 1

    Returns:
        Created OrderCard

    Raises:
        OrderNotFoundError: If order doesn't exist
        NotMemberError: If user is not a member
        OrderClosedError: If the order is not open or past its deadline
        InvalidOrderDataError: If quantity or price is invalid
    """
    try:
        order = (
            Order.objects
            .select_for_update()
            .select_related('group')
            .get(id=order_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if not order.group.has_member(user):
        raise NotMemberError("You must be a member of this group")

    if not order.can_add_cards():
        raise OrderClosedError("This order is no longer accepting cards")

    if quantity is None:
        quantity = 1
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidOrderDataError("Quantity must be a whole number of at least 1")

    price = Decimal(str(price)) if price is not None else Decimal('0')
    if price < 0:
        raise InvalidOrderDataError("Price cannot be negative")

    card_name = (card_name or '').strip()
    if not scryfall_id or not card_name:
        raise InvalidOrderDataError("A catalog card must be selected")

    card = OrderCard.objects.create(
        order=order,
        group=order.group,
        scryfall_id=scryfall_id,
        card_name=card_name,
        card_image=card_image or '',
        set_name=set_name or '',
        price=price,
        quantity=quantity,
        added_by=user,
        added_by_name=user.get_display_name(),
    )

    logger.info(
        "Card %s x%d added to order %s by %s",
        card_name, quantity, order.id, user.email,
    )
    return card


@transaction.atomic
def remove_card(*, card_id: UUID, user: User) -> None:
    """
    Remove a card from an order.

    Only the member who added the card may remove it, and only while the
    order still accepts cards.

    Raises:
        CardNotFoundError: If card doesn't exist
        InsufficientPermissionsError: If user did not add the card
        OrderClosedError: If the order is not open or past its deadline
    """
    try:
        card = (
            OrderCard.objects
            .select_for_update()
            .select_related('order')
            .get(id=card_id)
        )
    except OrderCard.DoesNotExist:
        raise CardNotFoundError(f"Card with ID {card_id} not found")

    if card.added_by_id != user.pk:
        raise InsufficientPermissionsError("You can only remove cards you added")

    if not card.order.can_add_cards():
        raise OrderClosedError("This order is no longer accepting changes")

    card.delete()
    logger.info("Card %s removed from order %s by %s", card_id, card.order_id, user.email)
