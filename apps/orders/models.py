# ==========================================
# apps/orders/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class OrderStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    CLOSED = 'closed', 'Closed'
    ORDERED = 'ordered', 'Ordered'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


class Currency(models.TextChoices):
    USD = 'USD', 'US Dollar'
    EUR = 'EUR', 'Euro'
    BRL = 'BRL', 'Brazilian Real'
    GBP = 'GBP', 'British Pound'


class Order(models.Model):
    """Time-boxed collection of card requests inside a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.PROTECT,
        related_name='orders'
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders_created'
    )

    title = models.CharField(max_length=200)
    deadline = models.DateTimeField()
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.OPEN)

    # Final amount agreed by the owner, not derived from card prices
    total_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['group', 'created_at'], name='orders_group_i_7b3f52_idx'),
            models.Index(fields=['group', 'status'], name='orders_group_i_e19a04_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.status})"

    def can_add_cards(self, now=None):
        """
        Whether cards may be added or removed right now.

        Recomputed on every call: an order stops accepting cards the moment
        its deadline passes, without any write to the order.
        """
        now = now or timezone.now()
        return self.status == OrderStatus.OPEN and self.deadline >= now

    def is_expired(self, now=None):
        """Open but past its deadline."""
        now = now or timezone.now()
        return self.status == OrderStatus.OPEN and self.deadline < now


class OrderCard(models.Model):
    """One card line-item a member added to an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name='cards'
    )
    # Copy of order.group so a group delete can find cards directly
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.PROTECT,
        related_name='order_cards'
    )

    # Catalog snapshot taken when the card was added; never re-synced
    scryfall_id = models.CharField(max_length=64)
    card_name = models.CharField(max_length=300)
    card_image = models.URLField(max_length=500, blank=True)
    set_name = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    added_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='order_cards'
    )
    added_by_name = models.CharField(max_length=200)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_cards'
        indexes = [
            models.Index(fields=['order', 'created_at'], name='order_cards_order_i_2d6c8e_idx'),
            models.Index(fields=['group'], name='order_cards_group_i_5fa913_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.quantity}x {self.card_name} ({self.added_by_name})"

    @property
    def added_by_email(self):
        return self.added_by.email

    @property
    def line_total(self):
        return (self.price or Decimal('0')) * (self.quantity or 1)
