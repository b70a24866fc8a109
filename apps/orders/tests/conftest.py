import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.services import create_group, join_group
from apps.orders.models import Order, OrderCard, OrderStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Group owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        full_name='Olivia Owner',
        display_name='Olivia',
    )


@pytest.fixture
def member(db):
    """Regular group member."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        full_name='Mark Member',
        display_name='Mark',
    )


@pytest.fixture
def outsider(db):
    """User outside the group."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        full_name='Oscar Outsider',
    )


@pytest.fixture
def group(owner, member):
    """Group with owner and one member."""
    group = create_group(name='Friday Draft', owner=owner)
    join_group(invite_code=group.invite_code, user=member)
    return group


@pytest.fixture
def order(group, owner):
    """Open order with a deadline tomorrow."""
    return Order.objects.create(
        group=group,
        created_by=owner,
        title='Jan Batch',
        deadline=timezone.now() + timedelta(days=1),
        currency='USD',
    )


@pytest.fixture
def expired_order(group, owner):
    """Order still open but past its deadline."""
    return Order.objects.create(
        group=group,
        created_by=owner,
        title='Old Batch',
        deadline=timezone.now() - timedelta(hours=1),
    )


@pytest.fixture
def closed_order(group, owner):
    """Order closed by the owner before its deadline."""
    return Order.objects.create(
        group=group,
        created_by=owner,
        title='Closed Batch',
        deadline=timezone.now() + timedelta(days=1),
        status=OrderStatus.CLOSED,
    )


@pytest.fixture
def member_card(order, member):
    """Card the member added to the open order."""
    return OrderCard.objects.create(
        order=order,
        group=order.group,
        scryfall_id='e3285e6b-3e79-4d7c-bf96-d920f973b80d',
        card_name='Lightning Bolt',
        set_name='Magic 2010',
        price=Decimal('1.50'),
        quantity=4,
        added_by=member,
        added_by_name='Mark',
    )


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
