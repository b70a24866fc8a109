import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.chat.models import ChatMessage
from apps.groups.models import GroupMembership
from apps.groups.services import create_group
from apps.orders.models import Order, OrderCard


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_owner(db):
    """Create and return a test user (group owner)."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        full_name='Olivia Owner',
        display_name='Olivia',
    )


@pytest.fixture
def member_user(db):
    """Create and return a member user."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        full_name='Mark Member',
        display_name='Mark',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        full_name='Oscar Other',
    )


@pytest.fixture
def group(group_owner):
    """Group with only its owner."""
    return create_group(name='Friday Draft', owner=group_owner, description='Weekly draft crew')


@pytest.fixture
def group_with_member(group, member_user):
    """Group with owner and one regular member."""
    GroupMembership.objects.create(user=member_user, group=group, name='Mark')
    return group


@pytest.fixture
def populated_group(group_with_member, group_owner, member_user):
    """Group with two orders, cards on both and chat in both channels."""
    group = group_with_member
    deadline = timezone.now() + timedelta(days=2)

    for title in ('Jan Batch', 'Feb Batch'):
        order = Order.objects.create(group=group, created_by=group_owner, title=title, deadline=deadline)
        for user in (group_owner, member_user):
            OrderCard.objects.create(
                order=order,
                group=group,
                scryfall_id=f'{title}-{user.pk}',
                card_name='Counterspell',
                price=Decimal('0.75'),
                quantity=2,
                added_by=user,
                added_by_name=user.get_display_name(),
            )
        ChatMessage.objects.create(
            group=group,
            order_id=order.id,
            sender=member_user,
            sender_name='Mark',
            message=f'in for {title}',
        )

    ChatMessage.objects.create(group=group, sender=group_owner, sender_name='Olivia', message='welcome')
    return group


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(group_owner):
    """Return API client authenticated as group owner."""
    return _client_for(group_owner)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as a regular member."""
    return _client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    """Return API client authenticated as a non-member."""
    return _client_for(group_other_user)
