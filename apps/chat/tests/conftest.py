import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.chat.models import ChatMessage
from apps.groups.services import create_group, join_group
from apps.orders.models import Order


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        full_name='Olivia Owner',
        display_name='Olivia',
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        full_name='Mark Member',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        full_name='Oscar Outsider',
    )


@pytest.fixture
def group(owner, member):
    group = create_group(name='Friday Draft', owner=owner)
    join_group(invite_code=group.invite_code, user=member)
    return group


@pytest.fixture
def order(group, owner):
    return Order.objects.create(
        group=group,
        created_by=owner,
        title='Jan Batch',
        deadline=timezone.now() + timedelta(days=1),
    )


@pytest.fixture
def make_message(group, owner):
    """
    Factory for messages with explicit, increasing timestamps.

    ``minutes_ago`` sets created_date relative to now.
    """
    def _make(text, *, minutes_ago=0, order_id=None, sender=None):
        sender = sender or owner
        message = ChatMessage.objects.create(
            group=group,
            order_id=order_id,
            sender=sender,
            sender_name=sender.get_display_name(),
            message=text,
        )
        created = timezone.now() - timedelta(minutes=minutes_ago)
        ChatMessage.objects.filter(id=message.id).update(created_date=created)
        message.created_date = created
        return message
    return _make


@pytest.fixture
def member_client(member):
    client = APIClient()
    refresh = RefreshToken.for_user(member)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def outsider_client(outsider):
    client = APIClient()
    refresh = RefreshToken.for_user(outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
