import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user without a display name."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        full_name='Test User',
    )


@pytest.fixture
def named_user(db):
    """Create and return a user who already picked a display name."""
    return User.objects.create_user(
        email='named@example.com',
        password='TestPass123!',
        full_name='Named Person',
        display_name='Named',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as test user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
