import pytest
import uuid
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch
from django.db import DatabaseError
from django.db.models.query import QuerySet
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.orders.models import Order, OrderCard, OrderStatus


# =============================================================================
# Order CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderList:
    """Tests for GET /api/orders/?group={id}"""

    def test_list_group_orders(self, member_client, group, order, member_card):
        url = reverse('orders:order-list')
        response = member_client.get(url, {'group': str(group.id)})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['title'] == 'Jan Batch'
        assert response.data[0]['card_count'] == 1
        assert response.data[0]['can_add_cards'] is True

    def test_list_requires_group(self, member_client):
        url = reverse('orders:order-list')
        response = member_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_non_member(self, outsider_client, group, order):
        url = reverse('orders:order-list')
        response = outsider_client.get(url, {'group': str(group.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_unauthenticated(self, api_client, group):
        url = reverse('orders:order-list')
        response = api_client.get(url, {'group': str(group.id)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrderCreate:
    """Tests for POST /api/orders/"""

    def test_create_order(self, member_client, group, member):
        url = reverse('orders:order-list')
        data = {
            'group': str(group.id),
            'title': 'Jan Batch',
            'deadline': (timezone.now() + timedelta(days=1)).isoformat(),
            'currency': 'EUR',
        }
        response = member_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == OrderStatus.OPEN
        assert response.data['currency'] == 'EUR'
        assert response.data['created_by_email'] == member.email
        assert Order.objects.filter(group=group, title='Jan Batch').exists()

    def test_create_order_missing_deadline(self, member_client, group):
        url = reverse('orders:order-list')
        response = member_client.post(url, {'group': str(group.id), 'title': 'X'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'deadline' in response.data

    def test_create_order_blank_title(self, member_client, group):
        url = reverse('orders:order-list')
        data = {
            'group': str(group.id),
            'title': '   ',
            'deadline': (timezone.now() + timedelta(days=1)).isoformat(),
        }
        response = member_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_order_non_member(self, outsider_client, group):
        url = reverse('orders:order-list')
        data = {
            'group': str(group.id),
            'title': 'Sneaky',
            'deadline': (timezone.now() + timedelta(days=1)).isoformat(),
        }
        response = outsider_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Order.objects.filter(title='Sneaky').exists()


@pytest.mark.django_db
class TestOrderDetail:
    """Tests for GET/DELETE /api/orders/{id}/"""

    def test_retrieve_order(self, member_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(order.id)
        assert response.data['card_count'] == 0

    def test_retrieve_non_member(self, outsider_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_expired_order_flags(self, member_client, expired_order):
        url = reverse('orders:order-detail', kwargs={'pk': expired_order.id})
        response = member_client.get(url)

        assert response.data['status'] == OrderStatus.OPEN
        assert response.data['can_add_cards'] is False
        assert response.data['is_expired'] is True

    def test_delete_order_as_owner(self, owner_client, order, member_card):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Order.objects.filter(id=order.id).exists()
        assert not OrderCard.objects.filter(id=member_card.id).exists()

    def test_delete_order_as_member(self, member_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Order.objects.filter(id=order.id).exists()

    def test_delete_order_partial_failure(self, owner_client, order, member_card):
        real_delete = QuerySet.delete

        def failing_delete(queryset):
            if queryset.model is Order:
                raise DatabaseError('connection lost')
            return real_delete(queryset)

        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        with patch.object(QuerySet, 'delete', autospec=True, side_effect=failing_delete):
            response = owner_client.delete(url)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['failed_phase'] == 'order'
        assert response.data['completed_phases'] == ['cards']


# =============================================================================
# Owner Actions
# =============================================================================

@pytest.mark.django_db
class TestOrderOwnerActions:
    """Tests for POST /api/orders/{id}/status/ and /total/"""

    def test_owner_sets_status(self, owner_client, order):
        url = reverse('orders:order-set-status', kwargs={'pk': order.id})
        response = owner_client.post(url, {'status': 'ordered'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'ordered'
        assert response.data['can_add_cards'] is False

    def test_member_cannot_set_status(self, member_client, order):
        url = reverse('orders:order-set-status', kwargs={'pk': order.id})
        response = member_client.post(url, {'status': 'closed'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        order.refresh_from_db()
        assert order.status == OrderStatus.OPEN

    def test_invalid_status(self, owner_client, order):
        url = reverse('orders:order-set-status', kwargs={'pk': order.id})
        response = owner_client.post(url, {'status': 'lost'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_owner_sets_total(self, owner_client, order):
        url = reverse('orders:order-total', kwargs={'pk': order.id})
        response = owner_client.post(url, {'total_value': '125.50'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        order.refresh_from_db()
        assert order.total_value == Decimal('125.50')

    def test_negative_total(self, owner_client, order):
        url = reverse('orders:order-total', kwargs={'pk': order.id})
        response = owner_client.post(url, {'total_value': '-5'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_member_cannot_set_total(self, member_client, order):
        url = reverse('orders:order-total', kwargs={'pk': order.id})
        response = member_client.post(url, {'total_value': '10'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Card Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderCards:
    """Tests for /api/orders/{id}/cards/ and /api/orders/cards/{id}/"""

    def test_add_card(self, member_client, order, member):
        url = reverse('orders:order-cards', kwargs={'pk': order.id})
        data = {
            'scryfall_id': 'e3285e6b-3e79-4d7c-bf96-d920f973b80d',
            'card_name': 'Lightning Bolt',
            'set_name': 'Magic 2010',
            'price': '1.50',
            'quantity': 4,
        }
        response = member_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['added_by_email'] == member.email
        assert response.data['added_by_name'] == 'Mark'
        assert Decimal(response.data['line_total']) == Decimal('6.00')

    def test_add_card_without_price(self, member_client, order):
        url = reverse('orders:order-cards', kwargs={'pk': order.id})
        response = member_client.post(url, {'scryfall_id': 'x', 'card_name': 'Island'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Decimal(response.data['price']) == Decimal('0')
        assert response.data['quantity'] == 1

    def test_add_card_zero_quantity(self, member_client, order):
        url = reverse('orders:order-cards', kwargs={'pk': order.id})
        data = {'scryfall_id': 'x', 'card_name': 'Island', 'quantity': 0}
        response = member_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_card_to_expired_order(self, member_client, expired_order):
        url = reverse('orders:order-cards', kwargs={'pk': expired_order.id})
        response = member_client.post(url, {'scryfall_id': 'x', 'card_name': 'Island'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not OrderCard.objects.filter(order=expired_order).exists()

    def test_add_card_non_member(self, outsider_client, order):
        url = reverse('orders:order-cards', kwargs={'pk': order.id})
        response = outsider_client.post(url, {'scryfall_id': 'x', 'card_name': 'Island'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_cards(self, owner_client, order, member_card):
        url = reverse('orders:order-cards', kwargs={'pk': order.id})
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [c['card_name'] for c in response.data] == ['Lightning Bolt']

    def test_remove_own_card(self, member_client, member_card):
        url = reverse('orders:order-card-detail', kwargs={'pk': member_card.id})
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not OrderCard.objects.filter(id=member_card.id).exists()

    def test_owner_cannot_remove_members_card(self, owner_client, member_card):
        url = reverse('orders:order-card-detail', kwargs={'pk': member_card.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert OrderCard.objects.filter(id=member_card.id).exists()

    def test_remove_card_after_deadline(self, member_client, member_card, order):
        order.deadline = timezone.now() - timedelta(minutes=1)
        order.save()

        url = reverse('orders:order-card-detail', kwargs={'pk': member_card.id})
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert OrderCard.objects.filter(id=member_card.id).exists()

    def test_remove_missing_card(self, member_client, member_card):
        url = reverse('orders:order-card-detail', kwargs={'pk': member_card.id})
        member_client.delete(url)
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestOrderSummary:
    """Tests for GET /api/orders/{id}/summary/"""

    def test_summary(self, owner_client, order, owner, member_card):
        OrderCard.objects.create(
            order=order,
            group=order.group,
            scryfall_id='ragavan',
            card_name='Ragavan, Nimble Pilferer',
            price=None,
            quantity=1,
            added_by=owner,
            added_by_name='Olivia',
        )

        url = reverse('orders:order-summary', kwargs={'pk': order.id})
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['grand_total']) == Decimal('6.00')
        assert response.data['card_count'] == 2
        assert response.data['currency'] == 'USD'
        subtotals = {
            c['email']: Decimal(c['subtotal'])
            for c in response.data['contributors']
        }
        assert subtotals == {
            'member@example.com': Decimal('6.00'),
            'owner@example.com': Decimal('0'),
        }


# =============================================================================
# Malformed And Unknown Ids
# =============================================================================

MALFORMED_ID = '-' * 36


@pytest.mark.django_db
class TestOrderIdLookups:
    """Ids that are not UUIDs never reach the database lookups."""

    @pytest.mark.parametrize('method,path', [
        ('delete', '/api/orders/{id}/'),
        ('post', '/api/orders/{id}/status/'),
        ('post', '/api/orders/{id}/total/'),
        ('get', '/api/orders/{id}/summary/'),
        ('get', '/api/orders/{id}/cards/'),
        ('delete', '/api/orders/cards/{id}/'),
    ])
    def test_malformed_id_is_not_found(self, owner_client, order, method, path):
        response = getattr(owner_client, method)(path.format(id=MALFORMED_ID), {}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Order.objects.filter(id=order.id).exists()

    def test_unknown_order_delete(self, owner_client):
        url = reverse('orders:order-detail', kwargs={'pk': uuid.uuid4()})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_unknown_order_status(self, owner_client):
        url = reverse('orders:order-set-status', kwargs={'pk': uuid.uuid4()})
        response = owner_client.post(url, {'status': OrderStatus.CLOSED}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_card_delete(self, member_client):
        url = reverse('orders:order-card-detail', kwargs={'pk': uuid.uuid4()})
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
