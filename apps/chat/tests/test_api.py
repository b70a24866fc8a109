import pytest
from django.urls import reverse
from rest_framework import status
from apps.chat.models import ChatMessage


@pytest.mark.django_db
class TestChatRead:
    """Tests for GET /api/chat/"""

    def test_read_group_channel(self, member_client, group, make_message):
        make_message('older', minutes_ago=5)
        make_message('newer', minutes_ago=1)

        response = member_client.get(reverse('chat:messages'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['poll_interval_seconds'] == 5
        assert response.data['count'] == 2
        assert [m['message'] for m in response.data['messages']] == ['newer', 'older']
        assert response.data['messages'][0]['sender_email'] == 'owner@example.com'
        assert response.data['messages'][0]['sender_name'] == 'Olivia'

    def test_read_order_channel(self, member_client, group, order, make_message):
        make_message('group talk')
        make_message('order talk', order_id=order.id)

        response = member_client.get(
            reverse('chat:messages'),
            {'group': str(group.id), 'order': str(order.id)},
        )

        assert response.status_code == status.HTTP_200_OK
        assert [m['message'] for m in response.data['messages']] == ['order talk']
        assert response.data['messages'][0]['order_id'] == str(order.id)

    def test_read_requires_group(self, member_client):
        response = member_client.get(reverse('chat:messages'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_non_member(self, outsider_client, group):
        response = outsider_client.get(reverse('chat:messages'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestChatPost:
    """Tests for POST /api/chat/"""

    def test_post_message(self, member_client, group, member):
        response = member_client.post(
            reverse('chat:messages'),
            {'group': str(group.id), 'message': 'anyone need lands?'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sender_email'] == member.email
        assert response.data['order_id'] is None
        assert ChatMessage.objects.filter(group=group, message='anyone need lands?').exists()

    def test_post_to_order(self, member_client, group, order):
        response = member_client.post(
            reverse('chat:messages'),
            {'group': str(group.id), 'order': str(order.id), 'message': 'added 4 bolts'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['order_id'] == str(order.id)

    def test_post_blank(self, member_client, group):
        response = member_client.post(
            reverse('chat:messages'),
            {'group': str(group.id), 'message': '   '},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not ChatMessage.objects.exists()

    def test_post_non_member(self, outsider_client, group):
        response = outsider_client.post(
            reverse('chat:messages'),
            {'group': str(group.id), 'message': 'hello?'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
