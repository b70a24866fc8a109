from rest_framework import serializers
from .models import ChatMessage, MAX_MESSAGE_LENGTH


class ChatMessageSerializer(serializers.ModelSerializer):
    """Message as delivered to clients."""

    group_id = serializers.UUIDField(read_only=True)
    sender_email = serializers.EmailField(source='sender.email', read_only=True)

    class Meta:
        model = ChatMessage
        fields = [
            'id',
            'group_id',
            'order_id',
            'sender_email',
            'sender_name',
            'message',
            'created_date',
        ]
        read_only_fields = fields


class ChatFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for reading a channel.

    Query Parameters:
        group (UUID): Group whose chat is read (required)
        order (UUID): Order channel; omit for the group channel
        limit (int): Number of messages, at most 100
    """

    group = serializers.UUIDField(required=True)
    order = serializers.UUIDField(required=False, allow_null=True, default=None)
    limit = serializers.IntegerField(required=False, allow_null=True, default=None)


class ChatMessageCreateSerializer(serializers.Serializer):
    """Serializer for posting a message."""

    group = serializers.UUIDField(required=True)
    order = serializers.UUIDField(required=False, allow_null=True, default=None)
    message = serializers.CharField(max_length=MAX_MESSAGE_LENGTH)


class ChatChannelSerializer(serializers.Serializer):
    """Newest-first page of a channel plus the polling interval."""

    poll_interval_seconds = serializers.IntegerField()
    count = serializers.IntegerField()
    messages = ChatMessageSerializer(many=True)
