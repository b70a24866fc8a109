from django.conf import settings
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    ChatMessageSerializer,
    ChatFilterSerializer,
    ChatMessageCreateSerializer,
    ChatChannelSerializer,
)
from .services import (
    send_message,
    list_messages,
    GroupNotFoundError,
    NotMemberError,
    OrderNotFoundError,
    EmptyMessageError,
    MessageTooLongError,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _read_channel(request):
    filter_serializer = ChatFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    try:
        messages = list_messages(
            group_id=params['group'],
            user=request.user,
            order_id=params.get('order'),
            limit=params.get('limit'),
        )
    except (GroupNotFoundError, OrderNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    data = ChatChannelSerializer({
        'poll_interval_seconds': settings.CHAT_POLL_INTERVAL_SECONDS,
        'count': len(messages),
        'messages': messages,
    }).data
    return Response(data)


def _post_message(request):
    serializer = ChatMessageCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        message = send_message(
            group_id=data['group'],
            user=request.user,
            text=data['message'],
            order_id=data.get('order'),
        )
    except (GroupNotFoundError, OrderNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except (EmptyMessageError, MessageTooLongError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ChatMessageSerializer(message).data, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('group', OpenApiTypes.UUID, required=True, description='Group ID'),
        OpenApiParameter('order', OpenApiTypes.UUID, description='Order channel; omit for the group channel'),
        OpenApiParameter('limit', OpenApiTypes.INT, description='Maximum messages (1-100)'),
    ],
    responses={200: ChatChannelSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Most recent messages of a channel, newest first. Poll at poll_interval_seconds.",
    tags=['chat'],
)
@extend_schema(
    methods=['POST'],
    request=ChatMessageCreateSerializer,
    responses={201: ChatMessageSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    description="Post a message to a group or order channel.",
    tags=['chat'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def chat_messages(request):
    """Read or post messages of a chat channel."""
    if request.method == 'POST':
        return _post_message(request)
    return _read_channel(request)
