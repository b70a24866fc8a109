from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.groups.views import CascadeErrorResponseSerializer, UUID_PATTERN

from .models import Order
from .permissions import IsOrderGroupMember
from .serializers import (
    OrderFilterSerializer,
    OrderSerializer,
    OrderCreateSerializer,
    OrderStatusSerializer,
    OrderTotalSerializer,
    OrderCardSerializer,
    OrderCardCreateSerializer,
    OrderSummarySerializer,
)

from apps.orders.services import (
    create_order,
    update_order_status,
    set_total_value,
    delete_order,
    get_group_orders,
    add_card,
    remove_card,
    get_order_cards,
    get_order_summary,
    # Exceptions
    GroupNotFoundError,
    OrderNotFoundError,
    CardNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    OrderClosedError,
    InvalidOrderDataError,
    CascadeDeleteError,
)


class OrderViewSet(mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for orders.

    list: Orders of a group (?group=<id>)
    create: Open an order in a group
    retrieve: Order details (members only)
    destroy: Delete the order and its cards (group owner only)
    status: Change the order status (group owner only)
    total: Set the final order value (group owner only)
    cards: List or add cards
    summary: Per-contributor totals
    """

    queryset = Order.objects.select_related('group', 'group__owner', 'created_by')
    serializer_class = OrderSerializer
    lookup_value_regex = UUID_PATTERN
    permission_classes = [IsAuthenticated, IsOrderGroupMember]
    pagination_class = None

    @extend_schema(
        parameters=[
            OpenApiParameter('group', OpenApiTypes.UUID, required=True, description='Group ID'),
        ],
        responses={200: OrderSerializer(many=True)},
    )
    def list(self, request):
        filter_serializer = OrderFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        try:
            orders = get_group_orders(
                group_id=filter_serializer.validated_data['group'],
                user=request.user,
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        serializer = OrderSerializer(orders, many=True)
        return Response(serializer.data)

    @extend_schema(request=OrderCreateSerializer, responses={201: OrderSerializer})
    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = create_order(
                group_id=data['group'],
                user=request.user,
                title=data['title'],
                deadline=data['deadline'],
                currency=data['currency'],
                notes=data.get('notes', ''),
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidOrderDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None, 500: CascadeErrorResponseSerializer})
    def destroy(self, request, pk=None):
        try:
            delete_order(order_id=pk, user=request.user)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except CascadeDeleteError as e:
            return Response({
                'error': str(e),
                'failed_phase': e.failed_phase,
                'completed_phases': e.completed_phases,
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=OrderStatusSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='status')
    def set_status(self, request, pk=None):
        """
        Set the order status.

        POST /api/orders/{id}/status/
        Body: {"status": "closed"}
        """
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_order_status(
                order_id=pk,
                user=request.user,
                status=serializer.validated_data['status'],
            )
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidOrderDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderTotalSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def total(self, request, pk=None):
        """
        Set the final value of the order.

        POST /api/orders/{id}/total/
        Body: {"total_value": "125.50"}
        """
        serializer = OrderTotalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = set_total_value(
                order_id=pk,
                user=request.user,
                amount=serializer.validated_data['total_value'],
            )
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidOrderDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(
        methods=['GET'],
        responses={200: OrderCardSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        request=OrderCardCreateSerializer,
        responses={201: OrderCardSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def cards(self, request, pk=None):
        """
        List the order's cards or add one.

        GET  /api/orders/{id}/cards/
        POST /api/orders/{id}/cards/
        """
        if request.method == 'GET':
            try:
                cards = get_order_cards(order_id=pk, user=request.user)
            except OrderNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            except NotMemberError as e:
                return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
            return Response(OrderCardSerializer(cards, many=True).data)

        serializer = OrderCardCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            card = add_card(order_id=pk, user=request.user, **serializer.validated_data)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (OrderClosedError, InvalidOrderDataError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderCardSerializer(card).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OrderSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """
        Cards grouped by the member who added them, with subtotals.

        GET /api/orders/{id}/summary/
        """
        try:
            summary = get_order_summary(order_id=pk, user=request.user)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(OrderSummarySerializer(summary).data)


class OrderCardViewSet(viewsets.GenericViewSet):
    """
    destroy: Remove a card you added while the order is open
    """

    serializer_class = OrderCardSerializer
    lookup_value_regex = UUID_PATTERN
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={204: None})
    def destroy(self, request, pk=None):
        try:
            remove_card(card_id=pk, user=request.user)
        except CardNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except OrderClosedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
