from rest_framework import serializers
from .models import Order, OrderCard, OrderStatus, Currency


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the order list.

    Query Parameters:
        group (UUID): Group whose orders are listed (required)
    """

    group = serializers.UUIDField(required=True)


class OrderSerializer(serializers.ModelSerializer):
    """Main serializer for orders."""

    group_id = serializers.UUIDField(read_only=True)
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)
    can_add_cards = serializers.SerializerMethodField()
    is_expired = serializers.SerializerMethodField()
    card_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'group_id',
            'title',
            'deadline',
            'currency',
            'notes',
            'status',
            'total_value',
            'created_by_email',
            'can_add_cards',
            'is_expired',
            'card_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_can_add_cards(self, obj):
        return obj.can_add_cards()

    def get_is_expired(self, obj):
        return obj.is_expired()

    def get_card_count(self, obj):
        # Annotated by get_group_orders, counted otherwise
        count = getattr(obj, 'card_count', None)
        if count is None:
            count = obj.cards.count()
        return count


class OrderCreateSerializer(serializers.Serializer):
    """Serializer for opening an order."""

    group = serializers.UUIDField(required=True)
    title = serializers.CharField(max_length=200, required=True)
    deadline = serializers.DateTimeField(required=True)
    currency = serializers.ChoiceField(choices=Currency.choices, default=Currency.USD)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Title cannot be empty')
        return value


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class OrderTotalSerializer(serializers.Serializer):
    total_value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)


class OrderCardSerializer(serializers.ModelSerializer):
    """Card line-item as shown in an order."""

    order_id = serializers.UUIDField(read_only=True)
    added_by_email = serializers.EmailField(source='added_by.email', read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderCard
        fields = [
            'id',
            'order_id',
            'scryfall_id',
            'card_name',
            'card_image',
            'set_name',
            'price',
            'quantity',
            'line_total',
            'added_by_email',
            'added_by_name',
            'created_at',
        ]
        read_only_fields = fields


class OrderCardCreateSerializer(serializers.Serializer):
    """
    Card selection taken from a catalog search result.

    Name, image, set and price are stored as sent; quantity defaults to 1.
    """

    scryfall_id = serializers.CharField(max_length=64)
    card_name = serializers.CharField(max_length=300)
    card_image = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    set_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        default=None,
    )
    quantity = serializers.IntegerField(min_value=1, default=1)


class ContributorSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField()
    card_count = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    cards = OrderCardSerializer(many=True)


class OrderSummarySerializer(serializers.Serializer):
    """Per-contributor totals of an order."""

    currency = serializers.CharField()
    total_value = serializers.DecimalField(max_digits=10, decimal_places=2)
    can_add_cards = serializers.BooleanField()
    grand_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    card_count = serializers.IntegerField()
    contributors = ContributorSerializer(many=True)
