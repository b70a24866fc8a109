from rest_framework import serializers


class CardSearchQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for card search.

    Query Parameters:
        q (str): Search text; fewer than two characters returns nothing
    """

    q = serializers.CharField(required=False, allow_blank=True, default='', max_length=200)


class CatalogCardSerializer(serializers.Serializer):
    """Search result; the fields a client sends back when adding a card."""

    scryfall_id = serializers.CharField()
    name = serializers.CharField()
    set_name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    image_small = serializers.CharField()
    image_normal = serializers.CharField()
