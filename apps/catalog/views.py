from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import CardSearchQuerySerializer, CatalogCardSerializer
from .services import search_cards


@extend_schema(
    parameters=[
        OpenApiParameter('q', OpenApiTypes.STR, description='Card name or Scryfall query'),
    ],
    responses={200: CatalogCardSerializer(many=True)},
    description="Search the card catalog. Errors and short queries give an empty list.",
    tags=['catalog'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def card_search(request):
    """Search cards by name."""
    serializer = CardSearchQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    cards = search_cards(
        serializer.validated_data['q'],
        debounce_key=str(request.user.pk),
    )
    return Response(CatalogCardSerializer(cards, many=True).data)
