from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

# Note: cards must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'cards', views.OrderCardViewSet, basename='order-card')
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/?group={id}      - Orders of a group
    # POST   /api/orders/                 - Open an order
    # GET    /api/orders/{id}/            - Order details
    # DELETE /api/orders/{id}/            - Delete order and its cards
    # POST   /api/orders/{id}/status/     - Change status
    # POST   /api/orders/{id}/total/      - Set final value
    # GET    /api/orders/{id}/cards/      - List cards
    # POST   /api/orders/{id}/cards/      - Add a card
    # GET    /api/orders/{id}/summary/    - Per-contributor totals
    # DELETE /api/orders/cards/{id}/      - Remove own card
    path('', include(router.urls)),
]
