from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group details (member)
    # DELETE /api/groups/{id}/         - Delete group and its orders/cards/chat (owner)

    # Custom group actions
    # GET    /api/groups/{id}/members/ - List members
    # POST   /api/groups/join/         - Join with invite code

    # Include router URLs
    path('', include(router.urls)),
]
