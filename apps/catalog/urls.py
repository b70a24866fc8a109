from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # GET /api/catalog/search/?q=bolt
    path('search/', views.card_search, name='card-search'),
]
