from django.urls import path
from . import views

app_name = 'chat'

urlpatterns = [
    # GET  /api/chat/?group={id}[&order={id}]  - Newest messages of a channel
    # POST /api/chat/                         - Post a message
    path('', views.chat_messages, name='messages'),
]
