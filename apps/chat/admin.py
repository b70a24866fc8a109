# ==========================================
# apps/chat/admin.py
# ==========================================

from django.contrib import admin
from apps.chat.models import ChatMessage


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    """Admin interface for Chat Messages."""

    list_display = ['sender_name', 'group', 'order_id', 'short_message', 'created_date']
    list_filter = ['created_date']
    search_fields = ['message', 'sender__email', 'sender_name', 'group__name']
    readonly_fields = ['created_date']
    date_hierarchy = 'created_date'
    ordering = ['-created_date']

    def short_message(self, obj):
        return obj.message[:80]
    short_message.short_description = 'Message'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('group', 'sender')
