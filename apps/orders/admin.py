# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from apps.orders.models import Order, OrderCard


class OrderCardInline(admin.TabularInline):
    """Inline admin for order cards."""
    model = OrderCard
    extra = 0
    fields = ['card_name', 'set_name', 'price', 'quantity', 'added_by_name', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for Orders."""

    list_display = [
        'title',
        'group',
        'status',
        'currency',
        'total_value',
        'deadline',
        'created_at'
    ]
    list_filter = ['status', 'currency', 'created_at']
    search_fields = ['title', 'notes', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [OrderCardInline]
    date_hierarchy = 'deadline'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('group', 'created_by', 'title', 'notes')
        }),
        ('Status', {
            'fields': ('status', 'deadline', 'currency', 'total_value')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(OrderCard)
class OrderCardAdmin(admin.ModelAdmin):
    """Admin interface for Order Cards."""

    list_display = ['card_name', 'quantity', 'price', 'order', 'added_by_name', 'created_at']
    search_fields = ['card_name', 'set_name', 'added_by__email', 'order__title']
    readonly_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('order', 'added_by')
