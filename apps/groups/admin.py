# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from django.db.models import Count
from apps.groups.models import Group, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    model = GroupMembership
    extra = 0
    fields = ['user', 'name', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Groups with their members inline; invite codes are never edited."""

    list_display = ['name', 'owner', 'invite_code', 'member_count', 'order_count', 'created_at']
    search_fields = ['name', 'owner__email', 'invite_code']
    readonly_fields = ['invite_code', 'created_at', 'updated_at']
    inlines = [GroupMembershipInline]
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('name', 'description', 'owner', 'invite_code')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request).select_related('owner')
        return qs.annotate(
            _member_count=Count('memberships', distinct=True),
            _order_count=Count('orders', distinct=True),
        )

    @admin.display(description='Members', ordering='_member_count')
    def member_count(self, obj):
        return obj._member_count

    @admin.display(description='Orders', ordering='_order_count')
    def order_count(self, obj):
        return obj._order_count


@admin.register(GroupMembership)
class GroupMembershipAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'group', 'joined_at']
    search_fields = ['user__email', 'name', 'group__name']
    readonly_fields = ['joined_at']
    list_select_related = ['user', 'group']
    ordering = ['-joined_at']
