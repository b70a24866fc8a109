# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for User model.

    Identities normally come from the identity provider; the admin is
    used to provision accounts by hand and to fix display names.
    """

    list_display = ['email', 'full_name', 'display_name', 'is_staff', 'created_at']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'full_name', 'display_name']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        ('Identity', {
            'fields': ('email', 'full_name', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2'),
        }),
    )
    filter_horizontal = []
