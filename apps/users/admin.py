"""
Admin configuration for the Users app.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = [
        'username',
        'email',
        'is_admin',
        'is_active',
        'created_at',
    ]
    list_filter = [
        'is_admin',
        'is_active',
        'is_staff',
        'created_at',
    ]
    search_fields = ['username', 'email']
    ordering = ['username']

    fieldsets = BaseUserAdmin.fieldsets + (
        (
            'Huddle',
            {
                'fields': ('is_admin',),
            },
        ),
    )
