"""
Admin configuration for the Meetings app.
"""
from django.contrib import admin

from apps.meetings.models import Meeting


@admin.register(Meeting)
class MeetingAdmin(admin.ModelAdmin):
    list_display = ['title', 'meeting_time', 'duration_minutes', 'group', 'created_by', 'room_code']
    list_filter = ['meeting_time']
    search_fields = ['title', 'room_code', 'group__name', 'created_by__username']
    readonly_fields = ['room_code', 'created_at', 'updated_at']
