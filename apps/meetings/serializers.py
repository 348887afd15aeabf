"""
Serializers for the Meetings app.
"""
from rest_framework import serializers

from apps.meetings.models import Meeting
from common.serializers import StrictSerializer


class MeetingSerializer(serializers.ModelSerializer):
    created_by = serializers.IntegerField(source='created_by_id', read_only=True)
    group_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Meeting
        fields = [
            'id', 'title', 'description',
            'meeting_time', 'duration_minutes',
            'created_by', 'group_id', 'room_code', 'created_at',
        ]
        read_only_fields = fields


class MeetingUpdateSerializer(StrictSerializer):
    """
    Body of a meeting update. The group cannot be changed.

    ``title`` and ``meeting_time`` are checked by the service, after the
    meeting is found and the caller is confirmed as its creator.
    """
    title = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    meeting_time = serializers.DateTimeField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    duration_minutes = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class MeetingCreateSerializer(MeetingUpdateSerializer):
    title = serializers.CharField(max_length=200)
    meeting_time = serializers.DateTimeField()
    group_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
