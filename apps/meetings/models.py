"""
Models for the Meetings app.
"""
from django.conf import settings
from django.db import models

from common.models import TimestampedModel


class Meeting(TimestampedModel):
    """
    A scheduled meeting, optionally shared with a group.
    """
    DEFAULT_DURATION_MINUTES = 60

    title = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    meeting_time = models.DateTimeField(db_index=True)
    duration_minutes = models.PositiveIntegerField(default=DEFAULT_DURATION_MINUTES)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_meetings',
    )
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='meetings',
    )
    room_code = models.CharField(
        max_length=8,
        db_index=True,
        help_text='8 hex characters used to join the meeting room. Not unique.',
    )

    class Meta:
        db_table = 'meetings'
        ordering = ['meeting_time', 'id']

    def __str__(self):
        return f'{self.title} @ {self.meeting_time:%Y-%m-%d %H:%M}'
