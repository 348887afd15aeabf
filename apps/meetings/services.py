"""
Meeting service.

A meeting is visible to its creator and, when it belongs to a group, to
every member of that group. Only the creator may change or delete it.
"""
import logging

from django.db.models import Q

from apps.groups.services import require_member
from apps.meetings.models import Meeting
from apps.meetings.utils import generate_room_code
from common.exceptions import ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _visible_to(caller):
    return Q(created_by_id=caller.id) | Q(
        group__isnull=False,
        group__members__user_id=caller.id,
    )


def create_meeting(caller, title, meeting_time, description=None,
                   duration_minutes=None, group_id=None):
    """
    Schedule a meeting. A group-scoped meeting requires the caller to be
    a member of that group.
    """
    if not title or not meeting_time:
        raise ValidationError('Title and meeting time are required.')

    if group_id:
        require_member(caller, group_id)

    meeting = Meeting.objects.create(
        title=title,
        description=description or None,
        meeting_time=meeting_time,
        duration_minutes=duration_minutes or Meeting.DEFAULT_DURATION_MINUTES,
        created_by_id=caller.id,
        group_id=group_id or None,
        room_code=generate_room_code(),
    )
    logger.info('User %s created meeting %s (group=%s)', caller.id, meeting.id, meeting.group_id)
    return meeting


def list_meetings(caller):
    """Meetings the caller created or can see through a group, soonest first."""
    return (
        Meeting.objects.filter(_visible_to(caller))
        .distinct()
        .order_by('meeting_time', 'id')
    )


def list_group_meetings(caller, group_id):
    require_member(caller, group_id)
    return Meeting.objects.filter(group_id=group_id).order_by('meeting_time', 'id')


def get_meeting(caller, meeting_id):
    """
    Fetch one meeting. Missing meetings and meetings the caller cannot
    see raise the same ``NotFoundError``.
    """
    meeting = (
        Meeting.objects.filter(_visible_to(caller), pk=meeting_id)
        .distinct()
        .first()
    )
    if meeting is None:
        raise NotFoundError('Meeting not found or you do not have access.')
    return meeting


def update_meeting(caller, meeting_id, title=None, meeting_time=None, description=None,
                   duration_minutes=None):
    """
    Replace a meeting's editable fields. Checks run in order: the meeting
    exists, the caller created it, then title and time are present.
    """
    meeting = Meeting.objects.filter(pk=meeting_id).first()
    if meeting is None:
        raise NotFoundError('Meeting not found.')

    if meeting.created_by_id != caller.id:
        logger.warning('User %s denied update of meeting %s', caller.id, meeting_id)
        raise ForbiddenError('You do not have permission to update this meeting.')

    if not title or not meeting_time:
        raise ValidationError('Title and meeting time are required.')

    meeting.title = title
    meeting.description = description or None
    meeting.meeting_time = meeting_time
    meeting.duration_minutes = duration_minutes or Meeting.DEFAULT_DURATION_MINUTES
    meeting.save(update_fields=[
        'title', 'description', 'meeting_time', 'duration_minutes', 'updated_at',
    ])
    logger.info('User %s updated meeting %s', caller.id, meeting_id)
    return meeting


def delete_meeting(caller, meeting_id):
    if not Meeting.objects.filter(pk=meeting_id, created_by_id=caller.id).exists():
        logger.warning('User %s denied deletion of meeting %s', caller.id, meeting_id)
        raise ForbiddenError('You do not have permission to delete this meeting.')

    Meeting.objects.filter(pk=meeting_id).delete()
    logger.info('User %s deleted meeting %s', caller.id, meeting_id)
