"""
Views for the Meetings app.
"""
import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.groups.permissions import IsGroupMember
from apps.meetings import services
from apps.meetings.serializers import (
    MeetingCreateSerializer,
    MeetingSerializer,
    MeetingUpdateSerializer,
)

logger = logging.getLogger(__name__)


class MeetingViewSet(viewsets.ViewSet):
    """
    ViewSet for meetings.

    list:           GET    /api/v1/meetings
    create:         POST   /api/v1/meetings
    group_meetings: GET    /api/v1/meetings/group/{group_id}
    read:           GET    /api/v1/meetings/{id}
    update:         PUT    /api/v1/meetings/{id}
    delete:         DELETE /api/v1/meetings/{id}
    """
    lookup_url_kwarg = 'meeting_id'
    lookup_value_regex = r'\d+'
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == 'group_meetings':
            return [IsAuthenticated(), IsGroupMember()]
        return [IsAuthenticated()]

    def list(self, request):
        meetings = services.list_meetings(request.user)
        return Response({'success': True, 'data': MeetingSerializer(meetings, many=True).data})

    def create(self, request):
        serializer = MeetingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        meeting = services.create_meeting(request.user, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'data': MeetingSerializer(meeting).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['get'], url_path=r'group/(?P<group_id>\d+)')
    def group_meetings(self, request, group_id=None):
        """Meetings scheduled in one group, for its members."""
        meetings = services.list_group_meetings(request.user, group_id)
        return Response({'success': True, 'data': MeetingSerializer(meetings, many=True).data})

    def retrieve(self, request, meeting_id=None):
        meeting = services.get_meeting(request.user, meeting_id)
        return Response({'success': True, 'data': MeetingSerializer(meeting).data})

    def update(self, request, meeting_id=None):
        serializer = MeetingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        meeting = services.update_meeting(request.user, meeting_id, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'message': 'Meeting updated successfully.',
                'data': MeetingSerializer(meeting).data,
            }
        )

    def destroy(self, request, meeting_id=None):
        services.delete_meeting(request.user, meeting_id)
        return Response(
            {'success': True, 'message': 'Meeting deleted successfully.'},
            status=status.HTTP_200_OK,
        )
