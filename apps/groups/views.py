"""
Views for the Groups app.
"""
import logging

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.groups import services
from apps.groups.permissions import (
    IsGroupAdmin,
    IsGroupCreator,
    IsGroupMember,
    IsSelfOrGroupAdmin,
)
from apps.groups.serializers import (
    AddMemberSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    UpdateMemberRoleSerializer,
)

logger = logging.getLogger(__name__)


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for Group CRUD operations.

    list:   GET    /api/v1/groups
    create: POST   /api/v1/groups
    read:   GET    /api/v1/groups/{id}
    update: PUT    /api/v1/groups/{id}
    delete: DELETE /api/v1/groups/{id}
    """
    lookup_url_kwarg = 'group_id'
    lookup_value_regex = r'\d+'
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == 'retrieve':
            return [IsAuthenticated(), IsGroupMember()]
        if self.action == 'update':
            return [IsAuthenticated(), IsGroupAdmin()]
        if self.action == 'destroy':
            return [IsAuthenticated(), IsGroupCreator()]
        return [IsAuthenticated()]

    def list(self, request):
        groups = services.list_groups(request.user)
        return Response({'success': True, 'data': GroupSerializer(groups, many=True).data})

    def create(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = services.create_group(request.user, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'data': GroupSerializer(group).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, group_id=None):
        group = services.get_group(request.user, group_id)
        return Response({'success': True, 'data': GroupSerializer(group).data})

    def update(self, request, group_id=None):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = services.update_group(request.user, group_id, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'message': 'Group updated successfully.',
                'data': GroupSerializer(group).data,
            }
        )

    def destroy(self, request, group_id=None):
        services.delete_group(request.user, group_id)
        return Response(
            {'success': True, 'message': 'Group deleted successfully.'},
            status=status.HTTP_200_OK,
        )


class GroupMemberViewSet(viewsets.ViewSet):
    """
    ViewSet for managing group members.

    list:    GET    /api/v1/groups/{group_id}/members
    create:  POST   /api/v1/groups/{group_id}/members
    update:  PUT    /api/v1/groups/{group_id}/members/{user_id}
    destroy: DELETE /api/v1/groups/{group_id}/members/{user_id}
    """
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == 'list':
            return [IsAuthenticated(), IsGroupMember()]
        if self.action == 'create':
            return [IsAuthenticated(), IsGroupAdmin()]
        if self.action == 'destroy':
            return [IsAuthenticated(), IsSelfOrGroupAdmin()]
        # Role changes validate the body before the admin check.
        return [IsAuthenticated()]

    def list(self, request, group_id=None):
        members = services.list_members(request.user, group_id)
        return Response({'success': True, 'data': GroupMemberSerializer(members, many=True).data})

    def create(self, request, group_id=None):
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = services.add_member(request.user, group_id, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'message': 'Member added successfully.',
                'data': GroupMemberSerializer(member).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, group_id=None, user_id=None):
        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.update_member_role(request.user, group_id, user_id, serializer.validated_data['role'])
        return Response({'success': True, 'message': 'Member role updated successfully.'})

    def destroy(self, request, group_id=None, user_id=None):
        services.remove_member(request.user, group_id, user_id)
        return Response(
            {'success': True, 'message': 'Member removed successfully.'},
            status=status.HTTP_200_OK,
        )
