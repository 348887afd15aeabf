"""
Custom permissions for the Groups app.

Each class reads the group from the ``group_id`` URL kwarg and checks the
caller's membership row, so access is denied before the request body is
looked at.
"""
import logging

from rest_framework.permissions import BasePermission

from apps.groups.models import Group
from apps.groups.services import is_admin_member, is_member

logger = logging.getLogger(__name__)


class IsGroupMember(BasePermission):
    """
    Allows access only to group members (any role).
    """
    message = 'You are not a member of this group.'

    def has_permission(self, request, view):
        group_id = view.kwargs.get('group_id')
        if group_id is None:
            return True

        if is_member(request.user.id, group_id):
            return True
        logger.warning('User %s denied member access to group %s', request.user.id, group_id)
        return False


class IsGroupAdmin(BasePermission):
    """
    Allows access only to members holding the ``admin`` role.
    """
    message = 'You must be a group admin to perform this action.'
    action_messages = {
        'update': 'You do not have permission to update this group.',
        'create': 'You do not have permission to add members to this group.',
        'destroy': 'You do not have permission to remove members from this group.',
    }

    def has_permission(self, request, view):
        group_id = view.kwargs.get('group_id')
        if group_id is None:
            return True

        if is_admin_member(request.user.id, group_id):
            return True
        logger.warning('User %s denied admin access to group %s', request.user.id, group_id)
        self.message = self.action_messages.get(view.action, self.message)
        return False


class IsGroupCreator(BasePermission):
    """
    Allows access only to the user who created the group, whatever their
    current role.
    """
    message = 'You do not have permission to delete this group.'

    def has_permission(self, request, view):
        group_id = view.kwargs.get('group_id')
        if group_id is None:
            return True

        return Group.objects.filter(pk=group_id, created_by_id=request.user.id).exists()


class IsSelfOrGroupAdmin(IsGroupAdmin):
    """
    Members may always act on their own membership; acting on anyone
    else's needs the admin role.
    """

    def has_permission(self, request, view):
        if str(view.kwargs.get('user_id')) == str(request.user.id):
            return True
        return super().has_permission(request, view)
