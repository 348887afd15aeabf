"""
Membership service: groups, members and roles.

Access is derived from the ``group_members`` table on every call:

* any membership row grants read access to the group and its members;
* an ``admin`` row grants group edits and member management;
* only the group's creator may delete it, whatever their current role.
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from apps.groups.models import Group, GroupMember
from common.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)
User = get_user_model()


# ---------------------------------------------------------------------------
# Access checks
# ---------------------------------------------------------------------------

def is_member(user_id: int, group_id: int) -> bool:
    return GroupMember.objects.filter(group_id=group_id, user_id=user_id).exists()


def is_admin_member(user_id: int, group_id: int) -> bool:
    return GroupMember.objects.filter(
        group_id=group_id,
        user_id=user_id,
        role=GroupMember.Role.ADMIN,
    ).exists()


def require_member(caller, group_id: int, message: str = 'You are not a member of this group.') -> None:
    if not is_member(caller.id, group_id):
        logger.warning('User %s denied member access to group %s', caller.id, group_id)
        raise ForbiddenError(message)


def require_admin(caller, group_id: int, message: str) -> None:
    if not is_admin_member(caller.id, group_id):
        logger.warning('User %s denied admin access to group %s', caller.id, group_id)
        raise ForbiddenError(message)


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

def create_group(caller, name: str, description: Optional[str] = None) -> Group:
    """Create a group and make the caller its first admin, atomically."""
    if not name:
        raise ValidationError('Group name is required.')

    with transaction.atomic():
        group = Group.objects.create(
            name=name,
            description=description or None,
            created_by_id=caller.id,
        )
        GroupMember.objects.create(
            group=group,
            user_id=caller.id,
            role=GroupMember.Role.ADMIN,
        )

    logger.info('User %s created group %s', caller.id, group.id)
    return group


def list_groups(caller):
    """Groups in which the caller holds any role."""
    return Group.objects.filter(members__user_id=caller.id).distinct()


def get_group(caller, group_id: int) -> Group:
    require_member(caller, group_id)

    group = Group.objects.filter(pk=group_id).first()
    if group is None:
        # Unreachable while group_members cascades from groups.
        raise NotFoundError('Group not found.')
    return group


def update_group(caller, group_id: int, name: str, description: Optional[str] = None) -> Group:
    require_admin(caller, group_id, 'You do not have permission to update this group.')

    if not name:
        raise ValidationError('Group name is required.')

    group = Group.objects.get(pk=group_id)
    group.name = name
    group.description = description or None
    group.save(update_fields=['name', 'description', 'updated_at'])
    logger.info('User %s updated group %s', caller.id, group_id)
    return group


def delete_group(caller, group_id: int) -> None:
    """Delete a group. Only its creator may do this; memberships cascade."""
    if not Group.objects.filter(pk=group_id, created_by_id=caller.id).exists():
        logger.warning('User %s denied deletion of group %s', caller.id, group_id)
        raise ForbiddenError('You do not have permission to delete this group.')

    Group.objects.filter(pk=group_id).delete()
    logger.info('User %s deleted group %s', caller.id, group_id)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

def add_member(caller, group_id: int, user_id: int, role: Optional[str] = None) -> GroupMember:
    require_admin(caller, group_id, 'You do not have permission to add members to this group.')

    if not user_id:
        raise ValidationError('User ID is required.')

    if not User.objects.filter(pk=user_id).exists():
        raise NotFoundError('User not found.')

    if is_member(user_id, group_id):
        raise ConflictError('User is already a member of this group.')

    try:
        with transaction.atomic():
            member = GroupMember.objects.create(
                group_id=group_id,
                user_id=user_id,
                role=role or GroupMember.Role.MEMBER,
            )
    except IntegrityError as exc:
        raise ConflictError('User is already a member of this group.') from exc

    logger.info(
        'User %s added user %s to group %s as %s',
        caller.id, user_id, group_id, member.role,
    )
    return member


def list_members(caller, group_id: int):
    require_member(caller, group_id)
    return GroupMember.objects.filter(group_id=group_id).select_related('user')


def remove_member(caller, group_id: int, user_id: int) -> None:
    """
    Remove a membership row. Members may always remove themselves;
    removing anyone else needs the admin role. Missing rows are ignored.
    """
    if user_id != caller.id:
        require_admin(caller, group_id, 'You do not have permission to remove members from this group.')

    deleted, _ = GroupMember.objects.filter(group_id=group_id, user_id=user_id).delete()
    if deleted:
        logger.info('User %s removed user %s from group %s', caller.id, user_id, group_id)


def update_member_role(caller, group_id: int, user_id: int, role: str) -> int:
    """Set a member's role. Returns the number of rows changed (0 or 1)."""
    if not role:
        raise ValidationError('Role is required.')

    require_admin(caller, group_id, 'You do not have permission to update member roles in this group.')

    updated = GroupMember.objects.filter(group_id=group_id, user_id=user_id).update(role=role)
    if updated:
        logger.info(
            'User %s set role of user %s in group %s to %s',
            caller.id, user_id, group_id, role,
        )
    return updated
