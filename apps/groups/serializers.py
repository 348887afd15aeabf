"""
Serializers for the Groups app.
"""
from rest_framework import serializers

from apps.groups.models import Group, GroupMember
from common.serializers import StrictSerializer


class GroupSerializer(serializers.ModelSerializer):
    created_by = serializers.IntegerField(source='created_by_id', read_only=True)

    class Meta:
        model = Group
        fields = ['id', 'name', 'description', 'created_by', 'created_at']
        read_only_fields = fields


class GroupMemberSerializer(serializers.ModelSerializer):
    """A member's identity fields joined with their membership row."""
    id = serializers.IntegerField(source='user.id', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = GroupMember
        fields = ['id', 'username', 'email', 'role', 'joined_at']
        read_only_fields = fields


class GroupCreateSerializer(StrictSerializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GroupUpdateSerializer(GroupCreateSerializer):
    """Body of a group update; validated once the admin check has passed."""


class AddMemberSerializer(StrictSerializer):
    user_id = serializers.IntegerField(min_value=1)
    role = serializers.ChoiceField(choices=GroupMember.Role.choices, required=False)


class UpdateMemberRoleSerializer(StrictSerializer):
    role = serializers.ChoiceField(choices=GroupMember.Role.choices)
