"""
Serializers for the Users app.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from common.serializers import StrictSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Public projection of a user. Never includes the password hash.
    """

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'is_admin']
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username']
        read_only_fields = fields


class UserSearchResultSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email']
        read_only_fields = fields


class RegisterSerializer(StrictSerializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'},
    )
    email = serializers.EmailField(max_length=254)


class LoginSerializer(StrictSerializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'},
    )


class UserListQuerySerializer(serializers.Serializer):
    """Query parameters for the paginated user listing."""
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, default=100)
