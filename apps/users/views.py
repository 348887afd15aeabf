"""
Views for the Users app.
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.users import services
from apps.users.permissions import IsPlatformAdmin
from apps.users.serializers import (
    LoginSerializer,
    RegisterSerializer,
    UserListQuerySerializer,
    UserSearchResultSerializer,
    UserSerializer,
    UserSummarySerializer,
)

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    Register a new user account.

    POST /api/v1/register
    Body: {"username": "...", "password": "...", "email": "..."}
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.register(**serializer.validated_data)
        return Response(
            {
                'success': True,
                'message': 'User registered successfully.',
                'data': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class LoginView(APIView):
    """
    Login with username and password to obtain an access token.

    POST /api/v1/login
    Body: {"username": "...", "password": "..."}
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token, user = services.login(**serializer.validated_data)
        return Response(
            {
                'success': True,
                'token': token,
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class UserListView(APIView):
    """
    GET /api/v1/users?page=1&limit=100
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = UserListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rows, pagination = services.list_users(**query.validated_data)
        return Response(
            {
                'success': True,
                'data': UserSummarySerializer(rows, many=True).data,
                'pagination': pagination,
            }
        )


class UserSearchView(APIView):
    """
    Search for other users by username or email.

    GET /api/v1/users/search?query=<text>
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = request.query_params.get('query', '')
        users = services.search_users(request.user, query)
        return Response(
            {
                'success': True,
                'data': UserSearchResultSerializer(users, many=True).data,
            }
        )


class AdminUserListView(APIView):
    """
    Full user listing for platform admins.

    GET /api/v1/users/all
    """
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        users = services.list_all_users()
        return Response(
            {
                'success': True,
                'data': UserSerializer(users, many=True).data,
            }
        )
