"""
Custom permissions for the Users app.
"""
from rest_framework.permissions import BasePermission


class IsPlatformAdmin(BasePermission):
    """
    Allows access only to callers whose token carries ``is_admin``.
    """
    message = 'Admin privileges required.'

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, 'is_admin', False)
        )
