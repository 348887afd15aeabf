"""
URL configuration for the Users app.
"""
from django.urls import path

from apps.users.views import (
    AdminUserListView,
    LoginView,
    RegisterView,
    UserListView,
    UserSearchView,
)

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register', RegisterView.as_view(), name='register'),
    path('login', LoginView.as_view(), name='login'),

    # User directory
    path('users', UserListView.as_view(), name='user-list'),
    path('users/search', UserSearchView.as_view(), name='user-search'),
    path('users/all', AdminUserListView.as_view(), name='user-admin-list'),
]
