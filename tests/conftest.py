"""
Shared fixtures for the Huddle test suite.
"""
import itertools

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from apps.users.tokens import issue_access_token
from common.authentication import Caller

User = get_user_model()

DEFAULT_PASSWORD = 'correct-horse'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make_user(username=None, email=None, password=DEFAULT_PASSWORD, is_admin=False):
        n = next(counter)
        username = username or f'user{n}'
        user = User(
            username=username,
            email=email or f'{username}@example.com',
            is_admin=is_admin,
        )
        user.set_password(password)
        user.save()
        return user

    return _make_user


@pytest.fixture
def caller_for():
    """Build the identity the authentication gate would attach for *user*."""

    def _caller_for(user):
        return Caller(AccessToken(issue_access_token(user)))

    return _caller_for


@pytest.fixture
def client_for():
    """An API client that sends a valid bearer token for *user*."""

    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_access_token(user)}')
        return client

    return _client_for


@pytest.fixture
def alice(make_user):
    return make_user('alice')


@pytest.fixture
def bob(make_user):
    return make_user('bob')


@pytest.fixture
def carol(make_user):
    return make_user('carol')
