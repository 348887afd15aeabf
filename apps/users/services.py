"""
Account service: registration, login and user directory queries.
"""
import logging
import math

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.users.tokens import issue_access_token
from common.exceptions import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)
User = get_user_model()

INVALID_CREDENTIALS = 'Invalid credentials.'
SEARCH_MIN_LENGTH = 3
SEARCH_MAX_RESULTS = 20
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100


def register(username, password, email):
    """
    Create an account with a hashed password.

    Raises ``ValidationError`` when a field is missing and
    ``ConflictError`` when the username is taken. The new user is not
    logged in.
    """
    if not username or not password or not email:
        raise ValidationError('Username, password and email are required.')

    if User.objects.filter(username=username).exists():
        raise ConflictError('Username already exists.')

    user = User(username=username, email=email)
    user.set_password(password)
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same username.
        raise ConflictError('Username already exists.') from exc
    return user


def login(username, password):
    """
    Check credentials and issue an access token.

    Returns a ``(token, user)`` tuple. Unknown usernames and wrong
    passwords raise the same ``AuthError``.
    """
    if not username or not password:
        raise ValidationError('Username and password are required.')

    user = User.objects.filter(username=username).first()
    if user is None:
        # Hash once so unknown usernames cost the same as wrong passwords.
        User().set_password(password)
        logger.info('Rejected login attempt for username %r', username)
        raise AuthError(INVALID_CREDENTIALS)
    if not user.check_password(password):
        logger.info('Rejected login attempt for username %r', username)
        raise AuthError(INVALID_CREDENTIALS)

    token = issue_access_token(user)
    update_last_login(None, user)
    logger.info('User %s logged in', user.id)
    return token, user


def list_users(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    """
    Return one page of ``{id, username}`` rows ordered by username,
    with pagination metadata.
    """
    total = User.objects.count()
    offset = (page - 1) * limit
    rows = list(
        User.objects.order_by('username', 'id')
        .values('id', 'username')[offset:offset + limit]
    )
    pagination = {
        'total': total,
        'page': page,
        'limit': limit,
        'pages': math.ceil(total / limit),
    }
    return rows, pagination


def search_users(caller, query):
    """Find up to 20 other users whose username or email contains *query*."""
    if not query or len(query) < SEARCH_MIN_LENGTH:
        raise ValidationError(
            f'Search query must be at least {SEARCH_MIN_LENGTH} characters.'
        )
    return list(
        User.objects.filter(Q(username__contains=query) | Q(email__contains=query))
        .exclude(id=caller.id)
        .order_by('username')[:SEARCH_MAX_RESULTS]
    )


def list_all_users():
    """Every account with its admin flag. Callers must be platform admins."""
    return list(User.objects.order_by('id'))
