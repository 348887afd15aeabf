"""
Bearer-token authentication gate.

The caller identity is rebuilt from the verified token claims alone; no
database lookup is made per request.
"""
from functools import cached_property

from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings

from common.exceptions import InvalidTokenError


class Caller(TokenUser):
    """
    Identity of the user making the current request.

    Exposes the ``id``, ``username``, ``email`` and ``is_admin`` claims
    carried by the access token.
    """

    @cached_property
    def id(self):
        # Compared against integer foreign keys; some tokens carry it as a string.
        return int(self.token[api_settings.USER_ID_CLAIM])

    @cached_property
    def email(self):
        return self.token.get('email', '')

    @cached_property
    def is_admin(self):
        return bool(self.token.get('is_admin', False))

    def __str__(self):
        return f'Caller {self.username} (id={self.id})'


class CallerAuthentication(JWTStatelessUserAuthentication):
    """
    A missing token leaves the request anonymous (401 from the permission
    check); a token that fails verification is rejected with 403.
    """

    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except (InvalidToken, TokenError) as exc:
            raise InvalidTokenError() from exc

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except InvalidToken as exc:
            raise InvalidTokenError() from exc
