"""
Access tokens issued at login.

Tokens are signed with ``SIMPLE_JWT['SIGNING_KEY']`` and expire after
``SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']``.
"""
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken


class UserAccessToken(AccessToken):
    """
    Access token carrying the ``id``, ``username``, ``email`` and
    ``is_admin`` claims of the user it was issued to.
    """

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        # simplejwt stringifies the id claim; keep it numeric.
        token[api_settings.USER_ID_CLAIM] = user.id
        token['username'] = user.username
        token['email'] = user.email
        token['is_admin'] = user.is_admin
        return token


def issue_access_token(user):
    """Return a signed, encoded access token for *user*."""
    return str(UserAccessToken.for_user(user))
