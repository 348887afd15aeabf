"""
Custom User model for the Huddle application.
"""
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Account that logs in with a username and password.

    ``is_admin`` is the platform-wide admin flag carried in access tokens.
    It is unrelated to group roles.
    """
    is_admin = models.BooleanField(
        default=False,
        help_text='Grants access to platform-wide admin listings.',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['username']

    def __str__(self):
        return f'{self.username} ({self.email})'
