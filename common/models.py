"""
Abstract base models shared by the Huddle apps.
"""
from django.db import models


class TimestampedModel(models.Model):
    """
    Adds ``created_at`` (set once, indexed) and ``updated_at`` (refreshed on
    every save). Subclasses declare their own ordering.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
