"""
Audit logging for account changes.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender='users.User')
def log_account_saved(sender, instance, created, update_fields=None, **kwargs):
    if created:
        logger.info(
            'Account created: %s (id=%s, is_admin=%s)',
            instance.username,
            instance.id,
            instance.is_admin,
        )
    elif instance.is_admin and not update_fields:
        # Full saves of admin accounts come from the admin site or create_admin.
        logger.info('Admin account saved: %s (id=%s)', instance.username, instance.id)
