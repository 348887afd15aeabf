"""
``runserver`` that listens on the configured ``PORT`` when no address is given.

Usage:
    python manage.py runserver            # 127.0.0.1:$PORT
    python manage.py runserver 0.0.0.0:8000
"""
from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import (
    Command as StaticfilesRunserverCommand,
)


class Command(StaticfilesRunserverCommand):
    default_port = str(settings.PORT)
