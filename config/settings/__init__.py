"""
Django settings module.

``DJANGO_ENV`` picks the environment: ``production``, ``test`` or
``development`` (the default).
"""
import os

env = os.environ.get('DJANGO_ENV', 'development')

if env == 'production':
    from config.settings.production import *  # noqa: F401, F403
elif env == 'test':
    from config.settings.test import *  # noqa: F401, F403
else:
    from config.settings.development import *  # noqa: F401, F403
