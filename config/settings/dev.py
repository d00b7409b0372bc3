"""Development settings.

Extends the base settings with debug enabled and verbose booking logs.
Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

LOGGING['loggers']['bookings']['level'] = 'DEBUG'  # noqa: F405
