"""
Django App Configuration for Submission Rate Limiting
"""

from django.apps import AppConfig


class RateLimitConfig(AppConfig):
    """
    Disables a user defined form after too many submissions in a time window
    and re-enables it automatically or from the admin.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'formguard.apps.ratelimit'
    label = 'ratelimit'
    verbose_name = 'Submission Rate Limiting'

    def ready(self) -> None:
        # Connect the userforms lifecycle receivers
        from . import receivers  # noqa: F401
