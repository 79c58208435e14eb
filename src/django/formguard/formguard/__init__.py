"""
formguard - submission rate limiting for user defined forms
"""

from .celery import app as celery_app

__all__ = ('celery_app',)
