"""
Django App Configuration for User Defined Forms
"""

from django.apps import AppConfig


class UserFormsConfig(AppConfig):
    """
    Form pages built by editors, and the submissions they collect.

    Lifecycle hook points live in signals.py.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'formguard.apps.userforms'
    label = 'userforms'
    verbose_name = 'User Defined Forms'
