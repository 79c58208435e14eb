"""
Receivers wiring the rate limiter into the user defined form lifecycle.
"""

from django.dispatch import receiver

from formguard.apps.userforms.forms import LiteralField
from formguard.apps.userforms.signals import (
    form_actions_built,
    form_fields_built,
    form_page_requested,
    form_submission_processed,
)

from .services import SubmissionRateLimiter


@receiver(form_page_requested, dispatch_uid='ratelimit_reset_if_cooled_down')
def reset_rate_limit_if_cooled_down(sender, form, **kwargs):
    SubmissionRateLimiter().reset_if_cooled_down(form)


@receiver(form_submission_processed, dispatch_uid='ratelimit_check_after_submission')
def check_rate_limit_after_submission(sender, form, **kwargs):
    SubmissionRateLimiter().check_after_submission(form)


@receiver(form_fields_built, dispatch_uid='ratelimit_replace_fields')
def replace_fields_when_disabled(sender, form, fields, **kwargs):
    limiter = SubmissionRateLimiter()
    config = limiter.get_config(form)
    if limiter.is_disabled(form, config=config):
        fields.value = {'warning': LiteralField(content=config.disabled_message)}


@receiver(form_actions_built, dispatch_uid='ratelimit_remove_actions')
def remove_actions_when_disabled(sender, form, actions, **kwargs):
    if SubmissionRateLimiter().is_disabled(form):
        actions.value = []
