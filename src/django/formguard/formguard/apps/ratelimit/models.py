"""
Rate Limit Models - per-form overrides and site-wide defaults
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


DEFAULT_RATE_COUNT = 60
DEFAULT_RATE_FREQUENCY = 60  # seconds
DEFAULT_DISABLED_FORM_MESSAGE = 'This form is temporarily disabled. Please try again later.'

RATE_LIMIT_FIELD_NAMES = [
    'rate_limit_enabled',
    'rate_count',
    'rate_frequency',
    'rate_limit_auto_reset',
    'disabled_form_message',
    'disabled_notification_email',
    'rate_limit_reached_on',
]


class RateLimitedFormMixin(models.Model):
    """
    Submission rate limiting columns for a form model.

    Empty values inherit from SiteRateLimitConfig (threshold, window, message,
    notification address) or from the FORMGUARD settings (auto reset).
    A zero threshold or window switches limiting off for the form.
    """

    rate_limit_enabled = models.BooleanField(
        _('rate limit enabled'),
        default=True,
        help_text=_('Disable the form once too many submissions arrive')
    )

    rate_count = models.PositiveIntegerField(
        _('submissions'),
        blank=True,
        null=True,
        help_text=_('Maximum submissions per period; empty uses the site default')
    )

    rate_frequency = models.PositiveIntegerField(
        _('period (seconds)'),
        blank=True,
        null=True,
        help_text=_('Length of the counting window in seconds; empty uses the site default')
    )

    rate_limit_auto_reset = models.BooleanField(
        _('re-enable automatically'),
        blank=True,
        null=True,
        help_text=_('Empty follows the global FORMGUARD setting')
    )

    disabled_form_message = models.TextField(
        _('disabled form message'),
        blank=True,
        default='',
        help_text=_('Shown instead of the form while it is disabled')
    )

    disabled_notification_email = models.EmailField(
        _('notification email'),
        blank=True,
        default='',
        help_text=_('Who to tell when the form is disabled or re-enabled')
    )

    rate_limit_reached_on = models.DateTimeField(
        _('rate limit reached on'),
        blank=True,
        null=True,
        editable=False
    )

    class Meta:
        abstract = True


class SiteRateLimitConfig(models.Model):
    """Site-wide defaults for submission rate limiting (single row)"""

    default_rate_count = models.PositiveIntegerField(
        _('default submissions'),
        default=DEFAULT_RATE_COUNT
    )

    default_rate_frequency = models.PositiveIntegerField(
        _('default period (seconds)'),
        default=DEFAULT_RATE_FREQUENCY
    )

    default_disabled_form_message = models.TextField(
        _('default disabled form message'),
        default=DEFAULT_DISABLED_FORM_MESSAGE
    )

    default_disabled_notification_email = models.EmailField(
        _('default notification email'),
        blank=True,
        default=''
    )

    updated_at = models.DateTimeField(
        _('updated at'),
        auto_now=True
    )

    class Meta:
        db_table = 'ratelimit_site_config'
        verbose_name = _('Site rate limit configuration')
        verbose_name_plural = _('Site rate limit configuration')

    def __str__(self):
        return str(_('Site rate limit configuration'))

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        # The defaults row is permanent
        return 0, {}

    @classmethod
    def load(cls):
        """Return the configuration row, creating it with defaults on first use"""
        config, _created = cls.objects.get_or_create(pk=1)
        return config
