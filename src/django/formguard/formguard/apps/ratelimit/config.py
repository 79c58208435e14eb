"""
Rate limit configuration resolution.

Per-form columns win; empty columns fall back to the SiteRateLimitConfig row,
and the global switches come from the FORMGUARD settings dict.
"""

from django.conf import settings

from .exceptions import RateLimitConfigurationError
from .limiter import ConfigSource, LimiterConfig
from .models import SiteRateLimitConfig

DEFAULTS = {
    'SUBMISSION_RATE_LIMIT_ENABLED': True,
    'RESET_RATE_LIMIT_AUTOMATICALLY': True,
    'SUBMISSION_RATE_FREQUENCIES': {
        60: 'per minute',
        30: 'per 30 seconds',
    },
    'NOTIFICATION_EMAIL_ASYNC': False,
    'NOTIFICATION_FROM_EMAIL': None,
}


def get_setting(name):
    """Read one FORMGUARD setting, falling back to the built-in default"""
    if name not in DEFAULTS:
        raise RateLimitConfigurationError(f"Unknown FORMGUARD setting: {name}", config_key=name)
    return getattr(settings, 'FORMGUARD', {}).get(name, DEFAULTS[name])


def rate_limiting_enabled() -> bool:
    return bool(get_setting('SUBMISSION_RATE_LIMIT_ENABLED'))


def submission_rate_frequencies():
    """Window choices offered to editors, as (seconds, label) pairs"""
    frequencies = get_setting('SUBMISSION_RATE_FREQUENCIES')
    if not isinstance(frequencies, dict):
        raise RateLimitConfigurationError(
            "SUBMISSION_RATE_FREQUENCIES must map seconds to labels",
            config_key='SUBMISSION_RATE_FREQUENCIES',
        )
    try:
        return [(int(seconds), label) for seconds, label in frequencies.items()]
    except (TypeError, ValueError) as e:
        raise RateLimitConfigurationError(
            f"SUBMISSION_RATE_FREQUENCIES keys must be seconds: {e}",
            config_key='SUBMISSION_RATE_FREQUENCIES',
        ) from e


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


class DjangoConfigSource(ConfigSource):
    """Resolves the effective LimiterConfig of a RateLimitedFormMixin instance"""

    def __init__(self, site_config=None):
        self._site_config = site_config

    @property
    def site_config(self):
        # Re-read per resolve so admin edits apply without a restart
        if self._site_config is None:
            return SiteRateLimitConfig.load()
        return self._site_config

    def resolve(self, form) -> LimiterConfig:
        site = self.site_config

        return LimiterConfig(
            enabled=rate_limiting_enabled() and bool(form.rate_limit_enabled),
            threshold=_first_set(form.rate_count, site.default_rate_count) or 0,
            window=_first_set(form.rate_frequency, site.default_rate_frequency) or 0,
            auto_reset=bool(_first_set(
                form.rate_limit_auto_reset,
                get_setting('RESET_RATE_LIMIT_AUTOMATICALLY'),
            )),
            notify_address=(
                form.disabled_notification_email
                or site.default_disabled_notification_email
                or None
            ),
            disabled_message=form.disabled_form_message or site.default_disabled_form_message,
        )
