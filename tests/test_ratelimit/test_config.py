"""
Rate limit configuration tests
"""

import pytest
from django.test import override_settings

from formguard.apps.ratelimit.config import (
    DjangoConfigSource,
    get_setting,
    rate_limiting_enabled,
    submission_rate_frequencies,
)
from formguard.apps.ratelimit.exceptions import RateLimitConfigurationError
from formguard.apps.ratelimit.models import DEFAULT_DISABLED_FORM_MESSAGE, SiteRateLimitConfig

from ..factories import UserDefinedFormFactory


class TestSettings:

    def test_defaults_apply_to_missing_keys(self):
        with override_settings(FORMGUARD={}):
            assert get_setting('RESET_RATE_LIMIT_AUTOMATICALLY') is True
            assert rate_limiting_enabled()

    def test_unknown_setting_raises(self):
        with pytest.raises(RateLimitConfigurationError) as exc_info:
            get_setting('NO_SUCH_SETTING')

        assert exc_info.value.config_key == 'NO_SUCH_SETTING'
        assert exc_info.value.error_code == 'CONFIGURATION_ERROR'

    def test_frequencies_are_seconds_label_pairs(self):
        with override_settings(FORMGUARD={'SUBMISSION_RATE_FREQUENCIES': {'120': 'per 2 minutes'}}):
            assert submission_rate_frequencies() == [(120, 'per 2 minutes')]

    @pytest.mark.parametrize('frequencies', [
        [60, 30],
        {'every minute': 'per minute'},
    ])
    def test_malformed_frequencies_raise(self, frequencies):
        with override_settings(FORMGUARD={'SUBMISSION_RATE_FREQUENCIES': frequencies}):
            with pytest.raises(RateLimitConfigurationError):
                submission_rate_frequencies()


@pytest.mark.django_db
class TestDjangoConfigSource:

    def setup_method(self):
        self.source = DjangoConfigSource()

    def test_form_values_win(self):
        form = UserDefinedFormFactory(
            rate_count=5,
            rate_frequency=30,
            rate_limit_auto_reset=False,
            disabled_form_message='Closed for now.',
            disabled_notification_email='owner@example.com',
        )

        config = self.source.resolve(form)

        assert config.enabled
        assert config.threshold == 5
        assert config.window == 30
        assert config.auto_reset is False
        assert config.notify_address == 'owner@example.com'
        assert config.disabled_message == 'Closed for now.'

    def test_empty_form_values_fall_back_to_site_defaults(self, site_config):
        site_config.default_rate_count = 10
        site_config.default_rate_frequency = 30
        site_config.default_disabled_notification_email = 'webmaster@example.com'
        site_config.save()
        form = UserDefinedFormFactory(rate_count=None, rate_frequency=None)

        config = self.source.resolve(form)

        assert config.threshold == 10
        assert config.window == 30
        assert config.auto_reset is True
        assert config.notify_address == 'webmaster@example.com'
        assert config.disabled_message == DEFAULT_DISABLED_FORM_MESSAGE

    def test_no_notification_address_resolves_to_none(self):
        config = self.source.resolve(UserDefinedFormFactory())

        assert config.notify_address is None

    def test_zero_overrides_site_default(self):
        config = self.source.resolve(UserDefinedFormFactory(rate_count=0))

        assert config.threshold == 0
        assert config.is_inert

    def test_site_default_edits_apply_immediately(self, site_config):
        form = UserDefinedFormFactory(rate_count=None)
        assert self.source.resolve(form).threshold == 60

        site_config.default_rate_count = 3
        site_config.save()

        assert self.source.resolve(form).threshold == 3

    def test_injected_site_config_is_used(self):
        site = SiteRateLimitConfig(default_rate_count=7)
        source = DjangoConfigSource(site_config=site)

        assert source.resolve(UserDefinedFormFactory(rate_count=None)).threshold == 7

    def test_global_switch(self):
        form = UserDefinedFormFactory()

        with override_settings(FORMGUARD={'SUBMISSION_RATE_LIMIT_ENABLED': False}):
            assert not self.source.resolve(form).enabled

    def test_global_auto_reset(self):
        form = UserDefinedFormFactory(rate_limit_auto_reset=None)

        with override_settings(FORMGUARD={'RESET_RATE_LIMIT_AUTOMATICALLY': False}):
            assert self.source.resolve(form).auto_reset is False

    def test_per_form_auto_reset_overrides_global(self):
        form = UserDefinedFormFactory(rate_limit_auto_reset=True)

        with override_settings(FORMGUARD={'RESET_RATE_LIMIT_AUTOMATICALLY': False}):
            assert self.source.resolve(form).auto_reset is True


@pytest.mark.django_db
class TestSiteRateLimitConfig:

    def test_load_creates_a_single_row(self):
        first = SiteRateLimitConfig.load()
        second = SiteRateLimitConfig.load()

        assert first.pk == second.pk == 1
        assert SiteRateLimitConfig.objects.count() == 1

    def test_save_always_targets_the_single_row(self):
        SiteRateLimitConfig.load()
        SiteRateLimitConfig(default_rate_count=9).save()

        assert SiteRateLimitConfig.objects.count() == 1
        assert SiteRateLimitConfig.load().default_rate_count == 9

    def test_delete_is_a_no_op(self, site_config):
        site_config.delete()

        assert SiteRateLimitConfig.objects.exists()
