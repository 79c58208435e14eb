"""
Rate limit decision procedure tests
Evaluator and reset policy against an in-memory submission store
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import Mock

import pytest

from formguard.apps.ratelimit.limiter import (
    Decision,
    LimiterConfig,
    LimiterState,
    RateLimitEvaluator,
    ResetPolicy,
    SubmissionRecord,
    SubmissionStore,
)
from formguard.apps.ratelimit.signals import (
    rate_was_exceeded_checked,
    should_reset_checked,
    submission_volume_computed,
)

NOW = datetime(2026, 3, 2, 12, 0, 0, tzinfo=dt_timezone.utc)
FORM_ID = 7


class InMemorySubmissionStore(SubmissionStore):

    def __init__(self, timestamps=()):
        self.timestamps = list(timestamps)
        self.count_since_calls = []

    def add(self, created_at, count=1):
        self.timestamps.extend([created_at] * count)

    def count_since(self, resource_id, since):
        self.count_since_calls.append((resource_id, since))
        return sum(1 for created_at in self.timestamps if created_at > since)

    def most_recent(self, resource_id):
        if not self.timestamps:
            return None
        return SubmissionRecord(resource_id=resource_id, created_at=max(self.timestamps))


def make_config(**overrides):
    values = {
        'enabled': True,
        'threshold': 60,
        'window': 60,
        'auto_reset': True,
        'notify_address': None,
    }
    values.update(overrides)
    return LimiterConfig(**values)


class TestLimiterConfig:

    @pytest.mark.parametrize('overrides', [
        {'enabled': False},
        {'threshold': 0},
        {'window': 0},
    ])
    def test_inert_configurations(self, overrides):
        assert make_config(**overrides).is_inert

    def test_active_configuration(self):
        config = make_config()
        assert not config.is_inert
        assert config.window_delta == timedelta(seconds=60)


class TestLimiterState:

    def test_null_timestamp_is_enabled(self):
        assert not LimiterState().is_tripped(NOW)

    def test_past_and_present_timestamps_are_tripped(self):
        assert LimiterState(tripped_at=NOW - timedelta(seconds=1)).is_tripped(NOW)
        assert LimiterState(tripped_at=NOW).is_tripped(NOW)

    def test_future_timestamp_is_not_tripped_yet(self):
        assert not LimiterState(tripped_at=NOW + timedelta(seconds=1)).is_tripped(NOW)


class TestRateLimitEvaluator:

    def setup_method(self):
        self.store = InMemorySubmissionStore()
        self.evaluator = RateLimitEvaluator(self.store)

    def test_sixty_one_submissions_in_window_trip(self):
        self.store.add(NOW - timedelta(seconds=30), count=61)

        decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)

        assert decision == Decision(tripped=True, volume=61, tripped_at=NOW, transitioned=True)

    def test_volume_equal_to_threshold_does_not_trip(self):
        self.store.add(NOW - timedelta(seconds=30), count=60)

        decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)

        assert not decision.tripped
        assert decision.volume == 60
        assert not decision.transitioned

    @pytest.mark.parametrize('volume', [0, 1, 30, 59, 60])
    def test_volume_at_or_below_threshold_stays_enabled(self, volume):
        self.store.add(NOW - timedelta(seconds=5), count=volume)

        decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)

        assert not decision.tripped

    def test_window_start_is_now_minus_window(self):
        self.evaluator.evaluate(FORM_ID, make_config(window=30), LimiterState(), NOW)

        assert self.store.count_since_calls == [(FORM_ID, NOW - timedelta(seconds=30))]

    def test_submissions_outside_the_window_are_not_counted(self):
        self.store.add(NOW - timedelta(seconds=60), count=100)
        self.store.add(NOW - timedelta(seconds=10), count=3)

        decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)

        assert decision.volume == 3
        assert not decision.tripped

    def test_tripped_state_is_sticky_regardless_of_volume(self):
        tripped_at = NOW - timedelta(minutes=10)

        decision = self.evaluator.evaluate(
            FORM_ID, make_config(), LimiterState(tripped_at=tripped_at), NOW
        )

        assert decision.tripped
        assert decision.tripped_at == tripped_at
        assert decision.volume == 0
        assert not decision.transitioned

    def test_future_tripped_at_is_not_sticky(self):
        state = LimiterState(tripped_at=NOW + timedelta(minutes=1))

        decision = self.evaluator.evaluate(FORM_ID, make_config(), state, NOW)

        assert not decision.tripped

    @pytest.mark.parametrize('overrides', [
        {'enabled': False},
        {'threshold': 0},
        {'window': 0},
    ])
    def test_inert_configuration_never_queries_volume(self, overrides):
        store = Mock(spec=SubmissionStore)
        evaluator = RateLimitEvaluator(store)
        state = LimiterState(tripped_at=NOW - timedelta(minutes=1))

        decision = evaluator.evaluate(FORM_ID, make_config(**overrides), state, NOW)

        assert decision == Decision(tripped=False)
        store.count_since.assert_not_called()

    def test_volume_receivers_can_adjust_the_volume(self):
        def add_hundred(sender, value, **kwargs):
            value.value += 100

        submission_volume_computed.connect(add_hundred, weak=False)
        try:
            decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)
        finally:
            submission_volume_computed.disconnect(add_hundred)

        assert decision.volume == 100
        assert decision.transitioned

    def test_rate_exceeded_receivers_can_force_a_sticky_decision(self):
        self.store.add(NOW - timedelta(seconds=5), count=3)

        def force_exceeded(sender, value, **kwargs):
            value.value = True

        rate_was_exceeded_checked.connect(force_exceeded, weak=False)
        try:
            decision = self.evaluator.evaluate(FORM_ID, make_config(), LimiterState(), NOW)
        finally:
            rate_was_exceeded_checked.disconnect(force_exceeded)

        assert decision.tripped
        assert decision.volume == 3
        assert not decision.transitioned

    def test_rate_exceeded_receivers_can_lift_a_stored_trip(self):
        state = LimiterState(tripped_at=NOW - timedelta(minutes=1))

        def clear_exceeded(sender, value, **kwargs):
            value.value = False

        rate_was_exceeded_checked.connect(clear_exceeded, weak=False)
        try:
            decision = self.evaluator.evaluate(FORM_ID, make_config(), state, NOW)
        finally:
            rate_was_exceeded_checked.disconnect(clear_exceeded)

        assert not decision.tripped


class TestResetPolicy:

    def setup_method(self):
        self.store = InMemorySubmissionStore()
        self.policy = ResetPolicy(self.store)

    def test_no_submissions_never_resets(self):
        assert not self.policy.should_reset(FORM_ID, make_config(), NOW)

    def test_resets_once_a_full_window_passed_since_last_submission(self):
        self.store.add(NOW - timedelta(seconds=61))

        assert self.policy.should_reset(FORM_ID, make_config(), NOW)

    def test_exactly_one_window_is_not_enough(self):
        self.store.add(NOW - timedelta(seconds=60))

        assert not self.policy.should_reset(FORM_ID, make_config(), NOW)

    def test_only_the_most_recent_submission_counts(self):
        self.store.add(NOW - timedelta(hours=1), count=500)
        self.store.add(NOW - timedelta(seconds=5))

        assert not self.policy.should_reset(FORM_ID, make_config(), NOW)

    @pytest.mark.parametrize('elapsed', [61, 3600, 86400 * 30])
    def test_auto_reset_off_never_resets(self, elapsed):
        self.store.add(NOW - timedelta(seconds=elapsed))

        assert not self.policy.should_reset(FORM_ID, make_config(auto_reset=False), NOW)

    def test_receivers_can_veto_a_reset(self):
        self.store.add(NOW - timedelta(hours=1))

        def veto(sender, value, **kwargs):
            value.value = False

        should_reset_checked.connect(veto, weak=False)
        try:
            assert not self.policy.should_reset(FORM_ID, make_config(), NOW)
        finally:
            should_reset_checked.disconnect(veto)
