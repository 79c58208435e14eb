"""
Submission Rate Limit Service
Drives the enabled/tripped state machine of a form
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog
from django.utils import timezone

from .config import DjangoConfigSource
from .limiter import (
    ConfigSource,
    Decision,
    LimiterConfig,
    LimiterState,
    Notifier,
    RateLimitEvaluator,
    ResetPolicy,
    StateStore,
    SubmissionStore,
)
from .metrics import record_reset, record_trip
from .notifications import RateLimitNotifier
from .repositories import LimiterStateRepository, SubmissionRepository
from .signals import rate_limit_lifted, rate_limit_reached

logger = structlog.get_logger(__name__)

RESET_AUTO = 'auto'
RESET_MANUAL = 'manual'


@dataclass(frozen=True)
class RateLimitStatus:
    """Read-only snapshot of a form's rate limit, for operators"""
    form_id: int
    title: str
    config: LimiterConfig
    volume: int
    disabled: bool
    rate_limit_reached_on: Optional[datetime]
    should_reset: bool

    @property
    def rate_exceeded(self) -> bool:
        return not self.config.is_inert and self.volume > self.config.threshold


class SubmissionRateLimiter:
    """
    Enabled --(volume > threshold)--> Tripped
    Tripped --(cooled down, auto reset allowed)--> Enabled
    Tripped --(operator reset)--> Enabled
    """

    def __init__(
        self,
        submissions: Optional[SubmissionStore] = None,
        states: Optional[StateStore] = None,
        config_source: Optional[ConfigSource] = None,
        notifier: Optional[Notifier] = None,
        clock=None,
    ):
        self.submissions = submissions or SubmissionRepository()
        self.states = states or LimiterStateRepository()
        self.config_source = config_source or DjangoConfigSource()
        self.notifier = notifier or RateLimitNotifier()
        self.clock = clock or timezone.now
        self.evaluator = RateLimitEvaluator(self.submissions)
        self.reset_policy = ResetPolicy(self.submissions)

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self.clock()

    def get_config(self, form) -> LimiterConfig:
        return self.config_source.resolve(form)

    def is_disabled(self, form, now: Optional[datetime] = None,
                    config: Optional[LimiterConfig] = None) -> bool:
        """Whether the form must be shown without fields or actions"""
        config = config or self.get_config(form)
        if config.is_inert:
            return False
        state = LimiterState(tripped_at=form.rate_limit_reached_on)
        return self.evaluator.rate_was_exceeded(form.pk, state, self._now(now))

    def check_after_submission(self, form, now: Optional[datetime] = None) -> Decision:
        """Evaluate the form after a submission and trip it if the rate was exceeded"""
        now = self._now(now)
        config = self.get_config(form)
        if config.is_inert:
            return Decision(tripped=False)

        state = self.states.load(form.pk)
        form.rate_limit_reached_on = state.tripped_at
        decision = self.evaluator.evaluate(form.pk, config, state, now)

        if not decision.transitioned:
            return decision

        if not self.states.trip(form.pk, decision.tripped_at):
            # A concurrent request recorded the trip first; it also notified
            state = self.states.load(form.pk)
            form.rate_limit_reached_on = state.tripped_at
            logger.info(
                'rate_limit_trip_already_recorded',
                form_id=form.pk,
                rate_limit_reached_on=state.tripped_at,
            )
            return Decision(
                tripped=state.is_tripped(now),
                volume=decision.volume,
                tripped_at=state.tripped_at,
            )

        form.rate_limit_reached_on = decision.tripped_at
        record_trip()
        self.notifier.notify(form, True, config, decision)
        rate_limit_reached.send(sender=form.__class__, form=form, decision=decision)
        return decision

    def reset_if_cooled_down(self, form, now: Optional[datetime] = None) -> bool:
        """Re-enable a disabled form once a full window passed since its last submission"""
        now = self._now(now)
        config = self.get_config(form)
        if not self.is_disabled(form, now, config):
            return False
        if not self.reset_policy.should_reset(form.pk, config, now):
            return False
        return self._reset(form, config, RESET_AUTO)

    def reset(self, form) -> bool:
        """Operator reset, allowed whether or not automatic reset is on"""
        return self._reset(form, self.get_config(form), RESET_MANUAL)

    def _reset(self, form, config: LimiterConfig, reason: str) -> bool:
        cleared = self.states.clear(form.pk)
        form.rate_limit_reached_on = None
        if not cleared:
            return False

        record_reset(reason)
        self.notifier.notify(form, False, config)
        rate_limit_lifted.send(sender=form.__class__, form=form, reason=reason)
        return True

    def status(self, form, now: Optional[datetime] = None) -> RateLimitStatus:
        now = self._now(now)
        config = self.get_config(form)
        disabled = self.is_disabled(form, now, config)
        volume = 0
        if not config.is_inert:
            volume = self.evaluator.submission_volume(form.pk, config, now)

        return RateLimitStatus(
            form_id=form.pk,
            title=form.title,
            config=config,
            volume=volume,
            disabled=disabled,
            rate_limit_reached_on=form.rate_limit_reached_on,
            should_reset=disabled and self.reset_policy.should_reset(form.pk, config, now),
        )
