"""
Submission rate limit decision procedure.

A form trips once more than ``threshold`` submissions arrived within the last
``window`` seconds. A tripped form stays tripped (it is not re-derived from the
current volume) until it is reset, either by an operator or, when automatic
reset is allowed, once a whole window has passed since the last submission.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from .signals import (
    adjust,
    rate_was_exceeded_checked,
    should_reset_checked,
    submission_volume_computed,
)


@dataclass(frozen=True)
class LimiterConfig:
    """Effective rate limit settings for one form"""
    enabled: bool
    threshold: int
    window: int  # seconds
    auto_reset: bool
    notify_address: Optional[str] = None
    disabled_message: str = ''

    @property
    def is_inert(self) -> bool:
        return not self.enabled or not self.threshold or not self.window

    @property
    def window_delta(self) -> timedelta:
        return timedelta(seconds=self.window)


@dataclass(frozen=True)
class LimiterState:
    """Persisted limiter state; a null ``tripped_at`` means enabled"""
    tripped_at: Optional[datetime] = None

    def is_tripped(self, now: datetime) -> bool:
        return self.tripped_at is not None and self.tripped_at <= now


@dataclass(frozen=True)
class SubmissionRecord:
    resource_id: Any
    created_at: datetime


@dataclass(frozen=True)
class Decision:
    tripped: bool
    volume: int = 0
    tripped_at: Optional[datetime] = None
    # True only when this evaluation moved the form from enabled to tripped
    transitioned: bool = False


class SubmissionStore(ABC):
    """Append-only log of submissions"""

    @abstractmethod
    def count_since(self, resource_id, since: datetime) -> int:
        """Number of submissions created strictly after ``since``"""

    @abstractmethod
    def most_recent(self, resource_id) -> Optional[SubmissionRecord]:
        """Latest submission, or None when there are none"""


class StateStore(ABC):
    """Durable storage for LimiterState"""

    @abstractmethod
    def load(self, resource_id) -> LimiterState:
        pass

    @abstractmethod
    def save(self, resource_id, state: LimiterState) -> None:
        pass

    @abstractmethod
    def trip(self, resource_id, tripped_at: datetime) -> bool:
        """Set ``tripped_at`` only if it is currently null; True if it was set"""

    @abstractmethod
    def clear(self, resource_id) -> bool:
        """Null ``tripped_at``; True if a value was cleared"""


class ConfigSource(ABC):

    @abstractmethod
    def resolve(self, resource) -> LimiterConfig:
        pass


class Notifier(ABC):

    @abstractmethod
    def notify(self, resource, disabled: bool, config: LimiterConfig,
               decision: Optional[Decision] = None) -> None:
        pass


class RateLimitEvaluator:
    """Decides whether a form is tripped given its config and stored state"""

    def __init__(self, submissions: SubmissionStore):
        self.submissions = submissions

    def submission_volume(self, resource_id, config: LimiterConfig, now: datetime) -> int:
        """Return the number of submissions during the configured window"""
        since = now - config.window_delta
        volume = self.submissions.count_since(resource_id, since)
        return adjust(
            submission_volume_computed,
            sender=self.__class__,
            value=volume,
            resource_id=resource_id,
            config=config,
            since=since,
        )

    def rate_was_exceeded(self, resource_id, state: LimiterState, now: datetime) -> bool:
        """Whether the threshold was reached at some point in the past"""
        return adjust(
            rate_was_exceeded_checked,
            sender=self.__class__,
            value=state.is_tripped(now),
            resource_id=resource_id,
            state=state,
            now=now,
        )

    def evaluate(self, resource_id, config: LimiterConfig, state: LimiterState,
                 now: datetime) -> Decision:
        if config.is_inert:
            return Decision(tripped=False)

        volume = self.submission_volume(resource_id, config, now)

        if self.rate_was_exceeded(resource_id, state, now):
            return Decision(tripped=True, volume=volume, tripped_at=state.tripped_at)

        if volume > config.threshold:
            return Decision(tripped=True, volume=volume, tripped_at=now, transitioned=True)

        return Decision(tripped=False, volume=volume)


class ResetPolicy:
    """
    Cooldown check: a tripped form may be re-enabled once a full window has
    elapsed since its most recent submission.
    """

    def __init__(self, submissions: SubmissionStore):
        self.submissions = submissions

    def should_reset(self, resource_id, config: LimiterConfig, now: datetime) -> bool:
        should = False
        if config.auto_reset:
            last_submission = self.submissions.most_recent(resource_id)
            if last_submission is not None:
                should = now - last_submission.created_at > config.window_delta

        return adjust(
            should_reset_checked,
            sender=self.__class__,
            value=should,
            resource_id=resource_id,
            config=config,
            now=now,
        )
