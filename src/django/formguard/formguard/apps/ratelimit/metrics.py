"""
Prometheus counters for rate limit transitions and notification failures.
"""

from prometheus_client import Counter

RATE_LIMIT_TRIPS = Counter(
    'formguard_rate_limit_trips_total',
    'Forms disabled after reaching their submission rate limit',
)

RATE_LIMIT_RESETS = Counter(
    'formguard_rate_limit_resets_total',
    'Forms re-enabled after their submission rate limit was lifted',
    ['reason'],
)

NOTIFICATION_FAILURES = Counter(
    'formguard_rate_limit_notification_failures_total',
    'Rate limit notifications that could not be delivered',
    ['channel'],
)


def record_trip() -> None:
    RATE_LIMIT_TRIPS.inc()


def record_reset(reason: str) -> None:
    RATE_LIMIT_RESETS.labels(reason=reason).inc()


def record_notification_failure(channel: str = 'email') -> None:
    NOTIFICATION_FAILURES.labels(channel=channel).inc()
