"""
Rate limit hook points.

The *_computed / *_checked signals carry an Adjustable ``value`` that
receivers may overwrite before the limiter uses it. The transition signals
fire after the new state has been persisted.
"""

from django.dispatch import Signal

from formguard.apps.userforms.signals import Adjustable

# kwargs: resource_id, config, since, value (Adjustable[int])
submission_volume_computed = Signal()

# kwargs: resource_id, state, now, value (Adjustable[bool])
rate_was_exceeded_checked = Signal()

# kwargs: resource_id, config, now, value (Adjustable[bool])
should_reset_checked = Signal()

# kwargs: form, decision
rate_limit_reached = Signal()

# kwargs: form, reason ('auto' or 'manual')
rate_limit_lifted = Signal()


def adjust(signal, sender, value, **kwargs):
    """Send ``signal`` and return the value after every receiver had its say"""
    holder = Adjustable(value)
    signal.send(sender=sender, value=holder, **kwargs)
    return holder.value


__all__ = [
    'Adjustable',
    'adjust',
    'submission_volume_computed',
    'rate_was_exceeded_checked',
    'should_reset_checked',
    'rate_limit_reached',
    'rate_limit_lifted',
]
