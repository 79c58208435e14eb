"""
Notification Email Task
One delivery attempt per rate limit transition; failures are logged, not retried
"""

import smtplib
from typing import Any, Dict

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import BadHeaderError, send_mail
from django.utils import timezone

from .config import get_setting
from .exceptions import NotificationDeliveryError
from .metrics import record_notification_failure

logger = structlog.get_logger(__name__)


def deliver_email(recipient: str, subject: str, body: str) -> None:
    """Hand one message to the mail backend, raising NotificationDeliveryError on transport failure"""
    from_email = get_setting('NOTIFICATION_FROM_EMAIL') or settings.DEFAULT_FROM_EMAIL
    try:
        send_mail(subject, body, from_email, [recipient], fail_silently=False)
    except (smtplib.SMTPException, BadHeaderError, OSError) as e:
        raise NotificationDeliveryError(
            recipient,
            details={'cause': str(e), 'subject': subject},
        ) from e


@shared_task(
    name='formguard.ratelimit.send_rate_limit_notification_email',
    max_retries=0,
    ignore_result=True,
)
def send_rate_limit_notification_email(recipient: str, subject: str, body: str) -> Dict[str, Any]:
    """
    Deliver a rate limit notification email.

    A delivery failure is reported in the returned dict rather than raised so
    that a worker never retries or crashes on it.
    """
    try:
        deliver_email(recipient, subject, body)
    except NotificationDeliveryError as e:
        record_notification_failure('email')
        logger.warning(
            "rate_limit_notification_failed",
            recipient=recipient,
            subject=subject,
            error=e.details.get('cause', e.message),
        )
        return {
            'success': False,
            'recipient': recipient,
            'error': e.to_dict(),
        }

    return {
        'success': True,
        'recipient': recipient,
        'sent_at': timezone.now().isoformat(),
    }
