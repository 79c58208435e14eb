"""
Rate limit notifications: a structured warning log for every transition, plus
one best-effort email when a valid notification address is configured.
"""

from typing import Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.template.loader import render_to_string
from kombu.exceptions import OperationalError as BrokerError

from .config import get_setting
from .limiter import Decision, LimiterConfig, Notifier
from .metrics import record_notification_failure
from .tasks import send_rate_limit_notification_email

logger = structlog.get_logger(__name__)

DISABLED_MESSAGE = 'Form {title} ({id}) has been disabled after the submission rate limit has been reached.'
ENABLED_MESSAGE = 'Form {title} ({id}) has been enabled after the submission rate limit has been lifted.'


def is_valid_address(address: Optional[str]) -> bool:
    if not address:
        return False
    try:
        validate_email(address)
    except ValidationError:
        return False
    return True


class RateLimitNotifier(Notifier):
    """Tells administrators that a form was disabled or re-enabled"""

    reached_template = 'ratelimit/emails/rate_limit_reached.txt'
    lifted_template = 'ratelimit/emails/rate_limit_lifted.txt'

    def notify(self, form, disabled: bool, config: LimiterConfig,
               decision: Optional[Decision] = None) -> None:
        message = self.build_message(form, disabled)

        logger.warning(
            'form_rate_limit_reached' if disabled else 'form_rate_limit_lifted',
            form_id=form.pk,
            form_title=form.title,
            message=message,
            volume=decision.volume if decision else None,
            threshold=config.threshold,
            window=config.window,
        )

        address = config.notify_address
        if not address:
            return

        if not is_valid_address(address):
            logger.info(
                'rate_limit_notification_skipped',
                form_id=form.pk,
                reason='invalid_address',
                recipient=address,
            )
            return

        subject, body = self.render_email(form, disabled, config, decision, message)
        self.send_email(address, subject, body)

    def build_message(self, form, disabled: bool) -> str:
        template = DISABLED_MESSAGE if disabled else ENABLED_MESSAGE
        return template.format(title=form.title, id=form.pk)

    def render_email(self, form, disabled: bool, config: LimiterConfig,
                     decision: Optional[Decision], message: str) -> Tuple[str, str]:
        # Mail headers must stay on one line
        title = ' '.join(form.title.split())
        if disabled:
            subject = f'Form "{title}" disabled: submission rate limit reached'
            template = self.reached_template
        else:
            subject = f'Form "{title}" re-enabled: submission rate limit lifted'
            template = self.lifted_template

        body = render_to_string(template, {
            'form': form,
            'message': message,
            'config': config,
            'decision': decision,
        })
        return subject, body

    def send_email(self, address: str, subject: str, body: str) -> bool:
        """Make exactly one delivery attempt; True when it went through"""
        try:
            if get_setting('NOTIFICATION_EMAIL_ASYNC'):
                send_rate_limit_notification_email.delay(address, subject, body)
                return True
            result = send_rate_limit_notification_email(address, subject, body)
        except (BrokerError, OSError) as e:
            record_notification_failure('email')
            logger.warning(
                'rate_limit_notification_failed',
                recipient=address,
                subject=subject,
                error=str(e),
            )
            return False
        return bool(result and result.get('success'))
