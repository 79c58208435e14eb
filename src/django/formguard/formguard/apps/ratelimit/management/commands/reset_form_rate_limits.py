"""
Django management command to re-enable rate limited forms.
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

import structlog

from formguard.apps.userforms.models import UserDefinedForm

from ...services import SubmissionRateLimiter

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    """
    Reset the submission rate limit of the given forms, or of every disabled
    form that has cooled down when --cooled-down is passed.
    """

    help = 'Re-enable forms disabled by the submission rate limit'

    def add_arguments(self, parser):
        parser.add_argument(
            'form_ids',
            nargs='*',
            type=int,
            help='IDs of the forms to reset',
        )
        parser.add_argument(
            '--cooled-down',
            action='store_true',
            help='Only reset forms whose last submission is older than their rate window',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be reset without changing anything',
        )

    def handle(self, *args, **options):
        form_ids = options['form_ids']
        cooled_down = options['cooled_down']
        dry_run = options['dry_run']

        if not form_ids and not cooled_down:
            raise CommandError('Pass one or more form IDs, or --cooled-down')

        forms = UserDefinedForm.objects.rate_limited()
        if form_ids:
            forms = forms.filter(pk__in=form_ids)
            missing = set(form_ids) - set(
                UserDefinedForm.objects.filter(pk__in=form_ids).values_list('pk', flat=True)
            )
            for form_id in sorted(missing):
                self.stderr.write(self.style.WARNING(f'Form {form_id} does not exist'))

        limiter = SubmissionRateLimiter()
        now = timezone.now()
        reset_count = 0

        for form in forms.order_by('pk'):
            if cooled_down:
                status = limiter.status(form, now)
                if not status.should_reset:
                    continue

            if dry_run:
                self.stdout.write(f'Would reset form {form.pk} ({form.title})')
                continue

            if cooled_down:
                was_reset = limiter.reset_if_cooled_down(form, now)
            else:
                was_reset = limiter.reset(form)

            if was_reset:
                reset_count += 1
                self.stdout.write(f'Reset form {form.pk} ({form.title})')

        logger.info('rate_limit_reset_command_finished', reset=reset_count, dry_run=dry_run)
        self.stdout.write(self.style.SUCCESS(f'{reset_count} form(s) re-enabled'))
