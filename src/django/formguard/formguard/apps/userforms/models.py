"""
User Defined Form Models - form pages, their fields and their submissions
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from formguard.apps.ratelimit.models import RateLimitedFormMixin


class UserDefinedFormManager(models.Manager):
    """Custom manager for form pages"""

    def published(self):
        """Get only published forms"""
        return self.filter(is_published=True)

    def rate_limited(self):
        """Get forms currently carrying a rate limit timestamp"""
        return self.filter(rate_limit_reached_on__isnull=False)


class UserDefinedForm(RateLimitedFormMixin, models.Model):
    """A page carrying an editor-built form"""

    title = models.CharField(
        _('title'),
        max_length=255
    )

    content = models.TextField(
        _('content'),
        blank=True,
        default='',
        help_text=_('Introductory text shown above the form')
    )

    submit_button_text = models.CharField(
        _('submit button text'),
        max_length=100,
        blank=True,
        default='',
    )

    on_complete_message = models.TextField(
        _('on complete message'),
        blank=True,
        default='',
        help_text=_('Returned to the visitor after a successful submission')
    )

    is_published = models.BooleanField(
        _('published'),
        default=False
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    updated_at = models.DateTimeField(
        _('updated at'),
        auto_now=True
    )

    objects = UserDefinedFormManager()

    class Meta:
        db_table = 'userforms_form'
        verbose_name = _('User Defined Form')
        verbose_name_plural = _('User Defined Forms')
        ordering = ['title']

    def __str__(self):
        return self.title

    def get_submit_button_text(self):
        return self.submit_button_text or str(_('Submit'))


class EditableFormField(models.Model):
    """A single editor-defined input on a form page"""

    FIELD_TYPE_CHOICES = [
        ('text', _('Single line text')),
        ('email', _('Email')),
        ('textarea', _('Multi line text')),
        ('number', _('Number')),
        ('checkbox', _('Checkbox')),
    ]

    form = models.ForeignKey(
        UserDefinedForm,
        on_delete=models.CASCADE,
        related_name='fields',
        verbose_name=_('form')
    )

    name = models.SlugField(
        _('name'),
        max_length=100
    )

    title = models.CharField(
        _('title'),
        max_length=255
    )

    field_type = models.CharField(
        _('field type'),
        max_length=20,
        choices=FIELD_TYPE_CHOICES,
        default='text'
    )

    required = models.BooleanField(
        _('required'),
        default=False
    )

    sort_order = models.PositiveIntegerField(
        _('sort order'),
        default=0
    )

    class Meta:
        db_table = 'userforms_field'
        verbose_name = _('Form Field')
        verbose_name_plural = _('Form Fields')
        ordering = ['sort_order', 'id']
        unique_together = [['form', 'name']]

    def __str__(self):
        return f'{self.title} ({self.name})'


class SubmittedForm(models.Model):
    """An immutable record of one visitor submission"""

    parent = models.ForeignKey(
        UserDefinedForm,
        on_delete=models.CASCADE,
        related_name='submissions',
        verbose_name=_('form')
    )

    data = models.JSONField(
        _('data'),
        default=dict,
        blank=True
    )

    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='form_submissions',
        blank=True,
        null=True,
        verbose_name=_('submitted by')
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True,
        db_index=True
    )

    class Meta:
        db_table = 'userforms_submission'
        verbose_name = _('Submitted Form')
        verbose_name_plural = _('Submitted Forms')
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['parent', 'created_at'], name='userforms_sub_parent_created'),
        ]

    def __str__(self):
        return f'Submission {self.pk} to {self.parent_id}'
