"""
Rate Limit Admin - editor controls for submission rate limiting
"""

from django import forms
from django.contrib import admin, messages
from django.contrib.admin.utils import unquote
from django.http import HttpResponseRedirect
from django.urls import reverse
from django.utils.translation import gettext_lazy as _, ngettext

from .config import rate_limiting_enabled, submission_rate_frequencies
from .models import SiteRateLimitConfig
from .services import SubmissionRateLimiter

DISABLED_WARNING = _('Form is disabled after submission rate limit was reached.')


def keep_stored_frequency(form_class, field_name, value):
    """Offer a stored window that is no longer among the configured choices"""
    field = form_class.base_fields.get(field_name)
    if field is None or value is None:
        return form_class
    if value not in [choice for choice, _label in field.choices]:
        field.choices = list(field.choices) + [
            (value, _('every %(seconds)d seconds') % {'seconds': value}),
        ]
    return form_class


class RateLimitedFormAdminMixin:
    """
    Adds a "Security" fieldset for RateLimitedFormMixin models.

    The host admin must declare ``fieldsets`` without the rate limit columns;
    they are appended here only while rate limiting is switched on.
    """

    rate_limit_fieldset_title = _('Security')
    actions = ['reset_submission_rate_limit']

    def get_rate_limiter(self):
        return SubmissionRateLimiter()

    def get_fieldsets(self, request, obj=None):
        fieldsets = list(super().get_fieldsets(request, obj))
        if not rate_limiting_enabled():
            return fieldsets

        fields = [
            'rate_limit_enabled',
            ('rate_count', 'rate_frequency'),
            'rate_limit_auto_reset',
            'disabled_form_message',
            'disabled_notification_email',
        ]
        if obj is not None and obj.rate_limit_reached_on:
            fields.append('rate_limit_reached_on')

        fieldsets.append((self.rate_limit_fieldset_title, {'fields': fields}))
        return fieldsets

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if 'rate_limit_reached_on' not in readonly:
            readonly.append('rate_limit_reached_on')
        return readonly

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        if db_field.name == 'rate_frequency':
            return forms.TypedChoiceField(
                label=_('Max submissions rate'),
                choices=[('', _('Site default'))] + submission_rate_frequencies(),
                coerce=int,
                empty_value=None,
                required=False,
                help_text=db_field.help_text,
            )
        return super().formfield_for_dbfield(db_field, request, **kwargs)

    def get_form(self, request, obj=None, **kwargs):
        form_class = super().get_form(request, obj, **kwargs)
        return keep_stored_frequency(
            form_class, 'rate_frequency', obj.rate_frequency if obj is not None else None
        )

    def change_view(self, request, object_id, form_url='', extra_context=None):
        if request.method == 'GET' and rate_limiting_enabled():
            obj = self.get_object(request, unquote(object_id))
            if obj is not None and self.get_rate_limiter().is_disabled(obj):
                messages.warning(request, DISABLED_WARNING)
        return super().change_view(request, object_id, form_url, extra_context)

    @admin.display(description=_('Rate limit'))
    def rate_limit_status(self, obj):
        if self.get_rate_limiter().is_disabled(obj):
            return _('Disabled since %(date)s') % {'date': obj.rate_limit_reached_on}
        return _('Accepting submissions')

    @admin.action(description=_('Reset submission rate limit'))
    def reset_submission_rate_limit(self, request, queryset):
        limiter = self.get_rate_limiter()
        count = sum(1 for form in queryset if limiter.reset(form))
        self.message_user(
            request,
            ngettext(
                '%d form was re-enabled.',
                '%d forms were re-enabled.',
                count,
            ) % count,
            messages.SUCCESS,
        )


@admin.register(SiteRateLimitConfig)
class SiteRateLimitConfigAdmin(admin.ModelAdmin):
    """Single-row editor for the site-wide defaults"""

    fieldsets = [
        (_('Submission Rate Limiting'), {
            'fields': [
                ('default_rate_count', 'default_rate_frequency'),
                'default_disabled_form_message',
                'default_disabled_notification_email',
            ],
        }),
    ]

    def has_add_permission(self, request):
        return not SiteRateLimitConfig.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        if db_field.name == 'default_rate_frequency':
            return forms.TypedChoiceField(
                label=db_field.verbose_name,
                choices=submission_rate_frequencies(),
                coerce=int,
            )
        return super().formfield_for_dbfield(db_field, request, **kwargs)

    def get_form(self, request, obj=None, **kwargs):
        form_class = super().get_form(request, obj, **kwargs)
        return keep_stored_frequency(
            form_class, 'default_rate_frequency',
            obj.default_rate_frequency if obj is not None else None
        )

    def changelist_view(self, request, extra_context=None):
        config = SiteRateLimitConfig.load()
        return HttpResponseRedirect(
            reverse('admin:ratelimit_siteratelimitconfig_change', args=[config.pk])
        )
