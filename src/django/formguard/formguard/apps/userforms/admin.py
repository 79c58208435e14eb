"""
User Defined Form Admin
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from formguard.apps.ratelimit.admin import RateLimitedFormAdminMixin

from .models import EditableFormField, SubmittedForm, UserDefinedForm


class EditableFormFieldInline(admin.TabularInline):
    model = EditableFormField
    extra = 0
    fields = ['sort_order', 'name', 'title', 'field_type', 'required']
    prepopulated_fields = {'name': ('title',)}


@admin.register(UserDefinedForm)
class UserDefinedFormAdmin(RateLimitedFormAdminMixin, admin.ModelAdmin):
    list_display = ['title', 'is_published', 'rate_limit_status', 'updated_at']
    list_filter = ['is_published']
    search_fields = ['title']
    inlines = [EditableFormFieldInline]
    fieldsets = [
        (None, {'fields': ['title', 'content', 'is_published']}),
        (_('Form'), {'fields': ['submit_button_text', 'on_complete_message']}),
    ]


@admin.register(SubmittedForm)
class SubmittedFormAdmin(admin.ModelAdmin):
    list_display = ['id', 'parent', 'submitted_by', 'created_at']
    list_filter = ['parent']
    date_hierarchy = 'created_at'
    readonly_fields = ['parent', 'data', 'submitted_by', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
