"""
User Forms - Django forms built from a page's editable fields
"""

from dataclasses import dataclass

from django import forms
from django.utils.safestring import mark_safe

from .signals import Adjustable, form_actions_built, form_fields_built


@dataclass(frozen=True)
class FormAction:
    name: str
    title: str


class LiteralWidget(forms.Widget):
    """Renders fixed markup instead of an input"""

    def __init__(self, content='', attrs=None):
        super().__init__(attrs)
        self.content = content

    def render(self, name, value, attrs=None, renderer=None):
        return mark_safe(self.content)

    def value_from_datadict(self, data, files, name):
        return None


class LiteralField(forms.Field):
    """A non-input field that only displays content"""

    field_type = 'literal'

    def __init__(self, content='', **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('label', '')
        kwargs['widget'] = LiteralWidget(content)
        super().__init__(**kwargs)
        self.content = content


FIELD_BUILDERS = {
    'text': lambda: forms.CharField(max_length=255),
    'email': lambda: forms.EmailField(),
    'textarea': lambda: forms.CharField(widget=forms.Textarea),
    'number': lambda: forms.FloatField(),
    'checkbox': lambda: forms.BooleanField(),
}


class UserForm(forms.Form):
    """
    The visitor-facing form of a UserDefinedForm page.

    Other apps may replace the fields or actions through the
    form_fields_built / form_actions_built signals.
    """

    def __init__(self, page, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.page = page

        fields = Adjustable(self.build_fields())
        form_fields_built.send(sender=self.__class__, form=page, fields=fields)
        self.fields = fields.value

        actions = Adjustable(self.build_actions())
        form_actions_built.send(sender=self.__class__, form=page, actions=actions)
        self.actions = actions.value

    def build_fields(self):
        fields = {}
        for editable in self.page.fields.all():
            field = FIELD_BUILDERS.get(editable.field_type, FIELD_BUILDERS['text'])()
            field.label = editable.title
            field.required = editable.required
            fields[editable.name] = field
        return fields

    def build_actions(self):
        return [FormAction(name='process', title=self.page.get_submit_button_text())]

    @property
    def accepts_submissions(self) -> bool:
        return bool(self.actions)

    def get_submission_data(self):
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if not isinstance(self.fields[name], LiteralField)
        }

    def schema(self):
        """Describe the fields and actions for API clients"""
        fields = []
        for name, field in self.fields.items():
            if isinstance(field, LiteralField):
                fields.append({'name': name, 'type': LiteralField.field_type, 'content': field.content})
                continue
            fields.append({
                'name': name,
                'type': _field_type(field),
                'label': str(field.label or ''),
                'required': field.required,
            })
        return {
            'fields': fields,
            'actions': [{'name': action.name, 'title': action.title} for action in self.actions],
        }


def _field_type(field):
    if isinstance(field, forms.EmailField):
        return 'email'
    if isinstance(field, forms.BooleanField):
        return 'checkbox'
    if isinstance(field, forms.FloatField):
        return 'number'
    if isinstance(field.widget, forms.Textarea):
        return 'textarea'
    return 'text'
