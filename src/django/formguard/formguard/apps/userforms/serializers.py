"""
User Defined Form Serializers
"""

from rest_framework import serializers

from .forms import UserForm
from .models import SubmittedForm, UserDefinedForm


class UserDefinedFormSummarySerializer(serializers.ModelSerializer):
    """Listing representation of a form page"""

    class Meta:
        model = UserDefinedForm
        fields = ['id', 'title']


class UserDefinedFormSerializer(serializers.ModelSerializer):
    """Form page together with its rendered form"""

    form = serializers.SerializerMethodField()

    class Meta:
        model = UserDefinedForm
        fields = ['id', 'title', 'content', 'form']

    def get_form(self, obj):
        user_form = self.context.get('user_form') or UserForm(obj)
        return user_form.schema()


class SubmittedFormSerializer(serializers.ModelSerializer):

    class Meta:
        model = SubmittedForm
        fields = ['id', 'parent', 'data', 'created_at']
        read_only_fields = fields
