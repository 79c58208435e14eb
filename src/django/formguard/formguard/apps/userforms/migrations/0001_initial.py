import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserDefinedForm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rate_limit_enabled', models.BooleanField(default=True, help_text='Disable the form once too many submissions arrive', verbose_name='rate limit enabled')),
                ('rate_count', models.PositiveIntegerField(blank=True, help_text='Maximum submissions per period; empty uses the site default', null=True, verbose_name='submissions')),
                ('rate_frequency', models.PositiveIntegerField(blank=True, help_text='Length of the counting window in seconds; empty uses the site default', null=True, verbose_name='period (seconds)')),
                ('rate_limit_auto_reset', models.BooleanField(blank=True, help_text='Empty follows the global FORMGUARD setting', null=True, verbose_name='re-enable automatically')),
                ('disabled_form_message', models.TextField(blank=True, default='', help_text='Shown instead of the form while it is disabled', verbose_name='disabled form message')),
                ('disabled_notification_email', models.EmailField(blank=True, default='', help_text='Who to tell when the form is disabled or re-enabled', max_length=254, verbose_name='notification email')),
                ('rate_limit_reached_on', models.DateTimeField(blank=True, editable=False, null=True, verbose_name='rate limit reached on')),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('content', models.TextField(blank=True, default='', help_text='Introductory text shown above the form', verbose_name='content')),
                ('submit_button_text', models.CharField(blank=True, default='', max_length=100, verbose_name='submit button text')),
                ('on_complete_message', models.TextField(blank=True, default='', help_text='Returned to the visitor after a successful submission', verbose_name='on complete message')),
                ('is_published', models.BooleanField(default=False, verbose_name='published')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
            ],
            options={
                'verbose_name': 'User Defined Form',
                'verbose_name_plural': 'User Defined Forms',
                'db_table': 'userforms_form',
                'ordering': ['title'],
            },
        ),
        migrations.CreateModel(
            name='EditableFormField',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.SlugField(max_length=100, verbose_name='name')),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('field_type', models.CharField(choices=[('text', 'Single line text'), ('email', 'Email'), ('textarea', 'Multi line text'), ('number', 'Number'), ('checkbox', 'Checkbox')], default='text', max_length=20, verbose_name='field type')),
                ('required', models.BooleanField(default=False, verbose_name='required')),
                ('sort_order', models.PositiveIntegerField(default=0, verbose_name='sort order')),
                ('form', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fields', to='userforms.userdefinedform', verbose_name='form')),
            ],
            options={
                'verbose_name': 'Form Field',
                'verbose_name_plural': 'Form Fields',
                'db_table': 'userforms_field',
                'ordering': ['sort_order', 'id'],
                'unique_together': {('form', 'name')},
            },
        ),
        migrations.CreateModel(
            name='SubmittedForm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('data', models.JSONField(blank=True, default=dict, verbose_name='data')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('parent', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='userforms.userdefinedform', verbose_name='form')),
                ('submitted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='form_submissions', to=settings.AUTH_USER_MODEL, verbose_name='submitted by')),
            ],
            options={
                'verbose_name': 'Submitted Form',
                'verbose_name_plural': 'Submitted Forms',
                'db_table': 'userforms_submission',
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['parent', 'created_at'], name='userforms_sub_parent_created')],
            },
        ),
    ]
