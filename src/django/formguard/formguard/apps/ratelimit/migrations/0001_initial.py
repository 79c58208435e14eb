from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteRateLimitConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('default_rate_count', models.PositiveIntegerField(default=60, verbose_name='default submissions')),
                ('default_rate_frequency', models.PositiveIntegerField(default=60, verbose_name='default period (seconds)')),
                ('default_disabled_form_message', models.TextField(default='This form is temporarily disabled. Please try again later.', verbose_name='default disabled form message')),
                ('default_disabled_notification_email', models.EmailField(blank=True, default='', max_length=254, verbose_name='default notification email')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
            ],
            options={
                'verbose_name': 'Site rate limit configuration',
                'verbose_name_plural': 'Site rate limit configuration',
                'db_table': 'ratelimit_site_config',
            },
        ),
    ]
