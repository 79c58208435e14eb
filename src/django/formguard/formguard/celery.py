"""
Celery Configuration for formguard
Notification email can be handed off to a worker instead of being sent in-request
"""

import os

from celery import Celery

# Set default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'formguard.settings')

# Create Celery app
app = Celery('formguard')

# Load configuration from Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

# Configure task routing
app.conf.task_routes = {
    'formguard.ratelimit.*': {'queue': 'notifications'},
}

# Notifications are fire-and-forget: one attempt, nothing stored
app.conf.task_ignore_result = True
app.conf.task_acks_late = False
app.conf.task_max_retries = 0

# Configure soft and hard time limits
app.conf.task_soft_time_limit = 60
app.conf.task_time_limit = 120

# Configure timezone
app.conf.enable_utc = True
app.conf.timezone = 'UTC'

app.conf.worker_hijack_root_logger = False
app.conf.worker_task_log_format = '[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s'
