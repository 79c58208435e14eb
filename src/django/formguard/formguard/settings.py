"""
Django Settings for formguard
Environment overrides on top of settings_base
"""

import os

import environ

from .settings_base import *

env = environ.Env(
    DEBUG=(bool, False)
)

# Take environment variables from .env file (if it exists)
env_file_path = os.path.join(BASE_DIR, '.env')
if os.path.exists(env_file_path):
    environ.Env.read_env(env_file_path)

SECRET_KEY = env('SECRET_KEY', default=SECRET_KEY)
DEBUG = env('DEBUG', default=DEBUG)
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=ALLOWED_HOSTS)

# Database configuration
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': env('DB_NAME', default=DATABASES['default']['NAME']),
        'USER': env('DB_USER', default=DATABASES['default']['USER']),
        'PASSWORD': env('DB_PASSWORD', default=DATABASES['default']['PASSWORD']),
        'HOST': env('DB_HOST', default=DATABASES['default']['HOST']),
        'PORT': env('DB_PORT', default=DATABASES['default']['PORT']),
        'OPTIONS': {
            'connect_timeout': 60,
        }
    }
}

# Email Configuration
EMAIL_BACKEND = env('EMAIL_BACKEND', default=EMAIL_BACKEND)
EMAIL_HOST = env('EMAIL_HOST', default=EMAIL_HOST)
EMAIL_PORT = env.int('EMAIL_PORT', default=EMAIL_PORT)
EMAIL_HOST_USER = env('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = env('EMAIL_HOST_PASSWORD', default='')
EMAIL_USE_TLS = env.bool('EMAIL_USE_TLS', default=False)
DEFAULT_FROM_EMAIL = env('DEFAULT_FROM_EMAIL', default=DEFAULT_FROM_EMAIL)

# Celery Configuration
REDIS_URL = env('REDIS_URL', default=REDIS_URL)
CELERY_BROKER_URL = REDIS_URL
CELERY_RESULT_BACKEND = REDIS_URL

# Submission rate limiting
FORMGUARD.update({
    'SUBMISSION_RATE_LIMIT_ENABLED': env.bool(
        'FORMGUARD_RATE_LIMIT_ENABLED',
        default=FORMGUARD['SUBMISSION_RATE_LIMIT_ENABLED'],
    ),
    'RESET_RATE_LIMIT_AUTOMATICALLY': env.bool(
        'FORMGUARD_RESET_AUTOMATICALLY',
        default=FORMGUARD['RESET_RATE_LIMIT_AUTOMATICALLY'],
    ),
    'NOTIFICATION_EMAIL_ASYNC': env.bool(
        'FORMGUARD_NOTIFICATION_EMAIL_ASYNC',
        default=FORMGUARD['NOTIFICATION_EMAIL_ASYNC'],
    ),
    'NOTIFICATION_FROM_EMAIL': env(
        'FORMGUARD_NOTIFICATION_FROM_EMAIL',
        default=FORMGUARD['NOTIFICATION_FROM_EMAIL'],
    ),
})

# Logging Configuration
LOGGING['root']['level'] = env('LOG_LEVEL', default='INFO')
LOGGING['loggers']['formguard']['level'] = env('LOG_LEVEL', default='INFO')
