"""
This file contains all the settings used in production.

This file is required and if development.py is present these
values are overridden.
"""

from decouple import Csv

from server.settings.components import config
from server.settings.components.common import DATABASE_TIMEOUT_SECONDS

# Production flags:
# https://docs.djangoproject.com/en/5.1/howto/deployment/

DEBUG = False

SECRET_KEY = config('DJANGO_SECRET_KEY')

ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', cast=Csv())

# Database
# https://docs.djangoproject.com/en/5.1/ref/settings/#databases

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': config('DJANGO_DATABASE_NAME'),
        'USER': config('DJANGO_DATABASE_USER'),
        'PASSWORD': config('DJANGO_DATABASE_PASSWORD'),
        'HOST': config('DJANGO_DATABASE_HOST'),
        'PORT': config('DJANGO_DATABASE_PORT', cast=int, default=5432),
        'CONN_MAX_AGE': config('CONN_MAX_AGE', cast=int, default=60),
        'OPTIONS': {
            'connect_timeout': DATABASE_TIMEOUT_SECONDS,
            'options': '-c statement_timeout={0}'.format(
                DATABASE_TIMEOUT_SECONDS * 1000,
            ),
        },
    },
}

# Security
# https://docs.djangoproject.com/en/5.1/topics/security/

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
