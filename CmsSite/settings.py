from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-3v#l0k9e!elements-dev-key-n2q8x@w7f$r1p')

DEBUG = os.environ.get('DJANGO_DEBUG', 'True').lower() in ('true', '1', 'yes')

allowed_hosts_env = os.environ.get('DJANGO_ALLOWED_HOSTS', '')
ALLOWED_HOSTS = [host.strip() for host in allowed_hosts_env.split(',') if host.strip()]

INSTALLED_APPS = [
    'elements',
]

ROOT_URLCONF = 'CmsSite.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
    },
]

WSGI_APPLICATION = 'CmsSite.wsgi.application'

USE_TZ = True

# -----------------------------
# Element rendering
# -----------------------------
# One of "log", "warn", "raise", "silence"
ELEMENTS_DEPRECATION_BEHAVIOR = os.environ.get('ELEMENTS_DEPRECATION_BEHAVIOR', 'log')
ELEMENTS_DEFAULT_TAG = 'div'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'elements': {
            'handlers': ['console'],
            'level': os.environ.get('ELEMENTS_LOG_LEVEL', 'INFO'),
        },
    },
}
