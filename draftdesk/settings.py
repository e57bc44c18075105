"""
Django settings for draftdesk project.

Every deployment-specific value is read from the environment (or a .env file)
through python-decouple.
"""

from datetime import timedelta
from pathlib import Path

from decouple import Csv, config


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='django-insecure-draftdesk-dev-key')

DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'news',
    'drafts',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'drafts.middleware.DashboardBasicAuthMiddleware',
]

ROOT_URLCONF = 'draftdesk.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'draftdesk.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.sqlite3'),
        'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        'USER': config('DB_USER', default=''),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default=''),
        'PORT': config('DB_PORT', default=''),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
}


# Upstream news feed (CryptoPanic)

CRYPTOPANIC_API_URL = config('CRYPTOPANIC_API_URL', default='https://cryptopanic.com/api/v1/posts/')
CRYPTOPANIC_AUTH_TOKEN = config('CRYPTOPANIC_AUTH_TOKEN', default='')
FEED_TIMEOUT_MS = config('FEED_TIMEOUT_MS', default=10000, cast=int)
FEED_USER_AGENT = config('FEED_USER_AGENT', default='draftdesk/1.0')
FEED_DEFAULT_RETRY_AFTER = config('FEED_DEFAULT_RETRY_AFTER', default=60, cast=int)

ENGAGEMENT_THRESHOLD = config('ENGAGEMENT_THRESHOLD', default=20, cast=int)


# Draft generation

WEBHOOK_SECRET_KEY = config('WEBHOOK_SECRET_KEY', default='')

GEMINI_API_KEY = config('GEMINI_API_KEY', default='')
GEMINI_MODEL = config('GEMINI_MODEL', default='gemini-2.5-pro')
GEMINI_TEMPERATURE = config('GEMINI_TEMPERATURE', default=0.7, cast=float)
GEMINI_TIMEOUT_MS = config('GEMINI_TIMEOUT_MS', default=60000, cast=int)
GEMINI_RETRY_AFTER = config('GEMINI_RETRY_AFTER', default=60, cast=int)

LEARNING_SAMPLE_SIZE = config('LEARNING_SAMPLE_SIZE', default=10, cast=int)

DRAFT_TRIGGER_URL = config('DRAFT_TRIGGER_URL', default='')
DRAFT_TRIGGER_TIMEOUT_MS = config('DRAFT_TRIGGER_TIMEOUT_MS', default=30000, cast=int)
DRAFT_TRIGGER_MAX_RETRIES = config('DRAFT_TRIGGER_MAX_RETRIES', default=5, cast=int)


# Review dashboard

REVIEW_PAGE_SIZE = config('REVIEW_PAGE_SIZE', default=50, cast=int)

DASHBOARD_USER = config('DASHBOARD_USER', default='')
DASHBOARD_PASSWORD = config('DASHBOARD_PASSWORD', default='')
DASHBOARD_PATH_PREFIXES = ('/api/drafts/',)


# Health check alerts (Telegram)

BOT_TOKEN = config('BOT_TOKEN', default='')
HEALTH_CHECK_ID = config('HEALTH_CHECK_ID', default='')


# Celery

CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = config('CELERY_RESULT_BACKEND', default='redis://localhost:6379/0')
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TIMEZONE = TIME_ZONE

CELERY_BEAT_SCHEDULE = {
    'collect-trending-news': {
        'task': 'news.tasks.collect_trending_news',
        'schedule': timedelta(minutes=config('COLLECT_NEWS_INTERVAL_MINUTES', default=30, cast=int)),
    },
}


# Logging

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': config('LOG_LEVEL', default='INFO'),
    },
}
