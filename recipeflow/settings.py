"""
Django settings for recipeflow project.

Environment-driven: every deployment knob is read from an environment
variable with a development-friendly default.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/topics/settings/
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_truthy(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return int(default)


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-recipeflow-dev-key")

DEBUG = _env_truthy("DJANGO_DEBUG", "true")

ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'recipes',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'recipeflow.urls'

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

WSGI_APPLICATION = 'recipeflow.wsgi.application'


# Database
# Every storage call inherits RECIPES_DB_TIMEOUT; a timeout surfaces as
# StorageUnavailable in the engagement services.

RECIPES_DB_TIMEOUT = _env_int("RECIPES_DB_TIMEOUT", "5")

if os.getenv("DB_ENGINE", "sqlite").lower() == "postgres":
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv("DB_NAME", "recipeflow"),
            'USER': os.getenv("DB_USER", "recipeflow"),
            'PASSWORD': os.getenv("DB_PASSWORD", ""),
            'HOST': os.getenv("DB_HOST", "localhost"),
            'PORT': os.getenv("DB_PORT", "5432"),
            'OPTIONS': {
                'connect_timeout': RECIPES_DB_TIMEOUT,
                'options': f'-c statement_timeout={RECIPES_DB_TIMEOUT * 1000}',
            },
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': os.getenv("DB_NAME", str(BASE_DIR / 'db.sqlite3')),
            'OPTIONS': {
                'timeout': RECIPES_DB_TIMEOUT,
            },
        }
    }


AUTH_USER_MODEL = 'recipes.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]


LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Django REST framework

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'recipes.authentication.IdentityHeaderAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'EXCEPTION_HANDLER': 'recipes.views.exception_handler.engagement_exception_handler',
}


# Engagement engine

RECIPES_VIEW_COOLDOWN_SECONDS = _env_int("RECIPES_VIEW_COOLDOWN_SECONDS", "3600")
RECIPES_COMMENT_MAX_LENGTH = _env_int("RECIPES_COMMENT_MAX_LENGTH", "1000")
RECIPES_COMMENT_MAX_DEPTH = _env_int("RECIPES_COMMENT_MAX_DEPTH", "8")
RECIPES_IDENTITY_USER_HEADER = os.getenv("RECIPES_IDENTITY_USER_HEADER", "X-User-Id")
RECIPES_IDENTITY_ROLE_HEADER = os.getenv("RECIPES_IDENTITY_ROLE_HEADER", "X-User-Role")
# Peers whose X-Forwarded-For is believed when keying anonymous views, comma separated
RECIPES_TRUSTED_PROXIES = [addr.strip() for addr in os.getenv("RECIPES_TRUSTED_PROXIES", "").split(",") if addr.strip()]


# Logging

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'recipes': {
            'handlers': ['console'],
            'level': os.getenv("RECIPES_LOG_LEVEL", "INFO"),
            'propagate': False,
        },
    },
}
