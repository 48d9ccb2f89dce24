"""
Production overrides for PlantOps.

Selected with DJANGO_SETTINGS_MODULE=config.settings_production. Postgres
holds the plant room data and Redis backs the cache, sessions and Celery.
"""

import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

from .settings import *  # noqa

DEBUG = bool(int(os.getenv("DEBUG", "0")))

# collectstatic runs without secrets during the image build.
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "plantops-build-only")

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "").split(",") if host]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("POSTGRES_DB", "plantops"),
        "USER": os.environ.get("POSTGRES_USER", "plantops"),
        "PASSWORD": os.environ.get("POSTGRES_PASSWORD", ""),
        "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
        "PORT": os.environ.get("POSTGRES_PORT", "5432"),
        "CONN_MAX_AGE": int(os.environ.get("POSTGRES_CONN_MAX_AGE", 300)),
        "OPTIONS": {"connect_timeout": 10},
    }
}

REDIS_URL = os.environ.get("REDIS_URL", "redis://127.0.0.1:6379")

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": f"{REDIS_URL}/1",
        "KEY_PREFIX": "plantops",
        "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
    }
}
SESSION_ENGINE = "django.contrib.sessions.backends.cache"

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", f"{REDIS_URL}/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", f"{REDIS_URL}/0")

# The automation endpoint rejects every bearer token while the key is empty.
# Image builds run without DJANGO_SECRET_KEY and skip the check.
if not DEBUG and not TASK_AUTOMATION_API_KEY and os.environ.get("DJANGO_SECRET_KEY"):
    raise ImproperlyConfigured("TASK_AUTOMATION_API_KEY must be set in production")

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = not DEBUG
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
SECURE_CONTENT_TYPE_NOSNIFF = True

STATIC_ROOT = BASE_DIR / "staticfiles"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_THROTTLE_CLASSES": ["rest_framework.throttling.UserRateThrottle"],
    "DEFAULT_THROTTLE_RATES": {"user": os.environ.get("API_USER_RATE", "2000/day")},
}

LOG_DIR = Path(os.environ.get("PLANTOPS_LOG_DIR", BASE_DIR / "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOGGING["handlers"]["console"]["formatter"] = "verbose"
LOGGING["handlers"]["plantops_file"] = {
    "level": "INFO",
    "class": "logging.handlers.RotatingFileHandler",
    "filename": str(LOG_DIR / "plantops.log"),
    "maxBytes": 10 * 1024 * 1024,
    "backupCount": 5,
    "formatter": "verbose",
}
LOGGING["loggers"]["plantops"].update(level="INFO", handlers=["console", "plantops_file"])
LOGGING["loggers"]["django.request"] = {
    "handlers": ["console", "plantops_file"],
    "level": "ERROR",
    "propagate": False,
}
