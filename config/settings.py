"""Django settings for the bloom-forecast project.

Values come from environment variables so the same module serves local
development, tests and deployment.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str = "") -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "django-insecure-local-development-key"
)
DEBUG = _env_bool("DJANGO_DEBUG", default=False)
ALLOWED_HOSTS = _env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "django_prometheus",
    "rest_framework",
    "drf_spectacular",
    "prediction",
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# No persistent models; sqlite only backs the contrib apps DRF imports.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get(
            "DJANGO_SQLITE_PATH", str(BASE_DIR / "db.sqlite3")
        ),
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "bloom-forecast",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("DJANGO_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "config.api.exceptions.custom_exception_handler",
    "DEFAULT_THROTTLE_RATES": {
        "ndvi_predict": os.environ.get("NDVI_THROTTLE_PREDICT", "60/min"),
        "ndvi_forecast": os.environ.get("NDVI_THROTTLE_FORECAST", "30/min"),
        "ndvi_analysis": os.environ.get("NDVI_THROTTLE_ANALYSIS", "30/min"),
    },
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Bloom Forecast API",
    "DESCRIPTION": "NDVI prediction from historical seasonal and trend data.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

NDVI_HISTORY_SOURCE = os.environ.get("NDVI_HISTORY_SOURCE", "synthetic")
NDVI_STATIC_HISTORY_PATH = os.environ.get("NDVI_STATIC_HISTORY_PATH", "")
NDVI_DEFAULT_YEARS_HISTORY = int(
    os.environ.get("NDVI_DEFAULT_YEARS_HISTORY", "3")
)
NDVI_MAX_YEARS_HISTORY = int(os.environ.get("NDVI_MAX_YEARS_HISTORY", "10"))
NDVI_DEFAULT_FORECAST_DAYS = int(
    os.environ.get("NDVI_DEFAULT_FORECAST_DAYS", "30")
)
NDVI_DEFAULT_FORECAST_INTERVAL = int(
    os.environ.get("NDVI_DEFAULT_FORECAST_INTERVAL", "7")
)
NDVI_CACHE_TTL_HISTORY_SECONDS = int(
    os.environ.get("NDVI_CACHE_TTL_HISTORY_SECONDS", "3600")
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "prediction": {
            "handlers": ["console"],
            "level": os.environ.get("NDVI_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
