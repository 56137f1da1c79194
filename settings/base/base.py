"""Core Django settings shared by every environment."""

import os

from decouple import config

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

ENVIRONMENT = config("ENVIRONMENT", default="local")

SECRET_KEY = config("SECRET_KEY", default="django-insecure-compensation-engine-local-key")

DEBUG = config("DEBUG", default=False, cast=bool)

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

ALLOWED_HOSTS: list[str] = []

ROOT_URLCONF = "urls"

WSGI_APPLICATION = "wsgi.application"

AUTH_USER_MODEL = "core.User"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
