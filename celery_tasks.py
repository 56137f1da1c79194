"""Celery application entrypoint.

Workers and beat are started with ``celery -A celery_tasks worker`` and
``celery -A celery_tasks beat``.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "settings")

celery_app = Celery("compensation")
celery_app.config_from_object("django.conf:settings", namespace="CELERY")
celery_app.autodiscover_tasks()
