from celery.schedules import crontab

from .base import config
from .internationalization import TIME_ZONE

# Celery Configuration Options
# Celery
# -------------------------------------------------------------------------------
# https://docs.celeryproject.org/en/stable/userguide/configuration.html
CELERY_BROKER_URL = config("CELERY_BROKER_URL", default="redis://localhost:6379/0")
CELERY_RESULT_BACKEND = "django-db"
CELERY_CACHE_BACKEND = "django-cache"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_RESULT_EXTENDED = True
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_DEFAULT_QUEUE = "default"
CELERY_TASK_SOFT_TIME_LIMIT = 60 * 60  # default to 1 hour.
CELERY_TASK_ALWAYS_EAGER = config("CELERY_TASK_ALWAYS_EAGER", default=False, cast=bool)
CELERY_TASK_EAGER_PROPAGATES = config("CELERY_TASK_EAGER_PROPAGATES", default=False, cast=bool)
CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"

# The payroll resync job is registered separately as a cancellable PeriodicTask
# (see apps.payroll.tasks.schedule_payroll_resync).
CELERY_BEAT_SCHEDULE: dict[str, dict] = {
    # Move matured referral commissions from pending to ready
    "mature_referral_transactions": {
        "task": "apps.affiliate.tasks.mature_referral_transactions",
        "schedule": crontab(hour=0, minute=15),  # Daily at 00:15
    },
    # Create DRAFT payroll records for every active user on the first day of the month
    "prepare_monthly_payroll_records": {
        "task": "apps.payroll.tasks.prepare_monthly_payroll_records",
        "schedule": crontab(day_of_month="1", hour=0, minute=5),
    },
}
