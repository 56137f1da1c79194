"""Celery tasks for payroll app."""

import json
import logging

from celery import shared_task
from django.conf import settings

logger = logging.getLogger(__name__)

RESYNC_TASK_PATH = "apps.payroll.tasks.resync_payroll_records"


@shared_task
def recompute_payroll_record_task(user_id, month):
    """Recompute a single DRAFT payroll record.

    Args:
        user_id: User ID
        month: Month key in ``YYYY-MM`` format

    Returns:
        str: Result message
    """
    from django.contrib.auth import get_user_model

    from apps.payroll.services.payroll_ledger import compute_payroll_record

    User = get_user_model()
    try:
        user = User.objects.get(pk=user_id)
    except User.DoesNotExist:
        return f"User {user_id} does not exist"

    result = compute_payroll_record(user, month)
    if not result.applied:
        return f"Payroll record for user {user_id}, month {month} is {result.record.status}, skipped"
    return f"Recomputed payroll for user {user_id}, month {month}"


@shared_task
def resync_payroll_records(month=None):
    """Recompute every DRAFT payroll record of a month (current month by default).

    Running it twice in a row leaves the records unchanged.

    Returns:
        str: Result message
    """
    from apps.payroll.models import PayrollRecord
    from apps.payroll.services.payroll_ledger import compute_payroll_record
    from libs.datetimes import current_month

    if not settings.PAYROLL_AUTO_SYNC_ENABLED:
        return "Payroll auto sync is disabled"

    month = month or current_month()
    records = PayrollRecord.objects.filter(month=month, status=PayrollRecord.Status.DRAFT).select_related("user")

    synced = 0
    for record in records:
        compute_payroll_record(record.user, month)
        synced += 1

    return f"Resynced {synced} payroll records for {month}"


@shared_task
def prepare_monthly_payroll_records(month=None):
    """Create and compute DRAFT payroll records for every active user.

    Returns:
        str: Result message
    """
    from django.contrib.auth import get_user_model

    from apps.payroll.services.payroll_ledger import compute_payroll_record
    from libs.datetimes import current_month

    User = get_user_model()
    month = month or current_month()

    prepared = 0
    locked = 0
    for user in User.objects.filter(is_active=True):
        result = compute_payroll_record(user, month)
        if result.applied:
            prepared += 1
        else:
            locked += 1

    return f"Prepared {prepared} payroll records for {month}, {locked} already locked"


def schedule_payroll_resync(interval_seconds=None):
    """Register (or re-enable) the periodic payroll resync job.

    Returns:
        PeriodicTask: The enabled periodic task
    """
    from django_celery_beat.models import IntervalSchedule, PeriodicTask

    every = int(interval_seconds or settings.PAYROLL_AUTO_SYNC_INTERVAL_SECONDS)
    schedule, _ = IntervalSchedule.objects.get_or_create(every=every, period=IntervalSchedule.SECONDS)
    task, created = PeriodicTask.objects.update_or_create(
        name=settings.PAYROLL_AUTO_SYNC_TASK_NAME,
        defaults={
            "task": RESYNC_TASK_PATH,
            "interval": schedule,
            "crontab": None,
            "kwargs": json.dumps({}),
            "enabled": True,
        },
    )
    logger.info("%s payroll resync job every %s seconds", "Created" if created else "Enabled", every)
    return task


def cancel_payroll_resync():
    """Disable the periodic payroll resync job.

    Returns:
        bool: True if an enabled job was disabled
    """
    from django_celery_beat.models import PeriodicTask

    updated = PeriodicTask.objects.filter(name=settings.PAYROLL_AUTO_SYNC_TASK_NAME, enabled=True).update(
        enabled=False
    )
    if updated:
        logger.info("Cancelled payroll resync job")
    return bool(updated)
