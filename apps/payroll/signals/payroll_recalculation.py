"""Payroll recalculation triggers.

CRM events that change a metric (completed task, verified income, project
renewal, manual metric entry) schedule a recompute of the affected user's
payroll record for the month of the event. When an edit moves a task or a
transaction to another user or month, the month it left is recomputed too.
The task runs after the surrounding transaction commits and leaves FROZEN
and PAID records alone.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from apps.crm.models import ProjectRenewal, Task, Transaction
from apps.payroll.models import ManualMetricValue
from libs.datetimes import format_month


def schedule_recompute(user_id, month: str):
    from apps.payroll.tasks import recompute_payroll_record_task

    if not user_id or not month:
        return
    transaction.on_commit(lambda: recompute_payroll_record_task.delay(user_id, month))


def schedule_recompute_for(*targets):
    """Schedule each distinct ``(user_id, moment)`` pair once; incomplete pairs are ignored."""
    scheduled = set()
    for user_id, moment in targets:
        if not user_id or not moment:
            continue
        key = (user_id, format_month(moment))
        if key not in scheduled:
            scheduled.add(key)
            schedule_recompute(*key)


@receiver(pre_save, sender=Task)
def track_task_completion(sender, instance, **kwargs):
    """Store the saved assignee and completion time before they are overwritten."""
    instance._old_completion = None
    if instance.pk:
        instance._old_completion = (
            Task.objects.filter(pk=instance.pk).values_list("assignee_id", "completed_at").first()
        )


@receiver(post_save, sender=Task)
def on_task_saved(sender, instance, **kwargs):
    """Recompute the month the task now counts in and the month it was counted in before.

    A reopened task with ``completed_at`` cleared only has the old month left.
    """
    old_completion = getattr(instance, "_old_completion", None) or (None, None)
    schedule_recompute_for((instance.assignee_id, instance.completed_at), old_completion)


@receiver(post_delete, sender=Task)
def on_task_deleted(sender, instance, **kwargs):
    schedule_recompute_for((instance.assignee_id, instance.completed_at))


@receiver(pre_save, sender=Transaction)
def track_transaction_owner(sender, instance, **kwargs):
    instance._old_owner = None
    if instance.pk:
        instance._old_owner = (
            Transaction.objects.filter(pk=instance.pk).values_list("client__manager_id", "date").first()
        )


@receiver(post_save, sender=Transaction)
def on_transaction_saved(sender, instance, **kwargs):
    old_owner = getattr(instance, "_old_owner", None) or (None, None)
    schedule_recompute_for((instance.client.manager_id, instance.date), old_owner)


@receiver(post_save, sender=ProjectRenewal)
def on_project_renewal_saved(sender, instance, **kwargs):
    month = format_month(instance.renewal_date)
    for user_id in instance.project.team.values_list("id", flat=True):
        schedule_recompute(user_id, month)


@receiver(post_save, sender=ManualMetricValue)
def on_manual_metric_saved(sender, instance, **kwargs):
    schedule_recompute(instance.user_id, instance.month)


@receiver(post_delete, sender=ManualMetricValue)
def on_manual_metric_deleted(sender, instance, **kwargs):
    schedule_recompute(instance.user_id, instance.month)
