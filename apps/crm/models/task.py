from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.crm.constants import TaskStatus, TaskType
from libs.models import BaseModel


class Task(BaseModel):
    """Unit of work assigned to a user.

    Only tasks with status Done and a ``completed_at`` timestamp count towards
    completed-task metrics.
    """

    title = models.CharField(max_length=255, verbose_name=_("Title"))
    task_type = models.CharField(
        max_length=32, choices=TaskType.choices, default=TaskType.TASK, verbose_name=_("Type")
    )
    status = models.CharField(
        max_length=32, choices=TaskStatus.choices, default=TaskStatus.TODO, db_index=True, verbose_name=_("Status")
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tasks",
        verbose_name=_("Assignee"),
    )
    client = models.ForeignKey(
        "Client", on_delete=models.SET_NULL, null=True, blank=True, related_name="tasks", verbose_name=_("Client")
    )
    project = models.ForeignKey(
        "Project", on_delete=models.SET_NULL, null=True, blank=True, related_name="tasks", verbose_name=_("Project")
    )
    estimated_hours = models.DecimalField(
        max_digits=8, decimal_places=2, null=True, blank=True, verbose_name=_("Estimated hours")
    )
    completed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Completed at"))

    class Meta:
        verbose_name = _("Task")
        verbose_name_plural = _("Tasks")
        db_table = "crm_task"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["assignee", "status", "completed_at"], name="crm_task_completion_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.task_type})"

    @property
    def is_countable(self) -> bool:
        return self.status == TaskStatus.DONE and self.completed_at is not None
