from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

from ..constants import MANUAL_METRIC_SOURCES, MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, MetricSource


class ManualMetricValue(BaseModel):
    """Human-entered metric value for a user and month (manual KPI, CPL efficiency, custom metric)"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="manual_metric_values",
        verbose_name=_("User"),
    )
    month = models.CharField(max_length=7, db_index=True, verbose_name=_("Month"))
    metric_source = models.CharField(
        max_length=32,
        choices=[(source.value, source.label) for source in MANUAL_METRIC_SOURCES],
        default=MetricSource.MANUAL_KPI,
        verbose_name=_("Metric source"),
    )
    value = models.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, verbose_name=_("Value"))
    note = models.CharField(max_length=255, blank=True, verbose_name=_("Note"))

    class Meta:
        verbose_name = _("Manual metric value")
        verbose_name_plural = _("Manual metric values")
        db_table = "payroll_manual_metric_value"
        ordering = ["-month", "user_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "month", "metric_source"], name="payroll_manual_metric_unique_user_month_source"
            ),
        ]

    def __str__(self):
        return f"{self.user_id} {self.month} {self.metric_source}={self.value}"
