from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

from ..constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, OwnerType


class SalaryScheme(BaseModel):
    """Fixed salary plus per-unit KPI rates for a job title or a user.

    ``kpi_rules`` is an ordered list of ``{"task_type": ..., "value": ...}``
    entries; each completed task of that type in the month earns ``value``.
    At most one active scheme exists per owner.
    """

    owner_type = models.CharField(max_length=16, choices=OwnerType.choices, verbose_name=_("Owner type"))
    owner_id = models.PositiveBigIntegerField(verbose_name=_("Owner ID"))
    base_salary = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0, verbose_name=_("Base salary")
    )
    kpi_rules = models.JSONField(default=list, blank=True, verbose_name=_("KPI rules"))
    # Stored for reporting; no calculation reads it
    pm_bonus_percent = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True, verbose_name=_("PM bonus percent")
    )
    is_active = models.BooleanField(default=True, verbose_name=_("Active"))

    class Meta:
        verbose_name = _("Salary scheme")
        verbose_name_plural = _("Salary schemes")
        db_table = "payroll_salary_scheme"
        ordering = ["owner_type", "owner_id", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["owner_type", "owner_id"],
                condition=models.Q(is_active=True),
                name="payroll_unique_active_salary_scheme",
            ),
        ]

    def __str__(self):
        return f"SalaryScheme {self.owner_type}:{self.owner_id}"
