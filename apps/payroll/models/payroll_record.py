"""PayrollRecord model: one user's pay for one month."""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.decimals import quantize_decimal
from libs.models import BaseModel

from ..constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS


def money_field(verbose_name):
    return models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0, verbose_name=verbose_name
    )


class PayrollRecord(BaseModel):
    """Monthly payroll record moving through DRAFT -> FROZEN -> PAID.

    Computed fields (``fix_salary``, ``calculated_kpi``, ``task_payments``,
    ``bonus_details``) are refreshed only while the record is DRAFT. Manual
    fields are operator-editable while DRAFT. Once PAID the numeric fields
    never change and the user's balance has been credited with
    ``net_amount`` exactly once.

    Attributes:
        user: User the record belongs to
        month: Month key in ``YYYY-MM`` format
        fix_salary: Base salary from the active salary scheme
        calculated_kpi: KPI task payments plus applicable bonus rule rewards
        manual_bonus / manual_penalty / advance: Operator-entered adjustments
        balance_at_start: User balance when the record was first computed
        net_amount: fix_salary + calculated_kpi + manual_bonus - manual_penalty - advance
        task_payments: Itemised KPI payments per completed task
        bonus_details: Per-rule evaluation breakdown
    """

    class Status(models.TextChoices):
        """Status choices for payroll record."""

        DRAFT = "DRAFT", _("Draft")
        FROZEN = "FROZEN", _("Frozen")
        PAID = "PAID", _("Paid")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="payroll_records",
        verbose_name=_("User"),
    )
    month = models.CharField(max_length=7, db_index=True, verbose_name=_("Month"), help_text=_("Format YYYY-MM"))
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.DRAFT, db_index=True, verbose_name=_("Status")
    )

    fix_salary = money_field(_("Fixed salary"))
    calculated_kpi = money_field(_("Calculated KPI"))
    manual_bonus = money_field(_("Manual bonus"))
    manual_penalty = money_field(_("Manual penalty"))
    advance = money_field(_("Advance"))
    balance_at_start = money_field(_("Balance at start"))
    net_amount = money_field(_("Net amount"))

    task_payments = models.JSONField(default=list, blank=True, verbose_name=_("Task payments"))
    bonus_details = models.JSONField(default=list, blank=True, verbose_name=_("Bonus details"))

    calculated_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Calculated at"))
    frozen_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Frozen at"))
    frozen_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="frozen_payroll_records",
        verbose_name=_("Frozen by"),
    )
    paid_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Paid at"))
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="paid_payroll_records",
        verbose_name=_("Paid by"),
    )

    class Meta:
        verbose_name = _("Payroll record")
        verbose_name_plural = _("Payroll records")
        db_table = "payroll_record"
        ordering = ["-month", "user_id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "month"], name="payroll_record_unique_user_month"),
        ]
        indexes = [
            models.Index(fields=["month", "status"], name="payroll_record_month_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.month} ({self.status})"

    @property
    def is_draft(self) -> bool:
        return self.status == self.Status.DRAFT

    def compute_net_amount(self):
        return quantize_decimal(
            quantize_decimal(self.fix_salary)
            + quantize_decimal(self.calculated_kpi)
            + quantize_decimal(self.manual_bonus)
            - quantize_decimal(self.manual_penalty)
            - quantize_decimal(self.advance)
        )
