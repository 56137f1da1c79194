from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

from ..constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, BalanceSource


class BalanceTransaction(BaseModel):
    """Audit entry for every change of ``User.balance``.

    A payroll record can be linked to at most one entry, so the database
    rejects a second credit for the same record.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="balance_transactions",
        verbose_name=_("User"),
    )
    amount = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, verbose_name=_("Amount")
    )
    source = models.CharField(max_length=16, choices=BalanceSource.choices, verbose_name=_("Source"))
    payroll_record = models.OneToOneField(
        "PayrollRecord",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="balance_transaction",
        verbose_name=_("Payroll record"),
    )
    balance_after = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, verbose_name=_("Balance after")
    )
    note = models.CharField(max_length=255, blank=True, verbose_name=_("Note"))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_balance_transactions",
        verbose_name=_("Created by"),
    )

    class Meta:
        verbose_name = _("Balance transaction")
        verbose_name_plural = _("Balance transactions")
        db_table = "payroll_balance_transaction"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user_id} {self.source} {self.amount}"
