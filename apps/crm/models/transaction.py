from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.crm.constants import TransactionType
from libs.models import BaseModel


class Transaction(BaseModel):
    """Money movement recorded against a client"""

    client = models.ForeignKey(
        "Client", on_delete=models.CASCADE, related_name="transactions", verbose_name=_("Client")
    )
    amount = models.DecimalField(max_digits=20, decimal_places=2, verbose_name=_("Amount"))
    date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_("Date"))
    type = models.CharField(
        max_length=16, choices=TransactionType.choices, default=TransactionType.INCOME, verbose_name=_("Type")
    )
    is_verified = models.BooleanField(default=False, verbose_name=_("Verified"))
    description = models.CharField(max_length=255, blank=True, verbose_name=_("Description"))

    class Meta:
        verbose_name = _("Transaction")
        verbose_name_plural = _("Transactions")
        db_table = "crm_transaction"
        ordering = ["-date"]

    def __str__(self):
        return f"{self.client} {self.type} {self.amount}"
