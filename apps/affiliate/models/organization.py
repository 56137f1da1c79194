from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class Organization(BaseModel):
    """Client organization of the platform, referrer and referred party of the affiliate program"""

    name = models.CharField(max_length=255, verbose_name=_("Name"))
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="owned_organizations",
        verbose_name=_("Owner"),
    )
    balance = models.DecimalField(max_digits=20, decimal_places=2, default=0, verbose_name=_("Balance"))
    referred_by_promo_code = models.ForeignKey(
        "PromoCode",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="referred_organizations",
        verbose_name=_("Referred by promo code"),
    )

    class Meta:
        verbose_name = _("Organization")
        verbose_name_plural = _("Organizations")
        db_table = "affiliate_organization"
        ordering = ["name"]

    def __str__(self):
        return self.name


class OrganizationPayment(BaseModel):
    organization = models.ForeignKey(
        "Organization", on_delete=models.CASCADE, related_name="payments", verbose_name=_("Organization")
    )
    amount = models.DecimalField(max_digits=20, decimal_places=2, verbose_name=_("Amount"))
    paid_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_("Paid at"))

    class Meta:
        verbose_name = _("Organization payment")
        verbose_name_plural = _("Organization payments")
        db_table = "affiliate_organization_payment"
        ordering = ["-paid_at"]

    def __str__(self):
        return f"{self.organization} paid {self.amount}"
