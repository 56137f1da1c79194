from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

from ..constants import MAX_REFERRAL_LEVEL


class ReferralRegistration(BaseModel):
    """Link between a referred organization and a referrer at a given level.

    Level 1 is the organization whose promo code was used; levels 2 and 3
    follow the referrer's own level-1 registration chain.
    """

    referrer_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="referral_registrations",
        verbose_name=_("Referrer user"),
    )
    referrer_organization = models.ForeignKey(
        "Organization",
        on_delete=models.CASCADE,
        related_name="referrals_made",
        verbose_name=_("Referrer organization"),
    )
    referred_organization = models.ForeignKey(
        "Organization",
        on_delete=models.CASCADE,
        related_name="referrals_received",
        verbose_name=_("Referred organization"),
    )
    promo_code = models.ForeignKey(
        "PromoCode",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="registrations",
        verbose_name=_("Promo code"),
    )
    level = models.PositiveSmallIntegerField(default=1, verbose_name=_("Level"))
    is_active = models.BooleanField(default=False, verbose_name=_("Active"))

    class Meta:
        verbose_name = _("Referral registration")
        verbose_name_plural = _("Referral registrations")
        db_table = "affiliate_referral_registration"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["referred_organization", "level"], name="affiliate_registration_unique_level"
            ),
            models.CheckConstraint(
                condition=models.Q(level__gte=1, level__lte=MAX_REFERRAL_LEVEL),
                name="affiliate_registration_level_range",
            ),
        ]

    def __str__(self):
        return f"{self.referrer_organization} -> {self.referred_organization} (L{self.level})"


class ReferralPayout(BaseModel):
    class Status(models.TextChoices):
        PAID = "PAID", _("Paid")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="referral_payouts",
        verbose_name=_("User"),
    )
    amount = models.DecimalField(max_digits=20, decimal_places=2, verbose_name=_("Amount"))
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PAID, verbose_name=_("Status"))
    bank_details = models.JSONField(default=dict, blank=True, verbose_name=_("Bank details"))
    requested_at = models.DateTimeField(verbose_name=_("Requested at"))
    processed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Processed at"))

    class Meta:
        verbose_name = _("Referral payout")
        verbose_name_plural = _("Referral payouts")
        db_table = "affiliate_referral_payout"
        ordering = ["-requested_at"]

    def __str__(self):
        return f"Payout {self.amount} to {self.user_id}"


class ReferralTransaction(BaseModel):
    """Commission earned by one referrer level on one organization payment.

    Status moves pending -> ready (after the maturation window) -> paid (payout).
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        READY = "ready", _("Ready")
        PAID = "paid", _("Paid")

    referrer_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="referral_transactions",
        verbose_name=_("Referrer user"),
    )
    referrer_organization = models.ForeignKey(
        "Organization",
        on_delete=models.PROTECT,
        related_name="earned_commissions",
        verbose_name=_("Referrer organization"),
    )
    referred_organization = models.ForeignKey(
        "Organization",
        on_delete=models.PROTECT,
        related_name="generated_commissions",
        verbose_name=_("Referred organization"),
    )
    payment = models.ForeignKey(
        "OrganizationPayment",
        on_delete=models.PROTECT,
        related_name="referral_transactions",
        verbose_name=_("Payment"),
    )
    level = models.PositiveSmallIntegerField(verbose_name=_("Level"))
    payment_amount = models.DecimalField(max_digits=20, decimal_places=2, verbose_name=_("Payment amount"))
    commission_percent = models.DecimalField(max_digits=5, decimal_places=2, verbose_name=_("Commission percent"))
    commission_amount = models.DecimalField(max_digits=20, decimal_places=2, verbose_name=_("Commission amount"))
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True, verbose_name=_("Status")
    )
    ready_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Ready at"))
    paid_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Paid at"))
    payout = models.ForeignKey(
        "ReferralPayout",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
        verbose_name=_("Payout"),
    )

    class Meta:
        verbose_name = _("Referral transaction")
        verbose_name_plural = _("Referral transactions")
        db_table = "affiliate_referral_transaction"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["payment", "level"], name="affiliate_transaction_unique_payment_level"),
            models.CheckConstraint(
                condition=models.Q(level__gte=1, level__lte=MAX_REFERRAL_LEVEL),
                name="affiliate_transaction_level_range",
            ),
        ]
        indexes = [
            models.Index(fields=["referrer_user", "status"], name="affiliate_tx_referrer_idx"),
        ]

    def __str__(self):
        return f"L{self.level} {self.commission_amount} ({self.status})"
