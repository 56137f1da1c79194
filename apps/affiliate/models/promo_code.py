import re

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

WHITESPACE = re.compile(r"\s+")


def normalize_promo_code(code: str) -> str:
    return WHITESPACE.sub("", (code or "").strip().lower())


class PromoCode(BaseModel):
    organization = models.ForeignKey(
        "Organization", on_delete=models.CASCADE, related_name="promo_codes", verbose_name=_("Organization")
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="promo_codes",
        verbose_name=_("Referrer"),
    )
    code = models.CharField(max_length=64, unique=True, verbose_name=_("Code"))
    registrations_count = models.PositiveIntegerField(default=0, verbose_name=_("Registrations"))
    payments_count = models.PositiveIntegerField(default=0, verbose_name=_("Payments"))
    is_active = models.BooleanField(default=True, verbose_name=_("Active"))

    class Meta:
        verbose_name = _("Promo code")
        verbose_name_plural = _("Promo codes")
        db_table = "affiliate_promo_code"
        ordering = ["-created_at"]

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = normalize_promo_code(self.code)
        super().save(*args, **kwargs)
