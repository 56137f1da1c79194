from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from libs.models import VersionedConfigModel


class AffiliateConfig(VersionedConfigModel):
    """Versioned affiliate program configuration.

    The row with the highest version is active. Expected ``config`` keys:
    ``tiers`` (list of ``{max_clients, percent}``), ``first_payment_percent``,
    ``level_percents`` (``{"2": ..., "3": ...}``), ``maturation_days``,
    ``min_payout`` and ``commission_window_days``. Missing keys fall back to
    ``apps.affiliate.constants.DEFAULT_AFFILIATE_CONFIG``.
    """

    class Meta:
        verbose_name = _("Affiliate configuration")
        verbose_name_plural = _("Affiliate configurations")
        db_table = "affiliate_config"
        ordering = ["-version"]

    def clean(self):
        from apps.affiliate.services.commission_ledger import validate_affiliate_config

        super().clean()
        try:
            validate_affiliate_config(self.config)
        except ValidationError as exc:
            raise ValidationError(
                {"config": [f"{key}: {message}" for key, messages in exc.message_dict.items() for message in messages]}
            )
