from django.db import models
from django.utils.translation import gettext_lazy as _

MAX_REFERRAL_LEVEL = 3


class PayoutConflictReason(models.TextChoices):
    BELOW_PAYOUT_THRESHOLD = "BELOW_PAYOUT_THRESHOLD", _("Ready balance is below the minimum payout")


# Level-1 commission percent by number of active referred clients.
# ``max_clients`` is inclusive; ``None`` closes the table.
DEFAULT_TIERS = [
    {"max_clients": 5, "percent": 25},
    {"max_clients": 10, "percent": 30},
    {"max_clients": 20, "percent": 35},
    {"max_clients": 40, "percent": 40},
    {"max_clients": 80, "percent": 45},
    {"max_clients": None, "percent": 50},
]

DEFAULT_AFFILIATE_CONFIG = {
    "tiers": DEFAULT_TIERS,
    "first_payment_percent": 50,
    "level_percents": {"2": 10, "3": 5},
    "maturation_days": 14,
    "min_payout": 5000,
    "commission_window_days": 365,
}
