from .affiliate_config import AffiliateConfig
from .organization import Organization, OrganizationPayment
from .promo_code import PromoCode, normalize_promo_code
from .referral import ReferralPayout, ReferralRegistration, ReferralTransaction

__all__ = [
    "AffiliateConfig",
    "Organization",
    "OrganizationPayment",
    "PromoCode",
    "ReferralPayout",
    "ReferralRegistration",
    "ReferralTransaction",
    "normalize_promo_code",
]
