from .affiliate import (
    AffiliateStatsViewSet,
    PromoCodeViewSet,
    ReferralPayoutViewSet,
    ReferralRegistrationViewSet,
    ReferralTransactionViewSet,
)

__all__ = [
    "AffiliateStatsViewSet",
    "PromoCodeViewSet",
    "ReferralPayoutViewSet",
    "ReferralRegistrationViewSet",
    "ReferralTransactionViewSet",
]
