from .affiliate import (
    AffiliateStatsSerializer,
    OrganizationPaymentSerializer,
    PayoutRequestSerializer,
    PayoutResultSerializer,
    PromoCodeSerializer,
    ReferralPaymentEventSerializer,
    ReferralPayoutSerializer,
    ReferralRegistrationSerializer,
    ReferralTransactionSerializer,
    RegisterReferralSerializer,
)
from .config_schemas import AffiliateConfigSchemaSerializer, AffiliateTierSerializer

__all__ = [
    "AffiliateConfigSchemaSerializer",
    "AffiliateStatsSerializer",
    "AffiliateTierSerializer",
    "OrganizationPaymentSerializer",
    "PayoutRequestSerializer",
    "PayoutResultSerializer",
    "PromoCodeSerializer",
    "ReferralPaymentEventSerializer",
    "ReferralPayoutSerializer",
    "ReferralRegistrationSerializer",
    "ReferralTransactionSerializer",
    "RegisterReferralSerializer",
]
