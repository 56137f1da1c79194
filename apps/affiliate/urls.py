from rest_framework.routers import DefaultRouter

from apps.affiliate.api.views import (
    AffiliateStatsViewSet,
    PromoCodeViewSet,
    ReferralPayoutViewSet,
    ReferralRegistrationViewSet,
    ReferralTransactionViewSet,
)

app_name = "affiliate"

router = DefaultRouter()
router.register(r"stats", AffiliateStatsViewSet, basename="stats")
router.register(r"promo-codes", PromoCodeViewSet, basename="promo-code")
router.register(r"referrals", ReferralRegistrationViewSet, basename="referral")
router.register(r"transactions", ReferralTransactionViewSet, basename="transaction")
router.register(r"payouts", ReferralPayoutViewSet, basename="payout")

urlpatterns = router.urls
