"""ViewSets for the affiliate program."""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view
from rest_framework import mixins, serializers, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from apps.affiliate.api.serializers import (
    AffiliateStatsSerializer,
    PayoutRequestSerializer,
    PayoutResultSerializer,
    PromoCodeSerializer,
    ReferralPaymentEventSerializer,
    ReferralPayoutSerializer,
    ReferralRegistrationSerializer,
    ReferralTransactionSerializer,
    RegisterReferralSerializer,
)
from apps.affiliate.models import PromoCode, ReferralPayout, ReferralRegistration, ReferralTransaction
from apps.affiliate.services import commission_ledger, promo_codes
from libs import BaseGenericViewSet, BaseReadOnlyModelViewSet


class OwnRecordsMixin:
    """Limit the queryset to the current user's rows; superusers see everything."""

    owner_field = "user"

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if user.is_superuser:
            return queryset
        return queryset.filter(**{self.owner_field: user})


@extend_schema_view(
    list=extend_schema(
        summary="Get affiliate statistics",
        description="Commission totals by status and referral counts of the current user",
        tags=["3.1: Affiliate Stats"],
        responses={200: AffiliateStatsSerializer},
        examples=[
            OpenApiExample(
                "Success",
                value={
                    "success": True,
                    "data": {
                        "ready_to_pay": "6200.00",
                        "pending": "1000.00",
                        "total_paid": "12000.00",
                        "total_referred": 9,
                        "active_clients": 7,
                        "current_tier_percent": "30.00",
                    },
                    "error": None,
                },
                response_only=True,
                status_codes=["200"],
            ),
        ],
    ),
)
class AffiliateStatsViewSet(BaseGenericViewSet):
    serializer_class = AffiliateStatsSerializer

    module = "Affiliate"
    submodule = "Stats"
    permission_prefix = "affiliate_stats"

    def list(self, request):
        stats = commission_ledger.get_affiliate_stats(request.user)
        return Response(AffiliateStatsSerializer(stats).data)


@extend_schema_view(
    list=extend_schema(summary="List promo codes", tags=["3.2: Promo Codes"]),
    create=extend_schema(summary="Create promo code", tags=["3.2: Promo Codes"]),
    destroy=extend_schema(summary="Delete promo code", tags=["3.2: Promo Codes"]),
)
class PromoCodeViewSet(
    OwnRecordsMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    BaseGenericViewSet,
):
    queryset = PromoCode.objects.select_related("organization")
    serializer_class = PromoCodeSerializer

    module = "Affiliate"
    submodule = "Promo Codes"
    permission_prefix = "promo_code"

    def perform_destroy(self, instance):
        promo_codes.delete_promo_code(instance)


@extend_schema_view(
    list=extend_schema(summary="List referral registrations", tags=["3.3: Referrals"]),
    retrieve=extend_schema(summary="Get referral registration", tags=["3.3: Referrals"]),
)
class ReferralRegistrationViewSet(OwnRecordsMixin, BaseReadOnlyModelViewSet):
    queryset = ReferralRegistration.objects.select_related("referred_organization")
    serializer_class = ReferralRegistrationSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {"level": ["exact"], "is_active": ["exact"]}
    owner_field = "referrer_user"

    module = "Affiliate"
    submodule = "Referrals"
    permission_prefix = "referral_registration"

    PERMISSION_REGISTERED_ACTIONS = {
        "register": {
            "name_template": _("Register Referral"),
            "description_template": _("Permission to register an organization under a promo code"),
        },
    }

    def get_serializer_class(self):
        if self.action == "register":
            return RegisterReferralSerializer
        return ReferralRegistrationSerializer

    @extend_schema(
        summary="Register referral",
        description="Register an organization under a promo code, creating registrations for up to three levels",
        tags=["3.3: Referrals"],
        request=RegisterReferralSerializer,
        responses={201: ReferralRegistrationSerializer(many=True)},
    )
    @action(detail=False, methods=["post"])
    def register(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            registrations = commission_ledger.register_referral(
                serializer.validated_data["promo_code"], serializer.validated_data["referred_organization_id"]
            )
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return Response(ReferralRegistrationSerializer(registrations, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    list=extend_schema(summary="List referral transactions", tags=["3.4: Referral Transactions"]),
    retrieve=extend_schema(summary="Get referral transaction", tags=["3.4: Referral Transactions"]),
)
class ReferralTransactionViewSet(OwnRecordsMixin, BaseReadOnlyModelViewSet):
    queryset = ReferralTransaction.objects.select_related("referred_organization")
    serializer_class = ReferralTransactionSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = {"status": ["exact"], "level": ["exact"]}
    ordering_fields = ["created_at", "commission_amount"]
    ordering = ["-created_at"]
    owner_field = "referrer_user"

    module = "Affiliate"
    submodule = "Referral Transactions"
    permission_prefix = "referral_transaction"

    PERMISSION_REGISTERED_ACTIONS = {
        "record_payment": {
            "name_template": _("Record Referral Payment"),
            "description_template": _("Permission to record a referred organization's payment"),
        },
    }

    def get_serializer_class(self):
        if self.action == "record_payment":
            return ReferralPaymentEventSerializer
        return ReferralTransactionSerializer

    @extend_schema(
        summary="Record referral payment",
        description="Record a payment of a referred organization and create the commissions it earns",
        tags=["3.4: Referral Transactions"],
        request=ReferralPaymentEventSerializer,
        responses={201: ReferralTransactionSerializer(many=True)},
    )
    @action(detail=False, methods=["post"], url_path="record-payment")
    def record_payment(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            transactions = commission_ledger.record_referral_payment(
                data["referred_organization_id"],
                data["amount"],
                paid_at=data.get("paid_at"),
                referrer_chain=data.get("referrer_chain"),
                is_first_payment=data.get("is_first_payment"),
            )
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return Response(ReferralTransactionSerializer(transactions, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    list=extend_schema(summary="List payouts", tags=["3.5: Payouts"]),
    retrieve=extend_schema(summary="Get payout", tags=["3.5: Payouts"]),
)
class ReferralPayoutViewSet(OwnRecordsMixin, BaseReadOnlyModelViewSet):
    queryset = ReferralPayout.objects.all()
    serializer_class = ReferralPayoutSerializer

    module = "Affiliate"
    submodule = "Payouts"
    permission_prefix = "referral_payout"

    PERMISSION_REGISTERED_ACTIONS = {
        "request_payout": {
            "name_template": _("Request Payout"),
            "description_template": _("Permission to pay out ready referral commissions"),
        },
    }

    def get_serializer_class(self):
        if self.action == "request_payout":
            return PayoutRequestSerializer
        return ReferralPayoutSerializer

    @extend_schema(
        summary="Request payout",
        description="Pay out every ready commission of the current user once the minimum payout is reached",
        tags=["3.5: Payouts"],
        request=PayoutRequestSerializer,
        responses={200: PayoutResultSerializer},
        examples=[
            OpenApiExample(
                "Below threshold",
                value={
                    "success": True,
                    "data": {"applied": False, "reason": "BELOW_PAYOUT_THRESHOLD", "amount": "1200.00", "payout": None},
                    "error": None,
                },
                response_only=True,
                status_codes=["200"],
            ),
        ],
    )
    @action(detail=False, methods=["post"], url_path="request", url_name="request")
    def request_payout(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = commission_ledger.request_payout(request.user, bank_details=serializer.validated_data["bank_details"])
        return Response(
            PayoutResultSerializer(
                {"applied": result.applied, "reason": result.reason, "amount": result.amount, "payout": result.payout}
            ).data
        )
