from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.affiliate.models import (
    Organization,
    OrganizationPayment,
    PromoCode,
    ReferralPayout,
    ReferralRegistration,
    ReferralTransaction,
)
from apps.affiliate.services import promo_codes


class AffiliateStatsSerializer(serializers.Serializer):
    ready_to_pay = serializers.DecimalField(max_digits=20, decimal_places=2)
    pending = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_referred = serializers.IntegerField()
    active_clients = serializers.IntegerField()
    current_tier_percent = serializers.DecimalField(max_digits=5, decimal_places=2)


class PromoCodeSerializer(serializers.ModelSerializer):
    organization_id = serializers.PrimaryKeyRelatedField(
        queryset=Organization.objects.all(), source="organization", write_only=True
    )
    organization_name = serializers.CharField(source="organization.name", read_only=True)

    class Meta:
        model = PromoCode
        fields = [
            "id",
            "code",
            "organization_id",
            "organization_name",
            "user",
            "registrations_count",
            "payments_count",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "user", "registrations_count", "payments_count", "is_active", "created_at"]

    def validate_organization_id(self, organization):
        user = self.context["request"].user
        if not user.is_superuser and organization.owner_id != user.pk:
            raise serializers.ValidationError("You can only create promo codes for your own organization")
        return organization

    def create(self, validated_data):
        try:
            return promo_codes.create_promo_code(
                validated_data["organization"], self.context["request"].user, validated_data["code"]
            )
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)


class ReferralRegistrationSerializer(serializers.ModelSerializer):
    referred_organization_name = serializers.CharField(source="referred_organization.name", read_only=True)

    class Meta:
        model = ReferralRegistration
        fields = [
            "id",
            "referrer_user",
            "referrer_organization",
            "referred_organization",
            "referred_organization_name",
            "promo_code",
            "level",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class RegisterReferralSerializer(serializers.Serializer):
    promo_code = serializers.CharField(max_length=64)
    referred_organization_id = serializers.PrimaryKeyRelatedField(queryset=Organization.objects.all())


class ReferralTransactionSerializer(serializers.ModelSerializer):
    referred_organization_name = serializers.CharField(source="referred_organization.name", read_only=True)

    class Meta:
        model = ReferralTransaction
        fields = [
            "id",
            "referrer_user",
            "referrer_organization",
            "referred_organization",
            "referred_organization_name",
            "payment",
            "level",
            "payment_amount",
            "commission_percent",
            "commission_amount",
            "status",
            "ready_at",
            "paid_at",
            "payout",
            "created_at",
        ]
        read_only_fields = fields


class OrganizationPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrganizationPayment
        fields = ["id", "organization", "amount", "paid_at", "created_at"]
        read_only_fields = fields


class ReferralPaymentEventSerializer(serializers.Serializer):
    """Payment of a referred organization reported by the billing side."""

    referred_organization_id = serializers.PrimaryKeyRelatedField(queryset=Organization.objects.all())
    amount = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=Decimal("0.01"))
    paid_at = serializers.DateTimeField(required=False)
    referrer_chain = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, max_length=3)
    is_first_payment = serializers.BooleanField(required=False, allow_null=True, default=None)


class ReferralPayoutSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReferralPayout
        fields = ["id", "user", "amount", "status", "bank_details", "requested_at", "processed_at"]
        read_only_fields = fields


class PayoutRequestSerializer(serializers.Serializer):
    bank_details = serializers.DictField(required=False, default=dict)


class PayoutResultSerializer(serializers.Serializer):
    applied = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True)
    amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    payout = ReferralPayoutSerializer(allow_null=True)
