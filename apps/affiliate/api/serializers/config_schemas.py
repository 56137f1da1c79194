from rest_framework import serializers

from apps.affiliate.constants import MAX_REFERRAL_LEVEL


def percent_field(**kwargs):
    return serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100, **kwargs)


class AffiliateTierSerializer(serializers.Serializer):
    """Serializer for a single level-1 commission tier"""

    max_clients = serializers.IntegerField(allow_null=True, min_value=0)
    percent = percent_field()


class AffiliateConfigSchemaSerializer(serializers.Serializer):
    """Affiliate configuration schema serializer.

    Every key is optional because missing keys fall back to the defaults.
    Tiers are returned ordered by ``max_clients`` with the open-ended tier last.
    """

    tiers = AffiliateTierSerializer(many=True, required=False, allow_empty=False)
    first_payment_percent = percent_field(required=False)
    level_percents = serializers.DictField(child=percent_field(), required=False)
    maturation_days = serializers.IntegerField(min_value=0, required=False)
    min_payout = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0, required=False)
    commission_window_days = serializers.IntegerField(min_value=1, required=False)

    def validate_tiers(self, tiers):
        ordered = sorted(tiers, key=lambda tier: (tier["max_clients"] is None, tier["max_clients"] or 0))
        if sum(1 for tier in ordered if tier["max_clients"] is None) > 1:
            raise serializers.ValidationError("Only one tier can be open-ended")

        limits = [tier["max_clients"] for tier in ordered if tier["max_clients"] is not None]
        if len(limits) != len(set(limits)):
            raise serializers.ValidationError("Tier client limits must be unique")
        return [dict(tier) for tier in ordered]

    def validate_level_percents(self, value):
        allowed = {str(level) for level in range(2, MAX_REFERRAL_LEVEL + 1)}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise serializers.ValidationError(f"Unknown referral levels: {', '.join(unknown)}")
        return value
