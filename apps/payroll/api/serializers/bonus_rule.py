from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.payroll.models import BonusRule
from apps.payroll.services import rule_store


class TieredBandSerializer(serializers.Serializer):
    """One ``[min, max)`` band of a tiered rule; ``max`` empty means open-ended."""

    min = serializers.DecimalField(max_digits=20, decimal_places=2)
    max = serializers.DecimalField(max_digits=20, decimal_places=2, required=False, allow_null=True)
    reward = serializers.DecimalField(max_digits=20, decimal_places=2)


class BonusRuleSerializer(serializers.ModelSerializer):
    """Serializer for BonusRule CRUD operations."""

    tiered_config = TieredBandSerializer(many=True, required=False)
    task_types = serializers.ListField(child=serializers.CharField(max_length=32), required=False)

    class Meta:
        model = BonusRule
        fields = [
            "id",
            "owner_type",
            "owner_id",
            "name",
            "description",
            "metric_source",
            "condition_type",
            "threshold_operator",
            "threshold_value",
            "tiered_config",
            "reward_type",
            "reward_value",
            "apply_to_base",
            "is_active",
            "calculation_period",
            "task_types",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_tiered_config(self, value):
        # JSONField storage keeps numbers as strings
        return [
            {
                "min": str(band["min"]),
                "max": None if band.get("max") is None else str(band["max"]),
                "reward": str(band["reward"]),
            }
            for band in value
        ]

    def validate(self, attrs):
        rule = BonusRule()
        if self.instance is not None:
            for field in rule_store.BONUS_RULE_FIELDS:
                setattr(rule, field, getattr(self.instance, field))
        for field, value in attrs.items():
            setattr(rule, field, value)

        try:
            rule_store.validate_bonus_rule(rule)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return attrs

    def create(self, validated_data):
        return rule_store.create_bonus_rule(**validated_data)

    def update(self, instance, validated_data):
        return rule_store.update_bonus_rule(instance, **validated_data)
