from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.payroll.constants import OwnerType
from apps.payroll.models import SalaryScheme
from apps.payroll.services import rule_store


class KPIRuleSerializer(serializers.Serializer):
    task_type = serializers.CharField(max_length=32)
    value = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0)


class SalarySchemeSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalaryScheme
        fields = [
            "id",
            "owner_type",
            "owner_id",
            "base_salary",
            "kpi_rules",
            "pm_bonus_percent",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SalarySchemeUpsertSerializer(serializers.Serializer):
    """Create or replace the active salary scheme of an owner."""

    owner_type = serializers.ChoiceField(choices=OwnerType.choices)
    owner_id = serializers.IntegerField(min_value=1)
    base_salary = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0)
    kpi_rules = KPIRuleSerializer(many=True, required=False, default=list)
    pm_bonus_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False, allow_null=True
    )

    def create(self, validated_data):
        try:
            return rule_store.upsert_salary_scheme(**validated_data)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
