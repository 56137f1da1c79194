from rest_framework import serializers

from apps.payroll.models import BalanceTransaction, PayrollRecord
from libs.datetimes import parse_month


def validate_month_value(value):
    try:
        parse_month(value)
    except ValueError:
        raise serializers.ValidationError("Month must be in YYYY-MM format")
    return value


class PayrollUserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    full_name = serializers.CharField(source="get_full_name", read_only=True)


class PayrollRecordSerializer(serializers.ModelSerializer):
    """Read-only representation of a payroll record."""

    user = PayrollUserSerializer(read_only=True)

    class Meta:
        model = PayrollRecord
        fields = [
            "id",
            "user",
            "month",
            "status",
            "fix_salary",
            "calculated_kpi",
            "manual_bonus",
            "manual_penalty",
            "advance",
            "balance_at_start",
            "net_amount",
            "task_payments",
            "bonus_details",
            "calculated_at",
            "frozen_at",
            "frozen_by",
            "paid_at",
            "paid_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PayrollComputeSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    month = serializers.CharField(max_length=7, validators=[validate_month_value])


class PayrollMonthSerializer(serializers.Serializer):
    month = serializers.CharField(max_length=7, validators=[validate_month_value])


class PayrollManualFieldsSerializer(serializers.Serializer):
    manual_bonus = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0, required=False)
    manual_penalty = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0, required=False)
    advance = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one manual field is required")
        return attrs


class LedgerResultSerializer(serializers.Serializer):
    """Outcome of a payroll ledger command."""

    applied = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True)
    record = PayrollRecordSerializer()


class CopyPreviousMonthResultSerializer(serializers.Serializer):
    source_month = serializers.CharField()
    month = serializers.CharField()
    copied = serializers.ListField(child=serializers.IntegerField())
    skipped = serializers.ListField(child=serializers.IntegerField())


class BalanceTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = BalanceTransaction
        fields = [
            "id",
            "user",
            "amount",
            "source",
            "payroll_record",
            "balance_after",
            "note",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class BalanceAdjustmentSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    note = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError("Amount cannot be zero")
        return value
