from rest_framework import serializers

from apps.payroll.models import ManualMetricValue

from .payroll_record import validate_month_value


class ManualMetricValueSerializer(serializers.ModelSerializer):
    month = serializers.CharField(max_length=7, validators=[validate_month_value], help_text="Month in YYYY-MM format")

    class Meta:
        model = ManualMetricValue
        fields = ["id", "user", "month", "metric_source", "value", "note", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
