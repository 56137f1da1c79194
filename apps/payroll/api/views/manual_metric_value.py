from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.filters import OrderingFilter

from apps.payroll.api.serializers import ManualMetricValueSerializer
from apps.payroll.models import ManualMetricValue
from libs import BaseModelViewSet


@extend_schema_view(
    list=extend_schema(summary="List manual metric values", tags=["2.4: Manual Metrics"]),
    retrieve=extend_schema(summary="Get manual metric value", tags=["2.4: Manual Metrics"]),
    create=extend_schema(summary="Enter manual metric value", tags=["2.4: Manual Metrics"]),
    update=extend_schema(summary="Update manual metric value", tags=["2.4: Manual Metrics"]),
    partial_update=extend_schema(summary="Partially update manual metric value", tags=["2.4: Manual Metrics"]),
    destroy=extend_schema(summary="Delete manual metric value", tags=["2.4: Manual Metrics"]),
)
class ManualMetricValueViewSet(BaseModelViewSet):
    """Human-entered values for manual KPI, CPL efficiency and custom metrics."""

    queryset = ManualMetricValue.objects.select_related("user")
    serializer_class = ManualMetricValueSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = {"user": ["exact"], "month": ["exact"], "metric_source": ["exact"]}
    ordering_fields = ["month", "value"]

    module = "Payroll"
    submodule = "Manual Metrics"
    permission_prefix = "manual_metric"
