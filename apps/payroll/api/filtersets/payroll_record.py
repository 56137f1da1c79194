import django_filters

from apps.payroll.models import PayrollRecord


class PayrollRecordFilterSet(django_filters.FilterSet):
    """FilterSet for PayrollRecord.

    Provides filtering by:
    - user (exact match by user id)
    - month (exact match, gte, lte on the YYYY-MM key)
    - status (exact match)
    """

    user = django_filters.NumberFilter(field_name="user_id", lookup_expr="exact")
    month = django_filters.CharFilter(field_name="month", lookup_expr="exact")
    month__gte = django_filters.CharFilter(field_name="month", lookup_expr="gte")
    month__lte = django_filters.CharFilter(field_name="month", lookup_expr="lte")
    status = django_filters.CharFilter(field_name="status", lookup_expr="exact")

    class Meta:
        model = PayrollRecord
        fields = ["user", "month", "month__gte", "month__lte", "status"]
