import django_filters

from apps.payroll.models import BonusRule


class BonusRuleFilterSet(django_filters.FilterSet):
    """FilterSet for BonusRule: owner, metric source and active flag."""

    owner_type = django_filters.CharFilter(field_name="owner_type", lookup_expr="exact")
    owner_id = django_filters.NumberFilter(field_name="owner_id", lookup_expr="exact")
    metric_source = django_filters.CharFilter(field_name="metric_source", lookup_expr="exact")
    is_active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = BonusRule
        fields = ["owner_type", "owner_id", "metric_source", "is_active"]
