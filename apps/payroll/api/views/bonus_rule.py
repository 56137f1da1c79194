"""ViewSet for BonusRule model."""

from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response

from apps.payroll.api.filtersets import BonusRuleFilterSet
from apps.payroll.api.serializers import BonusRuleSerializer
from apps.payroll.models import BonusRule
from apps.payroll.services import rule_store
from libs import BaseModelViewSet

BONUS_RULE_EXAMPLE = {
    "id": 1,
    "owner_type": "job_title",
    "owner_id": 3,
    "name": "Retention bonus",
    "description": "",
    "metric_source": "project_retention",
    "condition_type": "tiered",
    "threshold_operator": "",
    "threshold_value": None,
    "tiered_config": [
        {"min": "0.00", "max": "100.00", "reward": "5.00"},
        {"min": "100.00", "max": "500.00", "reward": "10.00"},
    ],
    "reward_type": "percent",
    "reward_value": "0.00",
    "apply_to_base": True,
    "is_active": True,
    "calculation_period": "monthly",
    "task_types": [],
    "created_at": "2025-01-01T00:00:00Z",
    "updated_at": "2025-01-01T00:00:00Z",
}


@extend_schema_view(
    list=extend_schema(
        summary="List bonus rules",
        description="List bonus rules, filter by owner with `owner_type` and `owner_id`",
        tags=["2.1: Bonus Rules"],
    ),
    retrieve=extend_schema(summary="Get bonus rule details", tags=["2.1: Bonus Rules"]),
    create=extend_schema(
        summary="Create bonus rule",
        tags=["2.1: Bonus Rules"],
        examples=[
            OpenApiExample(
                "Success - Tiered rule",
                value={"success": True, "data": BONUS_RULE_EXAMPLE, "error": None},
                response_only=True,
                status_codes=["201"],
            ),
            OpenApiExample(
                "Error - Overlapping bands",
                value={
                    "success": False,
                    "data": None,
                    "error": {
                        "type": "validation_error",
                        "errors": [
                            {
                                "code": "invalid",
                                "detail": "Bands starting at 0.00 and 50.00 overlap",
                                "attr": "tiered_config",
                            }
                        ],
                    },
                },
                response_only=True,
                status_codes=["400"],
            ),
        ],
    ),
    update=extend_schema(summary="Update bonus rule", tags=["2.1: Bonus Rules"]),
    partial_update=extend_schema(summary="Partially update bonus rule", tags=["2.1: Bonus Rules"]),
    destroy=extend_schema(summary="Delete bonus rule", tags=["2.1: Bonus Rules"]),
)
class BonusRuleViewSet(BaseModelViewSet):
    """ViewSet for managing bonus rules of job titles and users."""

    queryset = BonusRule.objects.all()
    serializer_class = BonusRuleSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = BonusRuleFilterSet
    search_fields = ["name"]
    ordering_fields = ["name", "created_at"]
    ordering = ["owner_type", "owner_id", "name"]

    module = "Payroll"
    submodule = "Bonus Rules"
    permission_prefix = "bonus_rule"

    PERMISSION_REGISTERED_ACTIONS = {
        "toggle_active": {
            "name_template": _("Toggle Bonus Rule"),
            "description_template": _("Permission to activate or deactivate a bonus rule"),
        },
    }

    def perform_destroy(self, instance):
        rule_store.delete_bonus_rule(instance)

    @extend_schema(
        summary="Toggle bonus rule",
        description="Flip the `is_active` flag of the rule",
        tags=["2.1: Bonus Rules"],
        request=None,
        responses={200: BonusRuleSerializer},
    )
    @action(detail=True, methods=["post"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):
        rule = rule_store.toggle_bonus_rule(self.get_object())
        return Response(self.get_serializer(rule).data)
