"""ViewSet for SalaryScheme model."""

from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.payroll.api.serializers import SalarySchemeSerializer, SalarySchemeUpsertSerializer
from apps.payroll.models import SalaryScheme
from libs import BaseReadOnlyModelViewSet


@extend_schema_view(
    list=extend_schema(
        summary="List salary schemes",
        description="List salary schemes, filter by owner with `owner_type` and `owner_id`",
        tags=["2.2: Salary Schemes"],
    ),
    retrieve=extend_schema(summary="Get salary scheme details", tags=["2.2: Salary Schemes"]),
)
class SalarySchemeViewSet(BaseReadOnlyModelViewSet):
    queryset = SalaryScheme.objects.all()
    serializer_class = SalarySchemeSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {"owner_type": ["exact"], "owner_id": ["exact"], "is_active": ["exact"]}

    module = "Payroll"
    submodule = "Salary Schemes"
    permission_prefix = "salary_scheme"

    PERMISSION_REGISTERED_ACTIONS = {
        "upsert": {
            "name_template": _("Save Salary Scheme"),
            "description_template": _("Permission to create or replace the active salary scheme of an owner"),
        },
    }

    def get_serializer_class(self):
        if self.action == "upsert":
            return SalarySchemeUpsertSerializer
        return SalarySchemeSerializer

    @extend_schema(
        summary="Create or replace salary scheme",
        description="Save the active salary scheme of a job title or a user",
        tags=["2.2: Salary Schemes"],
        request=SalarySchemeUpsertSerializer,
        responses={200: SalarySchemeSerializer},
        examples=[
            OpenApiExample(
                "Request - KPI rates per task type",
                value={
                    "owner_type": "job_title",
                    "owner_id": 3,
                    "base_salary": "150000.00",
                    "kpi_rules": [{"task_type": "Post", "value": "1500.00"}],
                    "pm_bonus_percent": None,
                },
                request_only=True,
            ),
        ],
    )
    @action(detail=False, methods=["post"])
    def upsert(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scheme = serializer.save()
        return Response(SalarySchemeSerializer(scheme).data, status=status.HTTP_200_OK)
