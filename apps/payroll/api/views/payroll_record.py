"""ViewSets for payroll records and balance transactions."""

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view
from rest_framework import serializers, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from apps.payroll.api.filtersets import PayrollRecordFilterSet
from apps.payroll.api.serializers import (
    BalanceAdjustmentSerializer,
    BalanceTransactionSerializer,
    CopyPreviousMonthResultSerializer,
    LedgerResultSerializer,
    PayrollComputeSerializer,
    PayrollManualFieldsSerializer,
    PayrollMonthSerializer,
    PayrollRecordSerializer,
)
from apps.payroll.models import BalanceTransaction, PayrollRecord
from apps.payroll.services import payroll_ledger
from libs import BaseReadOnlyModelViewSet

PAYROLL_RECORD_EXAMPLE = {
    "id": 12,
    "user": {"id": 5, "username": "anna", "full_name": "Anna Smith"},
    "month": "2025-03",
    "status": "PAID",
    "fix_salary": "150000.00",
    "calculated_kpi": "100000.00",
    "manual_bonus": "0.00",
    "manual_penalty": "0.00",
    "advance": "0.00",
    "balance_at_start": "0.00",
    "net_amount": "250000.00",
    "task_payments": [{"task_type": "Post", "count": 3, "rate": "1500.00", "amount": "4500.00"}],
    "bonus_details": [],
    "calculated_at": "2025-03-31T20:00:00Z",
    "frozen_at": "2025-04-01T09:00:00Z",
    "frozen_by": 1,
    "paid_at": "2025-04-02T09:00:00Z",
    "paid_by": 1,
    "created_at": "2025-03-01T00:05:00Z",
    "updated_at": "2025-04-02T09:00:00Z",
}


def ledger_response(result):
    return Response(
        LedgerResultSerializer(
            {"applied": result.applied, "reason": result.reason, "record": result.record}
        ).data,
        status=status.HTTP_200_OK,
    )


@extend_schema_view(
    list=extend_schema(
        summary="List payroll records",
        description="List payroll records, filter by `user`, `month` and `status`",
        tags=["2.3: Payroll Records"],
    ),
    retrieve=extend_schema(summary="Get payroll record details", tags=["2.3: Payroll Records"]),
)
class PayrollRecordViewSet(BaseReadOnlyModelViewSet):
    """Monthly payroll records and their DRAFT -> FROZEN -> PAID commands.

    Commands always answer 200 with the authoritative record. A command that
    does not apply to the record's current state answers ``applied=false``
    with a reason code.
    """

    queryset = PayrollRecord.objects.select_related("user")
    serializer_class = PayrollRecordSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PayrollRecordFilterSet
    ordering_fields = ["month", "net_amount", "created_at"]
    ordering = ["-month", "user_id"]

    module = "Payroll"
    submodule = "Payroll Records"
    permission_prefix = "payroll_record"

    PERMISSION_REGISTERED_ACTIONS = {
        "compute": {
            "name_template": _("Compute Payroll Record"),
            "description_template": _("Permission to compute a user's payroll record for a month"),
        },
        "freeze": {
            "name_template": _("Freeze Payroll Record"),
            "description_template": _("Permission to freeze a payroll record"),
        },
        "pay": {
            "name_template": _("Pay Payroll Record"),
            "description_template": _("Permission to pay a payroll record and credit the user's balance"),
        },
        "manual_fields": {
            "name_template": _("Edit Payroll Manual Fields"),
            "description_template": _("Permission to edit bonus, penalty and advance of a draft payroll record"),
        },
        "copy_previous_month": {
            "name_template": _("Copy Previous Month"),
            "description_template": _("Permission to copy manual fields from the previous month"),
        },
    }

    def get_serializer_class(self):
        if self.action == "compute":
            return PayrollComputeSerializer
        if self.action == "manual_fields":
            return PayrollManualFieldsSerializer
        if self.action == "copy_previous_month":
            return PayrollMonthSerializer
        return PayrollRecordSerializer

    @extend_schema(
        summary="Compute payroll record",
        description="Create or refresh the DRAFT payroll record of a user for a month",
        tags=["2.3: Payroll Records"],
        request=PayrollComputeSerializer,
        responses={200: LedgerResultSerializer},
        examples=[
            OpenApiExample(
                "Request",
                value={"user_id": 5, "month": "2025-03"},
                request_only=True,
            ),
            OpenApiExample(
                "Locked - Record already paid",
                value={
                    "success": True,
                    "data": {"applied": False, "reason": "RECORD_LOCKED", "record": PAYROLL_RECORD_EXAMPLE},
                    "error": None,
                },
                response_only=True,
                status_codes=["200"],
            ),
        ],
    )
    @action(detail=False, methods=["post"])
    def compute(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = get_object_or_404(get_user_model(), pk=serializer.validated_data["user_id"])
        try:
            result = payroll_ledger.compute_payroll_record(user, serializer.validated_data["month"])
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return ledger_response(result)

    @extend_schema(
        summary="Freeze payroll record",
        description="Lock the numeric fields of a DRAFT record",
        tags=["2.3: Payroll Records"],
        request=None,
        responses={200: LedgerResultSerializer},
    )
    @action(detail=True, methods=["post"])
    def freeze(self, request, pk=None):
        result = payroll_ledger.freeze_payroll_record(self.get_object(), frozen_by=request.user)
        return ledger_response(result)

    @extend_schema(
        summary="Pay payroll record",
        description="Mark the record PAID and credit its net amount to the user's balance exactly once",
        tags=["2.3: Payroll Records"],
        request=None,
        responses={200: LedgerResultSerializer},
        examples=[
            OpenApiExample(
                "Success - Paid",
                value={
                    "success": True,
                    "data": {"applied": True, "reason": None, "record": PAYROLL_RECORD_EXAMPLE},
                    "error": None,
                },
                response_only=True,
                status_codes=["200"],
            ),
            OpenApiExample(
                "Conflict - Already paid",
                value={
                    "success": True,
                    "data": {"applied": False, "reason": "ALREADY_PAID", "record": PAYROLL_RECORD_EXAMPLE},
                    "error": None,
                },
                response_only=True,
                status_codes=["200"],
            ),
        ],
    )
    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        result = payroll_ledger.pay_payroll_record(self.get_object(), paid_by=request.user)
        return ledger_response(result)

    @extend_schema(
        summary="Update manual fields",
        description="Set manual bonus, manual penalty and advance of a DRAFT record",
        tags=["2.3: Payroll Records"],
        request=PayrollManualFieldsSerializer,
        responses={200: LedgerResultSerializer},
    )
    @action(detail=True, methods=["post"], url_path="manual-fields")
    def manual_fields(self, request, pk=None):
        record = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = payroll_ledger.update_manual_fields(record, **serializer.validated_data)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return ledger_response(result)

    @extend_schema(
        summary="Copy previous month",
        description="Copy manual fields from the previous month into the DRAFT records of `month`",
        tags=["2.3: Payroll Records"],
        request=PayrollMonthSerializer,
        responses={200: CopyPreviousMonthResultSerializer},
    )
    @action(detail=False, methods=["post"], url_path="copy-previous-month")
    def copy_previous_month(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = payroll_ledger.copy_previous_month(serializer.validated_data["month"])
        return Response(CopyPreviousMonthResultSerializer(result).data)


@extend_schema_view(
    list=extend_schema(summary="List balance transactions", tags=["2.5: Balance Transactions"]),
    retrieve=extend_schema(summary="Get balance transaction", tags=["2.5: Balance Transactions"]),
)
class BalanceTransactionViewSet(BaseReadOnlyModelViewSet):
    """Audit log of user balance changes."""

    queryset = BalanceTransaction.objects.all()
    serializer_class = BalanceTransactionSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = {"user": ["exact"], "source": ["exact"]}
    ordering_fields = ["created_at", "amount"]
    ordering = ["-created_at"]

    module = "Payroll"
    submodule = "Balance Transactions"
    permission_prefix = "balance_transaction"

    PERMISSION_REGISTERED_ACTIONS = {
        "adjust": {
            "name_template": _("Adjust Balance"),
            "description_template": _("Permission to manually adjust a user's balance"),
        },
    }

    def get_serializer_class(self):
        if self.action == "adjust":
            return BalanceAdjustmentSerializer
        return BalanceTransactionSerializer

    @extend_schema(
        summary="Adjust user balance",
        description="Apply a manual positive or negative adjustment to a user's balance",
        tags=["2.5: Balance Transactions"],
        request=BalanceAdjustmentSerializer,
        responses={201: BalanceTransactionSerializer},
    )
    @action(detail=False, methods=["post"])
    def adjust(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = get_object_or_404(get_user_model(), pk=serializer.validated_data["user_id"])
        entry = payroll_ledger.adjust_balance(
            user,
            serializer.validated_data["amount"],
            note=serializer.validated_data["note"],
            created_by=request.user,
        )
        return Response(BalanceTransactionSerializer(entry).data, status=status.HTTP_201_CREATED)
