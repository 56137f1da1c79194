"""Tests for payroll API endpoints."""

import json
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.crm.constants import TaskType
from apps.payroll.constants import ConditionType, MetricSource, OwnerType, RewardType
from apps.payroll.models import BonusRule, ManualMetricValue, PayrollRecord, SalaryScheme
from apps.payroll.services import payroll_ledger, rule_store


def get_response_data(response):
    content = json.loads(response.content.decode())
    if "data" in content:
        return content["data"]
    return content


@pytest.mark.django_db
class TestBonusRuleAPI:
    """Test cases for BonusRule API endpoints"""

    def test_create_tiered_rule(self, api_client, user):
        # Arrange
        payload = {
            "owner_type": OwnerType.USER,
            "owner_id": user.pk,
            "name": "Tiered revenue",
            "metric_source": MetricSource.SALES_REVENUE,
            "condition_type": ConditionType.TIERED,
            "tiered_config": [
                {"min": "0", "max": "100", "reward": "5"},
                {"min": "100", "max": None, "reward": "10"},
            ],
            "reward_type": RewardType.PERCENT,
        }

        # Act
        response = api_client.post(reverse("payroll:bonus-rule-list"), payload, format="json")

        # Assert
        assert response.status_code == status.HTTP_201_CREATED
        content = json.loads(response.content)
        assert content["success"] is True
        assert content["error"] is None
        rule = BonusRule.objects.get(pk=content["data"]["id"])
        assert rule.tiered_config[1] == {"min": "100.00", "max": None, "reward": "10.00"}

    def test_create_invalid_rule_returns_field_errors(self, api_client, user):
        payload = {
            "owner_type": OwnerType.USER,
            "owner_id": user.pk,
            "name": "Broken threshold",
            "metric_source": MetricSource.SALES_REVENUE,
            "condition_type": ConditionType.THRESHOLD,
            "reward_type": RewardType.PERCENT,
            "reward_value": "5",
        }

        response = api_client.post(reverse("payroll:bonus-rule-list"), payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        content = json.loads(response.content)
        assert content["success"] is False
        assert content["data"] is None
        assert content["error"] is not None
        assert BonusRule.objects.count() == 0

    def test_filter_by_owner(self, api_client, user, job_title):
        rule_store.create_bonus_rule(
            owner_type=OwnerType.USER, owner_id=user.pk, name="Mine", metric_source=MetricSource.MANUAL_KPI
        )
        rule_store.create_bonus_rule(
            owner_type=OwnerType.JOB_TITLE, owner_id=job_title.pk, name="Shared", metric_source=MetricSource.MANUAL_KPI
        )

        response = api_client.get(
            reverse("payroll:bonus-rule-list"), {"owner_type": OwnerType.USER, "owner_id": user.pk}
        )

        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert [item["name"] for item in data["results"]] == ["Mine"]

    def test_toggle_active(self, api_client, user):
        rule = rule_store.create_bonus_rule(
            owner_type=OwnerType.USER, owner_id=user.pk, name="Toggle", metric_source=MetricSource.MANUAL_KPI
        )

        response = api_client.post(reverse("payroll:bonus-rule-toggle-active", args=[rule.pk]))

        assert response.status_code == status.HTTP_200_OK
        assert get_response_data(response)["is_active"] is False

    def test_delete(self, api_client, user):
        rule = rule_store.create_bonus_rule(
            owner_type=OwnerType.USER, owner_id=user.pk, name="Delete me", metric_source=MetricSource.MANUAL_KPI
        )

        response = api_client.delete(reverse("payroll:bonus-rule-detail", args=[rule.pk]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not BonusRule.objects.filter(pk=rule.pk).exists()


@pytest.mark.django_db
class TestSalarySchemeAPI:
    def test_upsert(self, api_client, user):
        payload = {
            "owner_type": OwnerType.USER,
            "owner_id": user.pk,
            "base_salary": "15000",
            "kpi_rules": [{"task_type": TaskType.POST, "value": "1500"}],
        }

        first = api_client.post(reverse("payroll:salary-scheme-upsert"), payload, format="json")
        payload["base_salary"] = "16000"
        second = api_client.post(reverse("payroll:salary-scheme-upsert"), payload, format="json")

        assert first.status_code == status.HTTP_200_OK
        assert get_response_data(first)["id"] == get_response_data(second)["id"]
        assert get_response_data(second)["base_salary"] == "16000.00"
        assert SalaryScheme.objects.count() == 1

    def test_negative_rate_rejected(self, api_client, user):
        payload = {
            "owner_type": OwnerType.USER,
            "owner_id": user.pk,
            "base_salary": "15000",
            "kpi_rules": [{"task_type": TaskType.POST, "value": "-1"}],
        }

        response = api_client.post(reverse("payroll:salary-scheme-upsert"), payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestPayrollRecordAPI:
    def test_compute(self, api_client, user, make_task, month):
        # Arrange
        rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, 0, [{"task_type": TaskType.POST, "value": 1500}])
        for _ in range(3):
            make_task(task_type=TaskType.POST)

        # Act
        response = api_client.post(
            reverse("payroll:payroll-record-compute"), {"user_id": user.pk, "month": month}, format="json"
        )

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert data["applied"] is True
        assert data["reason"] is None
        assert data["record"]["calculated_kpi"] == "4500.00"
        assert data["record"]["status"] == PayrollRecord.Status.DRAFT

    def test_compute_invalid_month(self, api_client, user):
        response = api_client.post(
            reverse("payroll:payroll-record-compute"), {"user_id": user.pk, "month": "March"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert json.loads(response.content)["success"] is False

    def test_compute_unknown_user(self, api_client, month):
        response = api_client.post(
            reverse("payroll:payroll-record-compute"), {"user_id": 999999, "month": month}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_freeze_conflict_is_not_an_error(self, api_client, user, month):
        """A state conflict is reported in the payload with status 200."""
        # Arrange
        record = payroll_ledger.compute_payroll_record(user, month).record
        url = reverse("payroll:payroll-record-freeze", args=[record.pk])
        api_client.post(url)

        # Act
        response = api_client.post(url)

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert data["applied"] is False
        assert data["reason"] == "ALREADY_FROZEN"
        assert data["record"]["status"] == PayrollRecord.Status.FROZEN

    def test_pay(self, api_client, user, superuser, month):
        rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, Decimal("250000"))
        record = payroll_ledger.compute_payroll_record(user, month).record
        url = reverse("payroll:payroll-record-pay", args=[record.pk])

        first = api_client.post(url)
        second = api_client.post(url)

        user.refresh_from_db()
        assert get_response_data(first)["applied"] is True
        assert get_response_data(first)["record"]["paid_by"] == superuser.pk
        assert get_response_data(second)["reason"] == "ALREADY_PAID"
        assert user.balance == Decimal("250000.00")

    def test_manual_fields(self, api_client, user, month):
        rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, Decimal("10000"))
        record = payroll_ledger.compute_payroll_record(user, month).record

        response = api_client.post(
            reverse("payroll:payroll-record-manual-fields", args=[record.pk]),
            {"manual_bonus": "500", "manual_penalty": "200", "advance": "3000"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert get_response_data(response)["record"]["net_amount"] == "7300.00"

    def test_manual_fields_negative_rejected(self, api_client, user, month):
        record = payroll_ledger.compute_payroll_record(user, month).record

        response = api_client.post(
            reverse("payroll:payroll-record-manual-fields", args=[record.pk]), {"advance": "-5"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manual_fields_on_paid_record(self, api_client, user, month):
        record = payroll_ledger.compute_payroll_record(user, month).record
        payroll_ledger.pay_payroll_record(record)

        response = api_client.post(
            reverse("payroll:payroll-record-manual-fields", args=[record.pk]), {"manual_bonus": "1"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert get_response_data(response)["reason"] == "RECORD_LOCKED"

    def test_list_filtered_by_month(self, api_client, user):
        payroll_ledger.compute_payroll_record(user, "2025-02")
        payroll_ledger.compute_payroll_record(user, "2025-03")

        response = api_client.get(reverse("payroll:payroll-record-list"), {"month": "2025-03"})

        data = get_response_data(response)
        assert data["count"] == 1
        assert data["results"][0]["month"] == "2025-03"

    def test_copy_previous_month(self, api_client, user):
        source = payroll_ledger.compute_payroll_record(user, "2025-02").record
        payroll_ledger.update_manual_fields(source, manual_bonus=Decimal("100"))

        response = api_client.post(
            reverse("payroll:payroll-record-copy-previous-month"), {"month": "2025-03"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert data["source_month"] == "2025-02"
        assert len(data["copied"]) == 1


@pytest.mark.django_db
class TestBalanceTransactionAPI:
    def test_adjust(self, api_client, user):
        response = api_client.post(
            reverse("payroll:balance-transaction-adjust"),
            {"user_id": user.pk, "amount": "300", "note": "Correction"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert get_response_data(response)["balance_after"] == "300.00"
        user.refresh_from_db()
        assert user.balance == Decimal("300.00")

    def test_adjust_zero_rejected(self, api_client, user):
        response = api_client.post(
            reverse("payroll:balance-transaction-adjust"), {"user_id": user.pk, "amount": "0"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestManualMetricValueAPI:
    def test_create(self, api_client, user, month):
        response = api_client.post(
            reverse("payroll:manual-metric-list"),
            {"user": user.pk, "month": month, "metric_source": MetricSource.CPL_EFFICIENCY, "value": "42.5"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert ManualMetricValue.objects.get(user=user).value == Decimal("42.50")

    def test_automatic_source_rejected(self, api_client, user, month):
        response = api_client.post(
            reverse("payroll:manual-metric-list"),
            {"user": user.pk, "month": month, "metric_source": MetricSource.SALES_REVENUE, "value": "1"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
