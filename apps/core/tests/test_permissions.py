"""Tests for role based permissions and permission collection."""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.core.models import Permission, Role, User


@pytest.fixture
def employee(db):
    return User.objects.create_user(username="employee", email="employee@example.com", password="testpass123")


@pytest.mark.django_db
class TestCollectPermissions:
    def test_collects_custom_actions(self):
        out = StringIO()

        call_command("collect_permissions", stdout=out)

        codes = set(Permission.objects.values_list("code", flat=True))
        assert {"payroll_record.pay", "payroll_record.freeze", "referral_payout.request_payout"} <= codes
        assert "Successfully collected" in out.getvalue()

    def test_idempotent(self):
        call_command("collect_permissions", stdout=StringIO())
        count = Permission.objects.count()

        call_command("collect_permissions", stdout=StringIO())

        assert Permission.objects.count() == count


@pytest.mark.django_db
class TestRoleBasedPermission:
    @pytest.mark.rbp
    def test_anonymous_rejected(self, api_client):
        response = api_client.get(reverse("payroll:payroll-record-list"))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        content = json.loads(response.content)
        assert content["success"] is False

    def test_user_without_role_rejected(self, employee):
        client = APIClient()
        client.force_authenticate(user=employee)

        response = client.get(reverse("payroll:payroll-record-list"))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_role_grants_action(self, employee):
        # Arrange
        permission = Permission.objects.create(code="payroll_record.list", name="List payroll records")
        role = Role.objects.create(code="accountant", name="Accountant")
        role.permissions.add(permission)
        employee.role = role
        employee.save()
        client = APIClient()
        client.force_authenticate(user=employee)

        # Act
        list_response = client.get(reverse("payroll:payroll-record-list"))
        compute_response = client.post(reverse("payroll:payroll-record-compute"), {}, format="json")

        # Assert
        assert list_response.status_code == status.HTTP_200_OK
        assert compute_response.status_code == status.HTTP_403_FORBIDDEN
