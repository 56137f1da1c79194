"""Tests for affiliate API endpoints and promo code service."""

import json
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.affiliate.models import PromoCode, ReferralTransaction, normalize_promo_code
from apps.affiliate.services import commission_ledger, promo_codes
from apps.affiliate.tasks import mature_referral_transactions


def get_response_data(response):
    content = json.loads(response.content.decode())
    if "data" in content:
        return content["data"]
    return content


class TestNormalizePromoCode:
    @pytest.mark.parametrize(
        "raw, expected",
        [("Spring2025", "spring2025"), ("  SPRING 2025 ", "spring2025"), ("a\tb\nc", "abc"), ("", "")],
    )
    def test_normalize(self, raw, expected):
        assert normalize_promo_code(raw) == expected


@pytest.mark.django_db
class TestPromoCodeService:
    def test_duplicate_code(self, referrer_organization, referrer, promo_code):
        with pytest.raises(ValidationError) as exc_info:
            promo_codes.create_promo_code(referrer_organization, referrer, "spring2025")

        assert "code" in exc_info.value.message_dict

    def test_empty_code(self, referrer_organization, referrer):
        with pytest.raises(ValidationError):
            promo_codes.create_promo_code(referrer_organization, referrer, "   ")

    def test_validate(self, promo_code):
        assert promo_codes.validate_promo_code("SPRING2025") == promo_code
        assert promo_codes.validate_promo_code("unknown") is None


@pytest.fixture
def referrer_client(referrer):
    client = APIClient()
    client.force_authenticate(user=referrer)
    return client


@pytest.mark.django_db
class TestAffiliateAPI:
    """Affiliate endpoints used by a referrer, authenticated as a superuser."""

    def test_create_promo_code(self, api_client, referrer_organization):
        response = api_client.post(
            reverse("affiliate:promo-code-list"),
            {"code": "Summer Deal", "organization_id": referrer_organization.pk},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert get_response_data(response)["code"] == "summerdeal"

    def test_create_duplicate_promo_code(self, api_client, referrer_organization, promo_code):
        response = api_client.post(
            reverse("affiliate:promo-code-list"),
            {"code": "spring 2025", "organization_id": referrer_organization.pk},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert json.loads(response.content)["success"] is False

    def test_delete_promo_code(self, api_client, promo_code):
        response = api_client.delete(reverse("affiliate:promo-code-detail", args=[promo_code.pk]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PromoCode.objects.filter(pk=promo_code.pk).exists()

    def test_register_referral(self, api_client, make_organization, promo_code):
        organization = make_organization()

        response = api_client.post(
            reverse("affiliate:referral-register"),
            {"promo_code": "SPRING2025", "referred_organization_id": organization.pk},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert [item["level"] for item in get_response_data(response)] == [1]

    def test_register_unknown_code(self, api_client, make_organization):
        response = api_client.post(
            reverse("affiliate:referral-register"),
            {"promo_code": "missing", "referred_organization_id": make_organization().pk},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_record_payment(self, api_client, make_referred):
        organization = make_referred()

        response = api_client.post(
            reverse("affiliate:transaction-record-payment"),
            {"referred_organization_id": organization.pk, "amount": "2000"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = get_response_data(response)
        assert data[0]["commission_amount"] == "1000.00"
        assert data[0]["status"] == ReferralTransaction.Status.PENDING

    def test_record_payment_rejects_zero(self, api_client, make_referred):
        response = api_client.post(
            reverse("affiliate:transaction-record-payment"),
            {"referred_organization_id": make_referred().pk, "amount": "0"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestReferrerAPI:
    """Endpoints scoped to the authenticated referrer."""

    @pytest.fixture(autouse=True)
    def grant_permissions(self, monkeypatch):
        monkeypatch.setattr("apps.core.models.User.has_permission", lambda self, code: True)

    def test_stats(self, referrer_client, make_referred):
        commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))

        response = referrer_client.get(reverse("affiliate:stats-list"))

        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert data["pending"] == "1000.00"
        assert data["ready_to_pay"] == "0.00"
        assert data["total_referred"] == 1

    def test_transactions_scoped_to_referrer(self, referrer_client, make_referred, make_organization):
        commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        stranger = make_organization()
        commission_ledger.record_referral_payment(make_organization(), Decimal("500"), referrer_chain=[stranger.pk])

        response = referrer_client.get(reverse("affiliate:transaction-list"))

        data = get_response_data(response)
        assert data["count"] == 1
        assert data["results"][0]["commission_amount"] == "1000.00"

    def test_payout_below_threshold(self, referrer_client, make_referred):
        commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        ReferralTransaction.objects.update(status=ReferralTransaction.Status.READY)

        response = referrer_client.post(reverse("affiliate:payout-request"), {}, format="json")

        assert response.status_code == status.HTTP_200_OK
        data = get_response_data(response)
        assert data["applied"] is False
        assert data["reason"] == "BELOW_PAYOUT_THRESHOLD"
        assert data["payout"] is None

    def test_payout(self, referrer_client, make_referred):
        for _ in range(5):
            commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        ReferralTransaction.objects.update(status=ReferralTransaction.Status.READY)

        response = referrer_client.post(
            reverse("affiliate:payout-request"), {"bank_details": {"iban": "DE00"}}, format="json"
        )

        data = get_response_data(response)
        assert data["applied"] is True
        assert data["amount"] == "5000.00"
        assert data["payout"]["status"] == "PAID"


@pytest.mark.django_db
class TestMatureReferralTransactionsTask:
    def test_nothing_to_mature(self, make_referred):
        commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))

        assert mature_referral_transactions() == "Matured 0 referral transactions"
