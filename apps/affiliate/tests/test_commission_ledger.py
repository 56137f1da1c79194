"""Tests for the referral commission ledger."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.affiliate.constants import DEFAULT_AFFILIATE_CONFIG, PayoutConflictReason
from apps.affiliate.models import (
    AffiliateConfig,
    Organization,
    OrganizationPayment,
    PromoCode,
    ReferralPayout,
    ReferralRegistration,
    ReferralTransaction,
)
from apps.affiliate.services import commission_ledger, promo_codes
from apps.affiliate.services.commission_ledger import count_active_clients, tier_percent_for


@pytest.mark.django_db
class TestTierPercent:
    @pytest.mark.parametrize(
        "active_clients, expected",
        [(0, "25"), (5, "25"), (6, "30"), (10, "30"), (20, "35"), (40, "40"), (80, "45"), (81, "50"), (500, "50")],
    )
    def test_default_tiers(self, active_clients, expected):
        affiliate_settings = commission_ledger.get_affiliate_settings()

        assert tier_percent_for(active_clients, affiliate_settings.tiers) == Decimal(expected)

    def test_active_config_overrides_defaults(self):
        AffiliateConfig.objects.create(config={"first_payment_percent": 40, "min_payout": 100})

        affiliate_settings = commission_ledger.get_affiliate_settings()

        assert affiliate_settings.first_payment_percent == Decimal("40")
        assert affiliate_settings.min_payout == Decimal("100")
        assert affiliate_settings.maturation_days == 14

    def test_unsorted_tiers_are_ordered(self):
        AffiliateConfig.objects.create(
            config={"tiers": [{"max_clients": None, "percent": 50}, {"max_clients": 5, "percent": 20}]}
        )

        affiliate_settings = commission_ledger.get_affiliate_settings()

        assert [tier["max_clients"] for tier in affiliate_settings.tiers] == [5, None]
        assert affiliate_settings.tier_percent(2) == Decimal("20")
        assert affiliate_settings.tier_percent(6) == Decimal("50")

    def test_invalid_config_falls_back_to_defaults(self):
        AffiliateConfig.objects.create(config={"tiers": [], "min_payout": 100})

        affiliate_settings = commission_ledger.get_affiliate_settings()

        assert affiliate_settings.tier_percent(7) == Decimal("30")
        assert affiliate_settings.min_payout == Decimal("5000")


@pytest.mark.django_db
class TestAffiliateConfigValidation:
    @pytest.mark.parametrize(
        "config",
        [
            {"tiers": []},
            {"tiers": [{"max_clients": None, "percent": 30}, {"max_clients": None, "percent": 40}]},
            {"tiers": [{"max_clients": 5, "percent": 25}, {"max_clients": 5, "percent": 30}]},
            {"tiers": [{"max_clients": 5, "percent": 150}]},
            {"tiers": [{"max_clients": -1, "percent": 25}]},
            {"first_payment_percent": -5},
            {"level_percents": {"4": 2}},
            "not a mapping",
        ],
    )
    def test_clean_rejects_invalid_config(self, config):
        with pytest.raises(ValidationError) as exc_info:
            AffiliateConfig(config=config).full_clean()

        assert "config" in exc_info.value.message_dict

    def test_clean_accepts_defaults(self):
        AffiliateConfig(config=DEFAULT_AFFILIATE_CONFIG).full_clean()

    def test_payment_with_stored_invalid_tiers(self, make_active_clients):
        # Arrange
        clients = make_active_clients(2)
        AffiliateConfig.objects.create(config={"tiers": []})

        # Act
        transactions = commission_ledger.record_referral_payment(clients[0], Decimal("1000"))

        # Assert
        assert transactions[0].commission_percent == Decimal("25")
        assert transactions[0].commission_amount == Decimal("250.00")

    def test_payment_with_unsorted_tiers(self, make_active_clients):
        clients = make_active_clients(2)
        AffiliateConfig.objects.create(
            config={"tiers": [{"max_clients": None, "percent": 50}, {"max_clients": 5, "percent": 20}]}
        )

        transactions = commission_ledger.record_referral_payment(clients[0], Decimal("1000"))

        assert transactions[0].commission_percent == Decimal("20")


@pytest.mark.django_db
class TestRegisterReferral:
    def test_level_one_registration(self, make_referred, referrer, promo_code):
        # Act
        organization = make_referred()

        # Assert
        registration = ReferralRegistration.objects.get(referred_organization=organization)
        assert registration.level == 1
        assert registration.referrer_user == referrer
        assert registration.is_active is False
        promo_code.refresh_from_db()
        organization.refresh_from_db()
        assert promo_code.registrations_count == 1
        assert organization.referred_by_promo_code == promo_code

    def test_promo_code_is_normalized(self, make_organization, promo_code):
        organization = make_organization()

        registrations = commission_ledger.register_referral("  Spring 2025 ", organization)

        assert registrations[0].promo_code == promo_code

    def test_unknown_code(self, make_organization):
        with pytest.raises(ValidationError) as exc_info:
            commission_ledger.register_referral("nope", make_organization())

        assert "promo_code" in exc_info.value.message_dict

    def test_inactive_code(self, make_organization, promo_code):
        PromoCode.objects.filter(pk=promo_code.pk).update(is_active=False)

        with pytest.raises(ValidationError):
            commission_ledger.register_referral(promo_code.code, make_organization())

    def test_own_code(self, referrer_organization, promo_code):
        with pytest.raises(ValidationError):
            commission_ledger.register_referral(promo_code.code, referrer_organization)

    def test_already_referred(self, make_referred, promo_code):
        organization = make_referred()

        with pytest.raises(ValidationError):
            commission_ledger.register_referral(promo_code.code, organization)

    def test_three_level_chain(self, make_organization, referrer_organization, promo_code):
        """A refers B, B refers C, C refers D: D gets registrations at levels 1, 2 and 3."""
        # Arrange
        org_b = make_organization(name="B")
        commission_ledger.register_referral(promo_code.code, org_b)
        code_b = promo_codes.create_promo_code(org_b, org_b.owner, "b-code")
        org_c = make_organization(name="C")
        commission_ledger.register_referral(code_b.code, org_c)
        code_c = promo_codes.create_promo_code(org_c, org_c.owner, "c-code")
        org_d = make_organization(name="D")

        # Act
        registrations = commission_ledger.register_referral(code_c.code, org_d)

        # Assert
        assert [(item.level, item.referrer_organization_id) for item in registrations] == [
            (1, org_c.pk),
            (2, org_b.pk),
            (3, referrer_organization.pk),
        ]


@pytest.mark.django_db
class TestActiveClients:
    def test_counts_paying_clients_with_balance(self, referrer, make_referred, make_active_clients):
        # Arrange
        make_active_clients(3)
        make_referred(balance=Decimal("100"))  # never paid
        unfunded = make_referred(balance=Decimal("0"))
        OrganizationPayment.objects.create(organization=unfunded, amount=Decimal("10"))

        # Act / Assert
        assert count_active_clients(referrer) == 3


@pytest.mark.django_db
class TestRecordReferralPayment:
    def test_first_payment_earns_flat_percent(self, referrer, make_referred, make_active_clients, promo_code):
        """First-ever payment of 2,000 earns 1,000 regardless of the referrer's tier."""
        # Arrange
        make_active_clients(30)
        organization = make_referred()

        # Act
        transactions = commission_ledger.record_referral_payment(organization, Decimal("2000"))

        # Assert
        assert len(transactions) == 1
        commission = transactions[0]
        assert commission.level == 1
        assert commission.referrer_user == referrer
        assert commission.commission_percent == Decimal("50")
        assert commission.commission_amount == Decimal("1000.00")
        assert commission.status == ReferralTransaction.Status.PENDING
        assert ReferralRegistration.objects.get(referred_organization=organization, level=1).is_active is True
        promo_code.refresh_from_db()
        assert promo_code.payments_count == 1

    def test_subsequent_payment_uses_tier(self, make_active_clients):
        """Seven active clients put the referrer in the 30% tier: 10,000 earns 3,000."""
        # Arrange
        clients = make_active_clients(7)

        # Act
        transactions = commission_ledger.record_referral_payment(clients[0], Decimal("10000"))

        # Assert
        assert transactions[0].commission_percent == Decimal("30")
        assert transactions[0].commission_amount == Decimal("3000.00")

    def test_explicit_first_payment_flag(self, make_active_clients):
        clients = make_active_clients(1)

        transactions = commission_ledger.record_referral_payment(clients[0], Decimal("400"), is_first_payment=True)

        assert transactions[0].commission_amount == Decimal("200.00")

    def test_upper_levels_earn_fixed_percents(self, make_organization, referrer_organization, promo_code):
        # Arrange
        org_b = make_organization(name="B")
        commission_ledger.register_referral(promo_code.code, org_b)
        code_b = promo_codes.create_promo_code(org_b, org_b.owner, "b-code")
        org_c = make_organization(name="C")
        commission_ledger.register_referral(code_b.code, org_c)
        code_c = promo_codes.create_promo_code(org_c, org_c.owner, "c-code")
        org_d = make_organization(name="D")
        commission_ledger.register_referral(code_c.code, org_d)

        # Act
        transactions = commission_ledger.record_referral_payment(org_d, Decimal("1000"))

        # Assert
        assert [(item.level, item.commission_amount) for item in transactions] == [
            (1, Decimal("500.00")),
            (2, Decimal("100.00")),
            (3, Decimal("50.00")),
        ]
        assert transactions[2].referrer_user == referrer_organization.owner

    def test_explicit_referrer_chain(self, make_organization):
        referred = make_organization()
        level_one = make_organization()
        level_two = make_organization()

        transactions = commission_ledger.record_referral_payment(
            referred, Decimal("1000"), referrer_chain=[level_one.pk, level_two.pk]
        )

        assert [(item.level, item.referrer_user_id) for item in transactions] == [
            (1, level_one.owner_id),
            (2, level_two.owner_id),
        ]

    def test_unreferred_organization_earns_nothing(self, make_organization):
        organization = make_organization()

        transactions = commission_ledger.record_referral_payment(organization, Decimal("1000"))

        assert transactions == []
        assert OrganizationPayment.objects.filter(organization=organization).count() == 1

    def test_payment_outside_window(self, make_referred):
        organization = make_referred()
        ReferralRegistration.objects.filter(referred_organization=organization).update(
            created_at=timezone.now() - timedelta(days=400)
        )

        transactions = commission_ledger.record_referral_payment(organization, Decimal("1000"))

        assert transactions == []

    def test_non_positive_amount(self, make_referred):
        with pytest.raises(ValidationError):
            commission_ledger.record_referral_payment(make_referred(), Decimal("0"))

    def test_locks_organization_before_first_payment_check(self, make_referred):
        # Arrange
        organization = make_referred()
        calls = []
        real_select_for_update = Organization.objects.select_for_update

        def tracking_select_for_update(*args, **kwargs):
            calls.append(OrganizationPayment.objects.filter(organization=organization).count())
            return real_select_for_update(*args, **kwargs)

        # Act
        with patch.object(Organization.objects, "select_for_update", side_effect=tracking_select_for_update):
            commission_ledger.record_referral_payment(organization, Decimal("2000"))

        # Assert
        assert calls == [0]

    def test_only_one_payment_counts_as_first(self, make_referred, promo_code):
        organization = make_referred()

        first = commission_ledger.record_referral_payment(organization, Decimal("2000"))
        second = commission_ledger.record_referral_payment(organization, Decimal("2000"))

        assert first[0].commission_percent == Decimal("50")
        assert second[0].commission_percent == Decimal("25")
        promo_code.refresh_from_db()
        assert promo_code.payments_count == 1


@pytest.mark.django_db
class TestMaturationAndPayout:
    def test_maturation(self, make_referred):
        organization = make_referred()
        commission_ledger.record_referral_payment(organization, Decimal("2000"))

        assert commission_ledger.mature_pending_transactions() == 0
        matured = commission_ledger.mature_pending_transactions(now=timezone.now() + timedelta(days=15))

        assert matured == 1
        assert ReferralTransaction.objects.get().status == ReferralTransaction.Status.READY

    def test_below_threshold(self, referrer, make_referred):
        # Arrange
        commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        ReferralTransaction.objects.update(status=ReferralTransaction.Status.READY)

        # Act
        result = commission_ledger.request_payout(referrer)

        # Assert
        assert result.applied is False
        assert result.reason == PayoutConflictReason.BELOW_PAYOUT_THRESHOLD
        assert result.amount == Decimal("1000.00")
        assert ReferralPayout.objects.count() == 0
        assert ReferralTransaction.objects.get().status == ReferralTransaction.Status.READY

    def test_payout_pays_all_ready(self, referrer, make_referred):
        # Arrange
        for _ in range(6):
            commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        ReferralTransaction.objects.update(status=ReferralTransaction.Status.READY)
        pending = commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))[0]

        # Act
        result = commission_ledger.request_payout(referrer, bank_details={"iban": "DE00"})

        # Assert
        assert result.applied is True
        assert result.amount == Decimal("6000.00")
        assert result.payout.bank_details == {"iban": "DE00"}
        paid = ReferralTransaction.objects.filter(status=ReferralTransaction.Status.PAID, payout=result.payout)
        assert paid.count() == 6
        pending.refresh_from_db()
        assert pending.status == ReferralTransaction.Status.PENDING

    def test_second_payout_has_nothing_left(self, referrer, make_referred):
        for _ in range(5):
            commission_ledger.record_referral_payment(make_referred(), Decimal("2000"))
        ReferralTransaction.objects.update(status=ReferralTransaction.Status.READY)
        commission_ledger.request_payout(referrer)

        result = commission_ledger.request_payout(referrer)

        assert result.applied is False
        assert result.amount == Decimal("0.00")


@pytest.mark.django_db
class TestAffiliateStats:
    def test_stats(self, referrer, make_referred, make_active_clients):
        # Arrange
        make_active_clients(2)
        organization = make_referred()
        commission_ledger.record_referral_payment(organization, Decimal("2000"))
        ready = commission_ledger.record_referral_payment(make_referred(), Decimal("400"))[0]
        ReferralTransaction.objects.filter(pk=ready.pk).update(status=ReferralTransaction.Status.READY)

        # Act
        stats = commission_ledger.get_affiliate_stats(referrer)

        # Assert
        assert stats["pending"] == Decimal("1000.00")
        assert stats["ready_to_pay"] == Decimal("200.00")
        assert stats["total_paid"] == Decimal("0.00")
        assert stats["total_referred"] == 4
        assert stats["active_clients"] == 2
        assert stats["current_tier_percent"] == Decimal("25")
