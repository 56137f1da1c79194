"""Shared pytest fixtures for affiliate tests."""

import random
import string
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from apps.affiliate.models import Organization, OrganizationPayment
from apps.affiliate.services import commission_ledger, promo_codes

User = get_user_model()


def random_code(prefix: str = "", length: int = 6):
    """Generate a random code."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=length))
    return f"{prefix}{suffix}"


@pytest.fixture
def make_organization(db):
    """Factory creating an organization with its own owner."""

    def _make_organization(name=None, balance=Decimal("0"), owner=None):
        if owner is None:
            username = random_code("owner_")
            owner = User.objects.create_user(username=username, email=f"{username}@example.com", password="pass")
        return Organization.objects.create(name=name or random_code("Org "), owner=owner, balance=balance)

    return _make_organization


@pytest.fixture
def referrer_organization(make_organization):
    return make_organization(name="Referrer Agency")


@pytest.fixture
def referrer(referrer_organization):
    """Owner of the referring organization."""
    return referrer_organization.owner


@pytest.fixture
def promo_code(referrer_organization, referrer):
    return promo_codes.create_promo_code(referrer_organization, referrer, "SPRING 2025")


@pytest.fixture
def make_referred(make_organization, promo_code):
    """Factory registering a new organization under ``promo_code``."""

    def _make_referred(balance=Decimal("0"), code=None):
        organization = make_organization(balance=balance)
        commission_ledger.register_referral(code or promo_code.code, organization)
        return organization

    return _make_referred


@pytest.fixture
def make_active_clients(make_referred):
    """Register ``count`` referred organizations that have paid and hold a positive balance."""

    def _make_active_clients(count):
        organizations = []
        for _ in range(count):
            organization = make_referred(balance=Decimal("100"))
            OrganizationPayment.objects.create(organization=organization, amount=Decimal("100"))
            organizations.append(organization)
        return organizations

    return _make_active_clients
