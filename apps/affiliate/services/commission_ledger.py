"""Multi-level referral commission ledger.

A referred organization's payment produces up to three commission
transactions, one per referrer level. Level 1 earns a flat percent on the
first-ever payment and a tier percent (by active client count) afterwards.
Levels 2 and 3 earn fixed percents. Transactions mature from pending to
ready after the maturation window and are paid out together once the ready
balance reaches the minimum payout.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Exists, F, OuterRef, Sum
from django.utils import timezone

from libs.decimals import DECIMAL_ZERO, percent_of, quantize_decimal, to_decimal
from libs.drf.custom_exception_handler import ServiceUnavailableError

from ..constants import DEFAULT_AFFILIATE_CONFIG, MAX_REFERRAL_LEVEL, PayoutConflictReason
from ..models import (
    AffiliateConfig,
    Organization,
    OrganizationPayment,
    PromoCode,
    ReferralPayout,
    ReferralRegistration,
    ReferralTransaction,
    normalize_promo_code,
)

logger = logging.getLogger(__name__)


class CommissionLedgerUnavailableError(ServiceUnavailableError):
    """Storage failed in the middle of a commission ledger mutation; nothing was written."""

    pass


@dataclass(frozen=True)
class AffiliateSettings:
    tiers: tuple
    first_payment_percent: Decimal
    level_percents: dict
    maturation_days: int
    min_payout: Decimal
    commission_window_days: int

    def tier_percent(self, active_clients: int) -> Decimal:
        return tier_percent_for(active_clients, self.tiers)


@dataclass
class PayoutResult:
    applied: bool
    amount: Decimal
    payout: Optional[ReferralPayout] = None
    reason: Optional[str] = None
    transactions: list = field(default_factory=list)


@dataclass(frozen=True)
class ReferrerLink:
    level: int
    user_id: int
    organization_id: int
    registered_at: Optional[object] = None


def _error_messages(detail):
    if isinstance(detail, dict):
        for key, value in detail.items():
            for message in _error_messages(value):
                yield f"{key}: {message}"
    elif isinstance(detail, list):
        for index, value in enumerate(detail):
            if isinstance(value, dict):
                for message in _error_messages(value):
                    yield f"#{index + 1} {message}"
            else:
                yield from _error_messages(value)
    else:
        yield str(detail)


def validate_affiliate_config(config) -> dict:
    """Validate an affiliate configuration document.

    Returns:
        dict: Parsed values for the keys present, tiers ordered by ``max_clients``

    Raises:
        ValidationError: With a key -> messages mapping
    """
    from ..api.serializers.config_schemas import AffiliateConfigSchemaSerializer

    if not isinstance(config, dict):
        raise ValidationError({"config": ["Configuration must be a JSON object"]})

    serializer = AffiliateConfigSchemaSerializer(data=config)
    if not serializer.is_valid():
        raise ValidationError({key: list(_error_messages(detail)) for key, detail in serializer.errors.items()})
    return dict(serializer.validated_data)


def get_affiliate_settings() -> AffiliateSettings:
    """Active configuration merged over the defaults.

    An active configuration that fails validation is ignored as a whole.
    """
    values = dict(DEFAULT_AFFILIATE_CONFIG)
    values["maturation_days"] = getattr(settings, "AFFILIATE_MATURATION_DAYS", values["maturation_days"])
    values["min_payout"] = getattr(settings, "AFFILIATE_MIN_PAYOUT", values["min_payout"])

    active = AffiliateConfig.get_active()
    if active:
        try:
            values.update(validate_affiliate_config(active.config))
        except ValidationError as exc:
            logger.error("Ignoring invalid affiliate configuration v%s: %s", active.version, exc.message_dict)

    return AffiliateSettings(
        tiers=tuple(values["tiers"]),
        first_payment_percent=to_decimal(values["first_payment_percent"]),
        level_percents={int(level): to_decimal(percent) for level, percent in values["level_percents"].items()},
        maturation_days=int(values["maturation_days"]),
        min_payout=to_decimal(values["min_payout"]),
        commission_window_days=int(values["commission_window_days"]),
    )


def tier_percent_for(active_clients: int, tiers) -> Decimal:
    """Level-1 percent for ``active_clients``; tiers are ascending by ``max_clients``."""
    if not tiers:
        return DECIMAL_ZERO
    for tier in tiers:
        max_clients = tier.get("max_clients")
        if max_clients is None or active_clients <= int(max_clients):
            return to_decimal(tier["percent"])
    return to_decimal(tiers[-1]["percent"])


def count_active_clients(referrer_user) -> int:
    """Referred organizations (level 1) with a positive balance and at least one payment."""
    has_payment = OrganizationPayment.objects.filter(organization_id=OuterRef("referred_organization_id"))
    return (
        ReferralRegistration.objects.filter(
            referrer_user=referrer_user,
            level=1,
            referred_organization__balance__gt=0,
        )
        .filter(Exists(has_payment))
        .values("referred_organization_id")
        .distinct()
        .count()
    )


def register_referral(promo_code: str, referred_organization: Organization) -> list:
    """Register ``referred_organization`` under the owner of ``promo_code``.

    Returns:
        list: Created registrations ordered by level

    Raises:
        ValidationError: Unknown or inactive code, own code, or organization already referred
    """
    code = normalize_promo_code(promo_code)
    promo = PromoCode.objects.filter(code=code, is_active=True).select_related("organization").first()
    if promo is None:
        raise ValidationError({"promo_code": ["Promo code is invalid or inactive"]})
    if promo.organization_id == referred_organization.pk:
        raise ValidationError({"promo_code": ["An organization cannot use its own promo code"]})
    if ReferralRegistration.objects.filter(referred_organization=referred_organization).exists():
        raise ValidationError({"referred_organization": ["Organization is already referred"]})

    with transaction.atomic():
        registrations = [
            ReferralRegistration.objects.create(
                referrer_user_id=promo.user_id,
                referrer_organization_id=promo.organization_id,
                referred_organization=referred_organization,
                promo_code=promo,
                level=1,
            )
        ]

        upstream_organization_id = promo.organization_id
        for level in range(2, MAX_REFERRAL_LEVEL + 1):
            upstream = ReferralRegistration.objects.filter(
                referred_organization_id=upstream_organization_id, level=1
            ).first()
            if upstream is None:
                break
            registrations.append(
                ReferralRegistration.objects.create(
                    referrer_user_id=upstream.referrer_user_id,
                    referrer_organization_id=upstream.referrer_organization_id,
                    referred_organization=referred_organization,
                    promo_code=promo,
                    level=level,
                )
            )
            upstream_organization_id = upstream.referrer_organization_id

        PromoCode.objects.filter(pk=promo.pk).update(registrations_count=F("registrations_count") + 1)
        Organization.objects.filter(pk=referred_organization.pk).update(referred_by_promo_code=promo)
        referred_organization.referred_by_promo_code = promo

    logger.info(
        "Registered organization %s via promo code %s (%s levels)", referred_organization.pk, code, len(registrations)
    )
    return registrations


def resolve_referrer_chain(referred_organization, referrer_chain=None) -> list:
    """Referrer links for levels 1..3.

    An explicit chain is a list of referrer organizations (or their ids)
    ordered from level 1 upwards; otherwise the stored registrations are used.
    """
    if referrer_chain:
        organization_ids = [getattr(item, "pk", item) for item in referrer_chain[:MAX_REFERRAL_LEVEL]]
        organizations = Organization.objects.in_bulk(organization_ids)
        registrations = {
            registration.level: registration
            for registration in ReferralRegistration.objects.filter(referred_organization=referred_organization)
        }
        links = []
        for level, organization_id in enumerate(organization_ids, start=1):
            organization = organizations.get(organization_id)
            if organization is None:
                raise ValidationError({"referrer_chain": [f"Organization {organization_id} does not exist"]})
            registration = registrations.get(level)
            links.append(
                ReferrerLink(
                    level=level,
                    user_id=organization.owner_id,
                    organization_id=organization.pk,
                    registered_at=registration.created_at if registration else referred_organization.created_at,
                )
            )
        return links

    return [
        ReferrerLink(
            level=registration.level,
            user_id=registration.referrer_user_id,
            organization_id=registration.referrer_organization_id,
            registered_at=registration.created_at,
        )
        for registration in ReferralRegistration.objects.filter(referred_organization=referred_organization).order_by(
            "level"
        )
    ]


def record_referral_payment(
    referred_organization, amount, paid_at=None, referrer_chain=None, is_first_payment=None
) -> list:
    """Record a payment of ``referred_organization`` and the commissions it earns.

    Returns:
        list: Created ReferralTransaction rows ordered by level
    """
    amount = quantize_decimal(to_decimal(amount))
    if amount <= 0:
        raise ValidationError({"amount": ["Payment amount must be positive"]})

    affiliate_settings = get_affiliate_settings()
    paid_at = paid_at or timezone.now()

    with transaction.atomic():
        # Payments of one organization are serialized so only one of them is the first.
        Organization.objects.select_for_update().get(pk=referred_organization.pk)
        if is_first_payment is None:
            is_first_payment = not OrganizationPayment.objects.filter(organization=referred_organization).exists()
        payment = OrganizationPayment.objects.create(organization=referred_organization, amount=amount, paid_at=paid_at)

        links = resolve_referrer_chain(referred_organization, referrer_chain)
        window = timedelta(days=affiliate_settings.commission_window_days)
        now = timezone.now()
        ready_at = now + timedelta(days=affiliate_settings.maturation_days)

        transactions = []
        for link in links:
            if link.registered_at and paid_at > link.registered_at + window:
                logger.info(
                    "Payment %s is outside the commission window of level %s referrer %s",
                    payment.pk,
                    link.level,
                    link.organization_id,
                )
                continue

            if link.level == 1:
                if is_first_payment:
                    percent = affiliate_settings.first_payment_percent
                else:
                    percent = affiliate_settings.tier_percent(count_active_clients(link.user_id))
            else:
                percent = affiliate_settings.level_percents.get(link.level, DECIMAL_ZERO)

            transactions.append(
                ReferralTransaction.objects.create(
                    referrer_user_id=link.user_id,
                    referrer_organization_id=link.organization_id,
                    referred_organization=referred_organization,
                    payment=payment,
                    level=link.level,
                    payment_amount=amount,
                    commission_percent=percent,
                    commission_amount=percent_of(amount, percent),
                    status=ReferralTransaction.Status.PENDING,
                    ready_at=ready_at,
                )
            )

        if is_first_payment and links:
            ReferralRegistration.objects.filter(referred_organization=referred_organization, level=1).update(
                is_active=True
            )
            if referred_organization.referred_by_promo_code_id:
                PromoCode.objects.filter(pk=referred_organization.referred_by_promo_code_id).update(
                    payments_count=F("payments_count") + 1
                )

    logger.info(
        "Recorded payment %s of organization %s: %s commission transactions",
        payment.pk,
        referred_organization.pk,
        len(transactions),
    )
    return transactions


def mature_pending_transactions(user=None, now=None) -> int:
    """Move pending transactions whose ``ready_at`` has passed to ready."""
    now = now or timezone.now()
    queryset = ReferralTransaction.objects.filter(status=ReferralTransaction.Status.PENDING, ready_at__lte=now)
    if user is not None:
        queryset = queryset.filter(referrer_user=user)
    matured = queryset.update(status=ReferralTransaction.Status.READY, updated_at=now)
    if matured:
        logger.info("Matured %s referral transactions", matured)
    return matured


def request_payout(user, bank_details=None) -> PayoutResult:
    """Pay out every ready transaction of ``user`` at once.

    Below the minimum payout nothing changes and the result carries
    ``BELOW_PAYOUT_THRESHOLD``.

    Raises:
        CommissionLedgerUnavailableError: If the database fails; nothing is paid
    """
    affiliate_settings = get_affiliate_settings()
    mature_pending_transactions(user=user)

    try:
        with transaction.atomic():
            ready = list(
                ReferralTransaction.objects.select_for_update()
                .filter(referrer_user=user, status=ReferralTransaction.Status.READY)
                .order_by("id")
            )
            total = quantize_decimal(sum((item.commission_amount for item in ready), DECIMAL_ZERO))
            if total < affiliate_settings.min_payout:
                logger.warning(
                    "Payout for user %s rejected: %s below %s", user.pk, total, affiliate_settings.min_payout
                )
                return PayoutResult(applied=False, amount=total, reason=PayoutConflictReason.BELOW_PAYOUT_THRESHOLD)

            now = timezone.now()
            payout = ReferralPayout.objects.create(
                user=user,
                amount=total,
                status=ReferralPayout.Status.PAID,
                bank_details=bank_details or {},
                requested_at=now,
                processed_at=now,
            )
            ReferralTransaction.objects.filter(pk__in=[item.pk for item in ready]).update(
                status=ReferralTransaction.Status.PAID, paid_at=now, payout=payout, updated_at=now
            )
    except DatabaseError as exc:
        logger.exception("Payout for user %s failed", user.pk)
        raise CommissionLedgerUnavailableError(f"Payout for user {user.pk} failed, retry later") from exc

    logger.info("Paid out %s to user %s (%s transactions)", total, user.pk, len(ready))
    return PayoutResult(applied=True, amount=total, payout=payout, transactions=[item.pk for item in ready])


def get_affiliate_stats(user) -> dict:
    """Commission totals by status plus referral counts for ``user``."""
    mature_pending_transactions(user=user)
    active_clients = count_active_clients(user)

    totals = {
        row["status"]: row["total"]
        for row in ReferralTransaction.objects.filter(referrer_user=user)
        .values("status")
        .annotate(total=Sum("commission_amount"))
    }
    return {
        "ready_to_pay": quantize_decimal(totals.get(ReferralTransaction.Status.READY)),
        "pending": quantize_decimal(totals.get(ReferralTransaction.Status.PENDING)),
        "total_paid": quantize_decimal(totals.get(ReferralTransaction.Status.PAID)),
        "total_referred": ReferralRegistration.objects.filter(referrer_user=user, level=1).count(),
        "active_clients": active_clients,
        "current_tier_percent": get_affiliate_settings().tier_percent(active_clients),
    }
