"""Payroll ledger: monthly payroll records and the balance credit on payment.

Records move DRAFT -> FROZEN -> PAID and never back. Commands that hit a
record in the wrong state do not raise: they return a ``LedgerResult`` with
``applied=False`` and a ``StateConflictReason`` code.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from libs.datetimes import parse_month, previous_month
from libs.decimals import DECIMAL_ZERO, quantize_decimal, to_decimal
from libs.drf.custom_exception_handler import ServiceUnavailableError

from ..constants import BalanceSource, CalculationPeriod, MetricSource, OwnerType, StateConflictReason
from ..models import BalanceTransaction, PayrollRecord
from . import metric_aggregator
from .conditions import evaluate
from .rewards import reward_for_evaluation
from .rule_store import active_scheme_for_user, rules_for_user

logger = logging.getLogger(__name__)

MANUAL_FIELDS = ("manual_bonus", "manual_penalty", "advance")
COMPUTED_FIELDS = ("fix_salary", "calculated_kpi", "net_amount", "task_payments", "bonus_details")


class LedgerUnavailableError(ServiceUnavailableError):
    """Storage failed in the middle of a ledger mutation; nothing was written."""

    pass


@dataclass
class LedgerResult:
    record: PayrollRecord
    applied: bool
    reason: Optional[str] = None


class PayrollCalculationService:
    """Compute the derived fields of a DRAFT payroll record."""

    def __init__(self, payroll_record: PayrollRecord):
        self.record = payroll_record
        self.user = payroll_record.user
        self.month = payroll_record.month

    def calculate(self) -> dict:
        """Return the new values of the computed fields without saving them."""
        fix_salary, task_payments = self._calculate_salary_scheme()
        bonus_details = self._calculate_bonus_rules()

        task_total = sum((Decimal(item["amount"]) for item in task_payments), DECIMAL_ZERO)
        bonus_total = sum((Decimal(item["reward_amount"]) for item in bonus_details), DECIMAL_ZERO)
        calculated_kpi = quantize_decimal(task_total + bonus_total)

        values = {
            "fix_salary": fix_salary,
            "calculated_kpi": calculated_kpi,
            "task_payments": task_payments,
            "bonus_details": bonus_details,
        }
        values["net_amount"] = quantize_decimal(
            fix_salary
            + calculated_kpi
            + quantize_decimal(self.record.manual_bonus)
            - quantize_decimal(self.record.manual_penalty)
            - quantize_decimal(self.record.advance)
        )
        return values

    def _calculate_salary_scheme(self):
        scheme = active_scheme_for_user(self.user)
        if scheme is None:
            logger.debug("No active salary scheme for user %s", self.user.pk)
            return DECIMAL_ZERO, []

        period = metric_aggregator.Period.for_month(self.month)
        counts = metric_aggregator.MetricAggregator(self.user.pk, OwnerType.USER, period).completed_tasks_by_type()

        task_payments = []
        for kpi_rule in scheme.kpi_rules or []:
            task_type = kpi_rule.get("task_type")
            rate = quantize_decimal(to_decimal(kpi_rule.get("value")))
            count = counts.get(task_type, 0)
            task_payments.append(
                {
                    "task_type": task_type,
                    "count": count,
                    "rate": str(rate),
                    "amount": str(quantize_decimal(rate * count)),
                }
            )
        return quantize_decimal(scheme.base_salary), task_payments

    def _calculate_bonus_rules(self) -> list:
        details = []
        for rule in rules_for_user(self.user):
            period = metric_aggregator.Period.for_rule(self.month, rule.calculation_period)

            if (
                rule.calculation_period == CalculationPeriod.PER_TRANSACTION
                and rule.metric_source == MetricSource.SALES_REVENUE
            ):
                aggregator = metric_aggregator.MetricAggregator(self.user.pk, OwnerType.USER, period)
                amounts = aggregator.sales_transaction_amounts()
                metric_value = sum(amounts, DECIMAL_ZERO)
                applied_count = 0
                reward_amount = DECIMAL_ZERO
                for amount in amounts:
                    evaluation = evaluate(rule, amount, amount)
                    if evaluation.applies:
                        applied_count += 1
                        reward_amount += reward_for_evaluation(rule, evaluation)
                applies = applied_count > 0
            else:
                sample = metric_aggregator.sample(
                    self.user.pk, OwnerType.USER, rule.metric_source, period, task_types=rule.task_types
                )
                metric_value = sample.value
                evaluation = evaluate(rule, sample.value, sample.base_value)
                applies = evaluation.applies
                reward_amount = reward_for_evaluation(rule, evaluation)

            details.append(
                {
                    "rule_id": rule.pk,
                    "rule_name": rule.name,
                    "owner_type": rule.owner_type,
                    "metric_source": rule.metric_source,
                    "metric_value": str(metric_value),
                    "applies": applies,
                    "reward_amount": str(quantize_decimal(reward_amount)),
                }
            )
        return details


def _validate_month(month: str):
    try:
        parse_month(month)
    except ValueError as exc:
        raise ValidationError({"month": [str(exc)]}) from exc


def _locked_record(record_id) -> PayrollRecord:
    return PayrollRecord.objects.select_for_update().select_related("user").get(pk=record_id)


def compute_payroll_record(user, month: str) -> LedgerResult:
    """Create or refresh the payroll record of ``user`` for ``month``.

    FROZEN and PAID records are returned unchanged with ``RECORD_LOCKED``.
    Recomputing a DRAFT whose inputs did not change does not write.
    """
    _validate_month(month)

    with transaction.atomic():
        record = PayrollRecord.objects.select_for_update().filter(user=user, month=month).first()
        if record is None:
            record, _ = PayrollRecord.objects.get_or_create(
                user=user, month=month, defaults={"balance_at_start": user.balance}
            )
            record = _locked_record(record.pk)

        if not record.is_draft:
            return LedgerResult(record=record, applied=False, reason=StateConflictReason.RECORD_LOCKED)

        values = PayrollCalculationService(record).calculate()
        changed = [name for name, value in values.items() if getattr(record, name) != value]
        if changed or record.calculated_at is None:
            for name, value in values.items():
                setattr(record, name, value)
            record.calculated_at = timezone.now()
            record.save()
            logger.info("Computed payroll record %s (%s, %s): %s", record.pk, user.pk, month, ", ".join(changed))

    return LedgerResult(record=record, applied=True)


def update_manual_fields(record: PayrollRecord, **values) -> LedgerResult:
    """Set ``manual_bonus``, ``manual_penalty`` and ``advance`` on a DRAFT record."""
    errors = {}
    cleaned = {}
    for name, value in values.items():
        if name not in MANUAL_FIELDS:
            errors[name] = ["Field is not editable"]
            continue
        if value is None:
            continue
        amount = quantize_decimal(to_decimal(value))
        if amount < 0:
            errors[name] = ["Value cannot be negative"]
        cleaned[name] = amount
    if errors:
        raise ValidationError(errors)

    with transaction.atomic():
        locked = _locked_record(record.pk)
        if not locked.is_draft:
            logger.warning("Rejected manual edit of %s payroll record %s", locked.status, locked.pk)
            return LedgerResult(record=locked, applied=False, reason=StateConflictReason.RECORD_LOCKED)

        for name, amount in cleaned.items():
            setattr(locked, name, amount)
        locked.net_amount = locked.compute_net_amount()
        locked.save()

    return LedgerResult(record=locked, applied=True)


def freeze_payroll_record(record: PayrollRecord, frozen_by=None) -> LedgerResult:
    with transaction.atomic():
        locked = _locked_record(record.pk)
        if locked.status == PayrollRecord.Status.FROZEN:
            return LedgerResult(record=locked, applied=False, reason=StateConflictReason.ALREADY_FROZEN)
        if locked.status == PayrollRecord.Status.PAID:
            return LedgerResult(record=locked, applied=False, reason=StateConflictReason.ALREADY_PAID)

        locked.status = PayrollRecord.Status.FROZEN
        locked.net_amount = locked.compute_net_amount()
        locked.frozen_at = timezone.now()
        locked.frozen_by = frozen_by
        locked.save()

    logger.info("Froze payroll record %s", locked.pk)
    return LedgerResult(record=locked, applied=True)


def pay_payroll_record(record: PayrollRecord, paid_by=None) -> LedgerResult:
    """Mark the record PAID and credit ``net_amount`` to the user's balance once.

    DRAFT records are frozen on the way. The status change is a conditional
    update, so only one of several concurrent calls credits the balance.

    Raises:
        LedgerUnavailableError: If the database fails; the whole payment is rolled back
    """
    User = get_user_model()
    try:
        with transaction.atomic():
            locked = _locked_record(record.pk)
            if locked.status == PayrollRecord.Status.PAID:
                logger.warning("Payroll record %s is already paid", locked.pk)
                return LedgerResult(record=locked, applied=False, reason=StateConflictReason.ALREADY_PAID)

            now = timezone.now()
            net_amount = locked.compute_net_amount()
            updates = {
                "status": PayrollRecord.Status.PAID,
                "net_amount": net_amount,
                "paid_at": now,
                "paid_by": paid_by,
                "updated_at": now,
            }
            if locked.frozen_at is None:
                updates["frozen_at"] = now
                updates["frozen_by"] = paid_by

            updated = PayrollRecord.objects.filter(
                pk=locked.pk, status__in=[PayrollRecord.Status.DRAFT, PayrollRecord.Status.FROZEN]
            ).update(**updates)
            if not updated:
                locked.refresh_from_db()
                return LedgerResult(record=locked, applied=False, reason=StateConflictReason.ALREADY_PAID)

            User.objects.select_for_update().filter(pk=locked.user_id).update(balance=F("balance") + net_amount)
            balance_after = User.objects.values_list("balance", flat=True).get(pk=locked.user_id)
            BalanceTransaction.objects.create(
                user_id=locked.user_id,
                amount=net_amount,
                source=BalanceSource.PAYROLL,
                payroll_record=locked,
                balance_after=balance_after,
                note=f"Payroll {locked.month}",
                created_by=paid_by,
            )
            locked.refresh_from_db()
    except DatabaseError as exc:
        logger.exception("Payment of payroll record %s failed", record.pk)
        raise LedgerUnavailableError(f"Payment of payroll record {record.pk} failed, retry later") from exc

    logger.info("Paid payroll record %s: %s credited to user %s", locked.pk, net_amount, locked.user_id)
    return LedgerResult(record=locked, applied=True)


def copy_previous_month(month: str) -> dict:
    """Copy manual fields of the previous month's records into ``month``.

    Missing target records are created in DRAFT. FROZEN and PAID targets are
    skipped; source records are only read.
    """
    _validate_month(month)
    source_month = previous_month(month)
    copied = []
    skipped = []

    sources = PayrollRecord.objects.filter(month=source_month).select_related("user")
    for source in sources:
        with transaction.atomic():
            target = PayrollRecord.objects.select_for_update().filter(user_id=source.user_id, month=month).first()
            if target is None:
                target = PayrollRecord.objects.create(
                    user=source.user, month=month, balance_at_start=source.user.balance
                )
            if not target.is_draft:
                skipped.append(target.pk)
                continue
            for name in MANUAL_FIELDS:
                setattr(target, name, getattr(source, name))
            target.net_amount = target.compute_net_amount()
            target.save()
            copied.append(target.pk)

    logger.info("Copied manual fields %s -> %s: %s copied, %s skipped", source_month, month, len(copied), len(skipped))
    return {"source_month": source_month, "month": month, "copied": copied, "skipped": skipped}


def list_payroll_records(user=None, month=None):
    queryset = PayrollRecord.objects.select_related("user")
    if user is not None:
        queryset = queryset.filter(user=user)
    if month:
        queryset = queryset.filter(month=month)
    return queryset


def adjust_balance(user, amount, note="", created_by=None) -> BalanceTransaction:
    """Apply a manual balance adjustment and record it.

    Raises:
        ValidationError: If the amount is zero
        LedgerUnavailableError: If the database fails
    """
    User = get_user_model()
    amount = quantize_decimal(to_decimal(amount))
    if amount == 0:
        raise ValidationError({"amount": ["Amount cannot be zero"]})

    try:
        with transaction.atomic():
            User.objects.select_for_update().filter(pk=user.pk).update(balance=F("balance") + amount)
            balance_after = User.objects.values_list("balance", flat=True).get(pk=user.pk)
            entry = BalanceTransaction.objects.create(
                user_id=user.pk,
                amount=amount,
                source=BalanceSource.MANUAL,
                balance_after=balance_after,
                note=note,
                created_by=created_by,
            )
    except DatabaseError as exc:
        logger.exception("Balance adjustment for user %s failed", user.pk)
        raise LedgerUnavailableError(f"Balance adjustment for user {user.pk} failed, retry later") from exc

    user.balance = balance_after
    logger.info("Adjusted balance of user %s by %s", user.pk, amount)
    return entry
