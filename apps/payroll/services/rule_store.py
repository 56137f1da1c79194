"""Bonus rule and salary scheme persistence.

Every write validates the whole definition first and raises
``django.core.exceptions.ValidationError`` before anything is saved.
"""

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from libs.decimals import is_decimal, to_decimal

from ..constants import ConditionType, OwnerType, RewardType, ThresholdOperator
from ..models import BonusRule, SalaryScheme
from .conditions import parse_bands

logger = logging.getLogger(__name__)

BONUS_RULE_FIELDS = (
    "owner_type",
    "owner_id",
    "name",
    "description",
    "metric_source",
    "condition_type",
    "threshold_operator",
    "threshold_value",
    "tiered_config",
    "reward_type",
    "reward_value",
    "apply_to_base",
    "is_active",
    "calculation_period",
    "task_types",
)


def _non_numeric_band_keys(item) -> list:
    keys = [key for key in ("min", "reward") if not is_decimal(item[key])]
    if item.get("max") not in (None, "") and not is_decimal(item["max"]):
        keys.append("max")
    return keys


def _validate_tiered_config(tiered_config) -> list:
    errors = []
    if not isinstance(tiered_config, list) or not tiered_config:
        return ["Tiered rule requires at least one band"]

    for index, item in enumerate(tiered_config):
        if not isinstance(item, dict) or "min" not in item or "reward" not in item:
            errors.append(f"Band {index + 1} must define 'min' and 'reward'")
        elif _non_numeric_band_keys(item):
            keys = ", ".join(f"'{key}'" for key in _non_numeric_band_keys(item))
            errors.append(f"Band {index + 1}: {keys} must be a number")
        elif item.get("max") not in (None, "") and to_decimal(item["min"]) >= to_decimal(item["max"]):
            errors.append(f"Band {index + 1}: 'min' must be lower than 'max'")
        elif to_decimal(item.get("reward")) < 0:
            errors.append(f"Band {index + 1}: reward cannot be negative")
    if errors:
        return errors

    bands = parse_bands(tiered_config)
    for previous, current in zip(bands, bands[1:]):
        if previous.max is None or current.min < previous.max:
            errors.append(f"Bands starting at {previous.min} and {current.min} overlap")
    return errors


def validate_bonus_rule(rule):
    """Validate a bonus rule definition.

    Raises:
        ValidationError: With a field -> messages mapping
    """
    errors = {}

    if not (rule.name or "").strip():
        errors["name"] = ["Name is required"]
    if rule.owner_type not in OwnerType.values:
        errors["owner_type"] = [f"Unknown owner type '{rule.owner_type}'"]
    if rule.owner_id in (None, ""):
        errors["owner_id"] = ["Owner is required"]
    if rule.reward_type not in RewardType.values:
        errors["reward_type"] = [f"Unknown reward type '{rule.reward_type}'"]

    if rule.condition_type == ConditionType.THRESHOLD:
        if rule.threshold_operator not in ThresholdOperator.values:
            errors["threshold_operator"] = [f"Unknown operator '{rule.threshold_operator}'"]
        if rule.threshold_value in (None, ""):
            errors["threshold_value"] = ["Threshold rule requires a threshold value"]
        elif not is_decimal(rule.threshold_value):
            errors["threshold_value"] = ["Threshold value must be a number"]
    elif rule.condition_type == ConditionType.TIERED:
        band_errors = _validate_tiered_config(rule.tiered_config)
        if band_errors:
            errors["tiered_config"] = band_errors
    elif rule.condition_type != ConditionType.ALWAYS:
        errors["condition_type"] = [f"Unknown condition type '{rule.condition_type}'"]

    if not is_decimal(rule.reward_value):
        errors["reward_value"] = ["Reward value must be a number"]
    elif rule.condition_type != ConditionType.TIERED and to_decimal(rule.reward_value) < 0:
        errors["reward_value"] = ["Reward value cannot be negative"]

    if rule.task_types and not isinstance(rule.task_types, list):
        errors["task_types"] = ["Task types must be a list"]

    if errors:
        raise ValidationError(errors)


def create_bonus_rule(**fields) -> BonusRule:
    rule = BonusRule(**fields)
    validate_bonus_rule(rule)
    rule.save()
    logger.info("Created bonus rule %s for %s:%s", rule.pk, rule.owner_type, rule.owner_id)
    return rule


def update_bonus_rule(rule: BonusRule, **fields) -> BonusRule:
    for name, value in fields.items():
        if name not in BONUS_RULE_FIELDS:
            raise ValidationError({name: ["Unknown field"]})
        setattr(rule, name, value)
    validate_bonus_rule(rule)
    rule.save()
    return rule


def delete_bonus_rule(rule: BonusRule):
    logger.info("Deleting bonus rule %s", rule.pk)
    rule.delete()


def toggle_bonus_rule(rule: BonusRule) -> BonusRule:
    rule.is_active = not rule.is_active
    rule.save(update_fields=["is_active", "updated_at"])
    return rule


def list_bonus_rules_by_owner(owner_type, owner_id, active_only=False):
    queryset = BonusRule.objects.filter(owner_type=owner_type, owner_id=owner_id)
    if active_only:
        queryset = queryset.filter(is_active=True)
    return queryset


def rules_for_user(user):
    """Active rules owned by the user or by the user's job title."""
    owner_filter = Q(owner_type=OwnerType.USER, owner_id=user.pk)
    if user.job_title_id:
        owner_filter |= Q(owner_type=OwnerType.JOB_TITLE, owner_id=user.job_title_id)
    return BonusRule.objects.filter(owner_filter, is_active=True).order_by("owner_type", "id")


def validate_salary_scheme(owner_type, owner_id, base_salary, kpi_rules, pm_bonus_percent=None):
    errors = {}
    if owner_type not in OwnerType.values:
        errors["owner_type"] = [f"Unknown owner type '{owner_type}'"]
    if owner_id in (None, ""):
        errors["owner_id"] = ["Owner is required"]
    if not is_decimal(base_salary):
        errors["base_salary"] = ["Base salary must be a number"]
    elif to_decimal(base_salary) < 0:
        errors["base_salary"] = ["Base salary cannot be negative"]

    kpi_errors = []
    if not isinstance(kpi_rules, list):
        kpi_errors.append("KPI rules must be a list")
    else:
        for index, item in enumerate(kpi_rules):
            if not isinstance(item, dict) or not item.get("task_type"):
                kpi_errors.append(f"KPI rule {index + 1} must define 'task_type'")
            elif not is_decimal(item.get("value")):
                kpi_errors.append(f"KPI rule {index + 1}: value must be a number")
            elif to_decimal(item.get("value")) < 0:
                kpi_errors.append(f"KPI rule {index + 1}: value cannot be negative")
    if kpi_errors:
        errors["kpi_rules"] = kpi_errors

    if pm_bonus_percent is not None and not (
        is_decimal(pm_bonus_percent) and Decimal("0") <= to_decimal(pm_bonus_percent) <= Decimal("100")
    ):
        errors["pm_bonus_percent"] = ["PM bonus percent must be between 0 and 100"]

    if errors:
        raise ValidationError(errors)


def upsert_salary_scheme(owner_type, owner_id, base_salary, kpi_rules=None, pm_bonus_percent=None) -> SalaryScheme:
    """Create or replace the active salary scheme of an owner."""
    kpi_rules = kpi_rules if kpi_rules is not None else []
    validate_salary_scheme(owner_type, owner_id, base_salary, kpi_rules, pm_bonus_percent)

    with transaction.atomic():
        scheme = (
            SalaryScheme.objects.select_for_update()
            .filter(owner_type=owner_type, owner_id=owner_id, is_active=True)
            .first()
        )
        if scheme is None:
            scheme = SalaryScheme(owner_type=owner_type, owner_id=owner_id, is_active=True)
        scheme.base_salary = to_decimal(base_salary)
        scheme.kpi_rules = [
            {"task_type": item["task_type"], "value": str(to_decimal(item.get("value")))} for item in kpi_rules
        ]
        scheme.pm_bonus_percent = pm_bonus_percent
        scheme.save()

    logger.info("Saved salary scheme %s for %s:%s", scheme.pk, owner_type, owner_id)
    return scheme


def list_salary_schemes_by_owner(owner_type, owner_id):
    return SalaryScheme.objects.filter(owner_type=owner_type, owner_id=owner_id)


def active_scheme_for_user(user):
    """The user's own active scheme, falling back to the job title's."""
    scheme = SalaryScheme.objects.filter(owner_type=OwnerType.USER, owner_id=user.pk, is_active=True).first()
    if scheme is None and user.job_title_id:
        scheme = SalaryScheme.objects.filter(
            owner_type=OwnerType.JOB_TITLE, owner_id=user.job_title_id, is_active=True
        ).first()
    return scheme
