from django.db import models
from django.utils.translation import gettext_lazy as _


class OwnerType(models.TextChoices):
    JOB_TITLE = "job_title", _("Job title")
    USER = "user", _("User")


class MetricSource(models.TextChoices):
    SALES_REVENUE = "sales_revenue", _("Sales revenue")
    PROJECT_RETENTION = "project_retention", _("Project retention")
    MANUAL_KPI = "manual_kpi", _("Manual KPI")
    TASKS_COMPLETED = "tasks_completed", _("Tasks completed")
    CPL_EFFICIENCY = "cpl_efficiency", _("CPL efficiency")
    CUSTOM_METRIC = "custom_metric", _("Custom metric")


# Sources whose value is entered by a person instead of aggregated from events
MANUAL_METRIC_SOURCES = (
    MetricSource.MANUAL_KPI,
    MetricSource.CPL_EFFICIENCY,
    MetricSource.CUSTOM_METRIC,
)


class ConditionType(models.TextChoices):
    ALWAYS = "always", _("Always")
    THRESHOLD = "threshold", _("Threshold")
    TIERED = "tiered", _("Tiered")


class ThresholdOperator(models.TextChoices):
    GTE = ">=", ">="
    LTE = "<=", "<="
    EQ = "=", "="
    GT = ">", ">"
    LT = "<", "<"


class RewardType(models.TextChoices):
    PERCENT = "percent", _("Percent")
    FIXED_AMOUNT = "fixed_amount", _("Fixed amount")


class CalculationPeriod(models.TextChoices):
    MONTHLY = "monthly", _("Monthly")
    QUARTERLY = "quarterly", _("Quarterly")
    PER_TRANSACTION = "per_transaction", _("Per transaction")


class StateConflictReason(models.TextChoices):
    """Reason codes returned when a ledger command is a no-op"""

    ALREADY_FROZEN = "ALREADY_FROZEN", _("Record is already frozen")
    ALREADY_PAID = "ALREADY_PAID", _("Record is already paid")
    RECORD_LOCKED = "RECORD_LOCKED", _("Record is not in DRAFT and cannot be changed")


class BalanceSource(models.TextChoices):
    PAYROLL = "PAYROLL", _("Payroll payment")
    MANUAL = "MANUAL", _("Manual adjustment")


MONEY_MAX_DIGITS = 20
MONEY_DECIMAL_PLACES = 2
