from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel

from ..constants import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    CalculationPeriod,
    ConditionType,
    MetricSource,
    OwnerType,
    RewardType,
    ThresholdOperator,
)


class BonusRule(BaseModel):
    """Bonus rule owned by a job title or an individual user.

    A rule reads one metric for the owner and period, checks its condition
    (always, threshold or tiered bands) and turns the outcome into a reward
    that is either a percentage of a base or a fixed amount.

    Attributes:
        owner_type: ``job_title`` or ``user``
        owner_id: Primary key of the job title or user owning the rule
        metric_source: Which metric the condition is evaluated against
        condition_type: ``always``, ``threshold`` or ``tiered``
        threshold_operator / threshold_value: Comparison used by threshold rules
        tiered_config: Ordered list of ``{min, max, reward}`` bands, ``max`` exclusive
        reward_type: ``percent`` of the effective base or ``fixed_amount``
        reward_value: Reward used by always and threshold rules
        apply_to_base: Percent applies to the metric's base value instead of the metric itself
        calculation_period: Window the metric is aggregated over
        task_types: Task types counted by ``tasks_completed`` (empty means all)
    """

    owner_type = models.CharField(max_length=16, choices=OwnerType.choices, verbose_name=_("Owner type"))
    owner_id = models.PositiveBigIntegerField(verbose_name=_("Owner ID"))
    name = models.CharField(max_length=255, verbose_name=_("Name"))
    description = models.TextField(blank=True, verbose_name=_("Description"))
    metric_source = models.CharField(max_length=32, choices=MetricSource.choices, verbose_name=_("Metric source"))
    condition_type = models.CharField(
        max_length=16, choices=ConditionType.choices, default=ConditionType.ALWAYS, verbose_name=_("Condition type")
    )
    threshold_operator = models.CharField(
        max_length=2, choices=ThresholdOperator.choices, blank=True, verbose_name=_("Threshold operator")
    )
    threshold_value = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        null=True,
        blank=True,
        verbose_name=_("Threshold value"),
    )
    tiered_config = models.JSONField(default=list, blank=True, verbose_name=_("Tiered bands"))
    reward_type = models.CharField(
        max_length=16, choices=RewardType.choices, default=RewardType.PERCENT, verbose_name=_("Reward type")
    )
    reward_value = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0, verbose_name=_("Reward value")
    )
    apply_to_base = models.BooleanField(default=False, verbose_name=_("Apply to base"))
    is_active = models.BooleanField(default=True, db_index=True, verbose_name=_("Active"))
    calculation_period = models.CharField(
        max_length=16,
        choices=CalculationPeriod.choices,
        default=CalculationPeriod.MONTHLY,
        verbose_name=_("Calculation period"),
    )
    task_types = models.JSONField(default=list, blank=True, verbose_name=_("Task types"))

    class Meta:
        verbose_name = _("Bonus rule")
        verbose_name_plural = _("Bonus rules")
        db_table = "payroll_bonus_rule"
        ordering = ["owner_type", "owner_id", "name"]
        indexes = [
            models.Index(fields=["owner_type", "owner_id", "is_active"], name="bonus_rule_owner_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.owner_type}:{self.owner_id})"

    def clean(self):
        from ..services.rule_store import validate_bonus_rule

        validate_bonus_rule(self)
