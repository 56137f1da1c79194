"""Bonus rule condition evaluation.

Stored rules keep the condition as flat columns (``condition_type``,
``threshold_operator``, ``threshold_value``, ``tiered_config``). Before
evaluation they are converted into one of three closed variants and the
evaluator dispatches on the variant type.
"""

import operator
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from libs.decimals import to_decimal

from ..constants import ConditionType, ThresholdOperator

OPERATORS = {
    ThresholdOperator.GTE: operator.ge,
    ThresholdOperator.LTE: operator.le,
    ThresholdOperator.EQ: operator.eq,
    ThresholdOperator.GT: operator.gt,
    ThresholdOperator.LT: operator.lt,
}


@dataclass(frozen=True)
class Band:
    """Half-open ``[min, max)`` band; ``max`` of ``None`` is unbounded."""

    min: Decimal
    max: Optional[Decimal]
    reward: Decimal

    def contains(self, value: Decimal) -> bool:
        if value < self.min:
            return False
        return self.max is None or value < self.max


@dataclass(frozen=True)
class AlwaysCondition:
    pass


@dataclass(frozen=True)
class ThresholdCondition:
    operator: str
    value: Decimal


@dataclass(frozen=True)
class TieredCondition:
    bands: tuple

    def band_for(self, value: Decimal) -> Optional[Band]:
        for band in self.bands:
            if band.contains(value):
                return band
        return None


Condition = Union[AlwaysCondition, ThresholdCondition, TieredCondition]


@dataclass(frozen=True)
class Evaluation:
    applies: bool
    effective_base: Decimal
    reward_value: Decimal


def parse_bands(tiered_config) -> tuple:
    """Convert the stored ``[{min, max, reward}]`` list into sorted bands."""
    bands = []
    for item in tiered_config or []:
        raw_max = item.get("max")
        bands.append(
            Band(
                min=to_decimal(item.get("min")),
                max=None if raw_max in (None, "") else to_decimal(raw_max),
                reward=to_decimal(item.get("reward")),
            )
        )
    return tuple(sorted(bands, key=lambda band: band.min))


def build_condition(rule) -> Condition:
    if rule.condition_type == ConditionType.ALWAYS:
        return AlwaysCondition()
    if rule.condition_type == ConditionType.THRESHOLD:
        return ThresholdCondition(operator=rule.threshold_operator, value=to_decimal(rule.threshold_value))
    if rule.condition_type == ConditionType.TIERED:
        return TieredCondition(bands=parse_bands(rule.tiered_config))
    raise ValueError(f"Unknown condition type '{rule.condition_type}'")


def evaluate(rule, metric_value, base_value=None) -> Evaluation:
    """Decide whether ``rule`` applies to ``metric_value`` and with which reward value.

    Args:
        rule: BonusRule instance (or any object with the same attributes)
        metric_value: Aggregated metric for the owner and period
        base_value: Optional base amount used when ``rule.apply_to_base`` is set

    Returns:
        Evaluation: ``applies``, the base the reward is computed on and the reward value
    """
    metric_value = to_decimal(metric_value)
    if rule.apply_to_base and base_value is not None:
        effective_base = to_decimal(base_value)
    else:
        effective_base = metric_value
    reward_value = to_decimal(rule.reward_value)

    condition = build_condition(rule)

    if isinstance(condition, AlwaysCondition):
        return Evaluation(applies=True, effective_base=effective_base, reward_value=reward_value)

    if isinstance(condition, ThresholdCondition):
        compare = OPERATORS.get(condition.operator)
        if compare is None:
            raise ValueError(f"Unknown threshold operator '{condition.operator}'")
        return Evaluation(
            applies=compare(metric_value, condition.value),
            effective_base=metric_value,
            reward_value=reward_value,
        )

    if isinstance(condition, TieredCondition):
        band = condition.band_for(metric_value)
        if band is None:
            return Evaluation(applies=False, effective_base=effective_base, reward_value=Decimal("0"))
        return Evaluation(applies=True, effective_base=effective_base, reward_value=band.reward)

    raise TypeError(f"Unsupported condition {condition!r}")
