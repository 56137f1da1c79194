"""Tests for bonus rule condition evaluation."""

from decimal import Decimal

import pytest

from apps.payroll.constants import ConditionType, MetricSource, OwnerType, RewardType, ThresholdOperator
from apps.payroll.models import BonusRule
from apps.payroll.services.conditions import (
    AlwaysCondition,
    Band,
    ThresholdCondition,
    TieredCondition,
    build_condition,
    evaluate,
    parse_bands,
)

TIERS = [
    {"min": "0", "max": "100", "reward": "5"},
    {"min": "100", "max": "500", "reward": "10"},
]


def make_rule(**overrides):
    """Build an unsaved rule; evaluation never touches the database."""
    fields = {
        "owner_type": OwnerType.USER,
        "owner_id": 1,
        "name": "Sales bonus",
        "metric_source": MetricSource.SALES_REVENUE,
        "condition_type": ConditionType.ALWAYS,
        "reward_type": RewardType.PERCENT,
        "reward_value": Decimal("10"),
    }
    fields.update(overrides)
    return BonusRule(**fields)


class TestBuildCondition:
    def test_always(self):
        assert build_condition(make_rule()) == AlwaysCondition()

    def test_threshold(self):
        rule = make_rule(
            condition_type=ConditionType.THRESHOLD,
            threshold_operator=ThresholdOperator.GTE,
            threshold_value=Decimal("1000"),
        )

        assert build_condition(rule) == ThresholdCondition(operator=">=", value=Decimal("1000"))

    def test_tiered_bands_are_sorted(self):
        rule = make_rule(condition_type=ConditionType.TIERED, tiered_config=list(reversed(TIERS)))

        condition = build_condition(rule)

        assert isinstance(condition, TieredCondition)
        assert [band.min for band in condition.bands] == [Decimal("0"), Decimal("100")]

    def test_open_ended_band(self):
        bands = parse_bands([{"min": "500", "max": None, "reward": "15"}])

        assert bands == (Band(min=Decimal("500"), max=None, reward=Decimal("15")),)
        assert bands[0].contains(Decimal("1000000"))

    def test_unknown_condition_type(self):
        with pytest.raises(ValueError):
            build_condition(make_rule(condition_type="sometimes"))


class TestEvaluateAlways:
    def test_applies_on_zero_metric(self):
        evaluation = evaluate(make_rule(), Decimal("0"))

        assert evaluation.applies is True
        assert evaluation.effective_base == Decimal("0")
        assert evaluation.reward_value == Decimal("10")

    def test_apply_to_base_uses_base_value(self):
        rule = make_rule(apply_to_base=True)

        evaluation = evaluate(rule, Decimal("75"), base_value=Decimal("20000"))

        assert evaluation.effective_base == Decimal("20000")

    def test_base_value_ignored_without_apply_to_base(self):
        evaluation = evaluate(make_rule(), Decimal("75"), base_value=Decimal("20000"))

        assert evaluation.effective_base == Decimal("75")


class TestEvaluateThreshold:
    @pytest.mark.parametrize(
        "operator, metric, expected",
        [
            (ThresholdOperator.GTE, "1000", True),
            (ThresholdOperator.GTE, "999.99", False),
            (ThresholdOperator.GT, "1000", False),
            (ThresholdOperator.LTE, "1000", True),
            (ThresholdOperator.LT, "1000", False),
            (ThresholdOperator.EQ, "1000.00", True),
        ],
    )
    def test_operators(self, operator, metric, expected):
        rule = make_rule(
            condition_type=ConditionType.THRESHOLD, threshold_operator=operator, threshold_value=Decimal("1000")
        )

        assert evaluate(rule, Decimal(metric)).applies is expected

    def test_base_is_metric_value(self):
        rule = make_rule(
            condition_type=ConditionType.THRESHOLD,
            threshold_operator=ThresholdOperator.GTE,
            threshold_value=Decimal("10"),
            apply_to_base=True,
        )

        evaluation = evaluate(rule, Decimal("80"), base_value=Decimal("5000"))

        assert evaluation.applies is True
        assert evaluation.effective_base == Decimal("80")


class TestEvaluateTiered:
    def test_band_boundary_selects_upper_band(self):
        """A metric equal to a band's max belongs to the next band."""
        rule = make_rule(condition_type=ConditionType.TIERED, tiered_config=TIERS)

        evaluation = evaluate(rule, Decimal("100"))

        assert evaluation.applies is True
        assert evaluation.reward_value == Decimal("10")

    def test_value_inside_first_band(self):
        rule = make_rule(condition_type=ConditionType.TIERED, tiered_config=TIERS)

        evaluation = evaluate(rule, Decimal("99.99"))

        assert evaluation.reward_value == Decimal("5")

    def test_value_above_last_band(self):
        rule = make_rule(condition_type=ConditionType.TIERED, tiered_config=TIERS)

        evaluation = evaluate(rule, Decimal("500"))

        assert evaluation.applies is False
        assert evaluation.reward_value == Decimal("0")

    def test_gap_between_bands_does_not_apply(self):
        rule = make_rule(
            condition_type=ConditionType.TIERED,
            tiered_config=[
                {"min": "0", "max": "100", "reward": "5"},
                {"min": "200", "max": "500", "reward": "10"},
            ],
        )

        evaluation = evaluate(rule, Decimal("150"))

        assert evaluation.applies is False
        assert evaluation.reward_value == Decimal("0")
