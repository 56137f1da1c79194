"""Tests for bonus rule and salary scheme persistence."""

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.payroll.constants import ConditionType, MetricSource, OwnerType, RewardType, ThresholdOperator
from apps.payroll.models import BonusRule, SalaryScheme
from apps.payroll.services import rule_store


def rule_fields(**overrides):
    fields = {
        "owner_type": OwnerType.USER,
        "owner_id": 1,
        "name": "Revenue bonus",
        "metric_source": MetricSource.SALES_REVENUE,
        "condition_type": ConditionType.ALWAYS,
        "reward_type": RewardType.PERCENT,
        "reward_value": Decimal("5"),
    }
    fields.update(overrides)
    return fields


@pytest.mark.django_db
class TestBonusRuleStore:
    def test_create_rule(self):
        rule = rule_store.create_bonus_rule(**rule_fields())

        assert rule.pk is not None
        assert rule.is_active is True

    def test_threshold_requires_value(self):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.create_bonus_rule(
                **rule_fields(condition_type=ConditionType.THRESHOLD, threshold_operator=ThresholdOperator.GTE)
            )

        assert "threshold_value" in exc_info.value.message_dict
        assert BonusRule.objects.count() == 0

    def test_overlapping_bands_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.create_bonus_rule(
                **rule_fields(
                    condition_type=ConditionType.TIERED,
                    tiered_config=[
                        {"min": "0", "max": "150", "reward": "5"},
                        {"min": "100", "max": "500", "reward": "10"},
                    ],
                )
            )

        assert "tiered_config" in exc_info.value.message_dict

    def test_band_min_must_be_below_max(self):
        with pytest.raises(ValidationError):
            rule_store.create_bonus_rule(
                **rule_fields(
                    condition_type=ConditionType.TIERED,
                    tiered_config=[{"min": "100", "max": "100", "reward": "5"}],
                )
            )

    def test_adjacent_bands_accepted(self):
        rule = rule_store.create_bonus_rule(
            **rule_fields(
                condition_type=ConditionType.TIERED,
                tiered_config=[
                    {"min": "0", "max": "100", "reward": "5"},
                    {"min": "100", "max": None, "reward": "10"},
                ],
            )
        )

        assert len(rule.tiered_config) == 2

    def test_negative_reward_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.create_bonus_rule(**rule_fields(reward_value=Decimal("-1")))

        assert "reward_value" in exc_info.value.message_dict

    @pytest.mark.parametrize(
        "band",
        [
            {"min": "abc", "max": "10", "reward": "5"},
            {"min": "0", "max": "ten", "reward": "5"},
            {"min": "0", "max": "10", "reward": "five"},
            {"min": "0", "max": "10", "reward": None},
            {"min": "NaN", "max": "10", "reward": "5"},
        ],
    )
    def test_non_numeric_band_rejected(self, band):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.create_bonus_rule(**rule_fields(condition_type=ConditionType.TIERED, tiered_config=[band]))

        assert "must be a number" in exc_info.value.message_dict["tiered_config"][0]
        assert not BonusRule.objects.exists()

    def test_non_numeric_threshold_and_reward_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.create_bonus_rule(
                **rule_fields(
                    condition_type=ConditionType.THRESHOLD,
                    threshold_operator=ThresholdOperator.GTE,
                    threshold_value="lots",
                    reward_value="some",
                )
            )

        assert set(exc_info.value.message_dict) == {"threshold_value", "reward_value"}

    def test_non_numeric_kpi_rate_rejected(self, user):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, "base", [{"task_type": "Post", "value": "x"}])

        assert set(exc_info.value.message_dict) == {"base_salary", "kpi_rules"}
        assert not SalaryScheme.objects.exists()

    def test_update_rejects_unknown_field(self):
        rule = rule_store.create_bonus_rule(**rule_fields())

        with pytest.raises(ValidationError):
            rule_store.update_bonus_rule(rule, colour="red")

    def test_toggle(self):
        rule = rule_store.create_bonus_rule(**rule_fields())

        rule_store.toggle_bonus_rule(rule)
        rule.refresh_from_db()

        assert rule.is_active is False

    def test_list_by_owner(self):
        rule_store.create_bonus_rule(**rule_fields(owner_id=1))
        rule_store.create_bonus_rule(**rule_fields(owner_id=1, is_active=False, name="Inactive"))
        rule_store.create_bonus_rule(**rule_fields(owner_id=2))

        assert rule_store.list_bonus_rules_by_owner(OwnerType.USER, 1).count() == 2
        assert rule_store.list_bonus_rules_by_owner(OwnerType.USER, 1, active_only=True).count() == 1

    def test_rules_for_user_include_job_title_rules(self, user, job_title):
        own = rule_store.create_bonus_rule(**rule_fields(owner_id=user.pk))
        shared = rule_store.create_bonus_rule(**rule_fields(owner_type=OwnerType.JOB_TITLE, owner_id=job_title.pk))
        rule_store.create_bonus_rule(**rule_fields(owner_type=OwnerType.JOB_TITLE, owner_id=job_title.pk + 1000))

        assert set(rule_store.rules_for_user(user)) == {own, shared}


@pytest.mark.django_db
class TestSalarySchemeStore:
    def test_upsert_replaces_active_scheme(self, user):
        # Arrange
        first = rule_store.upsert_salary_scheme(
            OwnerType.USER, user.pk, Decimal("10000"), [{"task_type": "Post", "value": 1500}]
        )

        # Act
        second = rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, Decimal("12000"), [])

        # Assert
        assert first.pk == second.pk
        assert SalaryScheme.objects.filter(owner_type=OwnerType.USER, owner_id=user.pk, is_active=True).count() == 1
        assert second.base_salary == Decimal("12000")
        assert second.kpi_rules == []

    def test_kpi_rule_values_stored_as_strings(self, user):
        scheme = rule_store.upsert_salary_scheme(
            OwnerType.USER, user.pk, 0, [{"task_type": "Post", "value": Decimal("1500")}]
        )

        assert scheme.kpi_rules == [{"task_type": "Post", "value": "1500"}]

    def test_invalid_scheme(self, user):
        with pytest.raises(ValidationError) as exc_info:
            rule_store.upsert_salary_scheme(
                OwnerType.USER, user.pk, Decimal("-1"), [{"value": 10}], pm_bonus_percent=Decimal("120")
            )

        errors = exc_info.value.message_dict
        assert set(errors) == {"base_salary", "kpi_rules", "pm_bonus_percent"}

    def test_user_scheme_wins_over_job_title(self, user, job_title):
        rule_store.upsert_salary_scheme(OwnerType.JOB_TITLE, job_title.pk, Decimal("5000"))
        own = rule_store.upsert_salary_scheme(OwnerType.USER, user.pk, Decimal("9000"))

        assert rule_store.active_scheme_for_user(user) == own

    def test_falls_back_to_job_title(self, user, job_title):
        shared = rule_store.upsert_salary_scheme(OwnerType.JOB_TITLE, job_title.pk, Decimal("5000"))

        assert rule_store.active_scheme_for_user(user) == shared
