"""Metric aggregation for bonus rules.

Turns raw CRM events (completed tasks, verified income transactions,
project renewals) and manually entered values into a single number per
owner and period. A source with no data for the period yields zero.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum

from apps.crm.constants import TaskStatus, TransactionType
from apps.crm.models import Project, ProjectRenewal, Task, Transaction
from libs.datetimes import month_bounds, quarter_bounds
from libs.decimals import DECIMAL_HUNDRED, quantize_decimal, to_decimal

from ..constants import MANUAL_METRIC_SOURCES, CalculationPeriod, MetricSource, OwnerType
from ..models import ManualMetricValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Period:
    """Half-open ``[start, end)`` aggregation window anchored on a month."""

    start: datetime
    end: datetime
    month: str
    months: tuple

    @classmethod
    def for_month(cls, month: str) -> "Period":
        start, end = month_bounds(month)
        return cls(start=start, end=end, month=month, months=(month,))

    @classmethod
    def for_rule(cls, month: str, calculation_period: str) -> "Period":
        if calculation_period != CalculationPeriod.QUARTERLY:
            return cls.for_month(month)
        start, end = quarter_bounds(month)
        months = tuple(f"{start.year:04d}-{start.month + offset:02d}" for offset in range(3))
        return cls(start=start, end=end, month=month, months=months)


@dataclass(frozen=True)
class MetricSample:
    value: Decimal
    base_value: Optional[Decimal] = None


class MetricAggregator:
    """Aggregate one metric source for an owner over a period."""

    def __init__(self, owner_id, owner_type, period: Period, task_types=None):
        self.owner_id = owner_id
        self.owner_type = owner_type
        self.period = period
        self.task_types = list(task_types or [])

    def owner_user_ids(self) -> list:
        if self.owner_type == OwnerType.USER:
            return [self.owner_id]
        if self.owner_type == OwnerType.JOB_TITLE:
            User = get_user_model()
            return list(User.objects.filter(job_title_id=self.owner_id).values_list("id", flat=True))
        raise ValueError(f"Unknown owner type '{self.owner_type}'")

    def sample(self, metric_source) -> MetricSample:
        if metric_source == MetricSource.TASKS_COMPLETED:
            return MetricSample(value=self.tasks_completed())
        if metric_source == MetricSource.SALES_REVENUE:
            revenue = self.sales_revenue()
            return MetricSample(value=revenue, base_value=revenue)
        if metric_source == MetricSource.PROJECT_RETENTION:
            return self.project_retention()
        if metric_source in MANUAL_METRIC_SOURCES:
            return MetricSample(value=self.manual_value(metric_source))
        raise ValueError(f"Unknown metric source '{metric_source}'")

    def completed_tasks(self):
        queryset = Task.objects.filter(
            assignee_id__in=self.owner_user_ids(),
            status=TaskStatus.DONE,
            completed_at__isnull=False,
            completed_at__gte=self.period.start,
            completed_at__lt=self.period.end,
        )
        if self.task_types:
            queryset = queryset.filter(task_type__in=self.task_types)
        return queryset

    def tasks_completed(self) -> Decimal:
        return Decimal(self.completed_tasks().count())

    def completed_tasks_by_type(self) -> dict:
        rows = self.completed_tasks().values("task_type").annotate(total=Count("id"))
        return {row["task_type"]: row["total"] for row in rows}

    def sales_transactions(self):
        return Transaction.objects.filter(
            client__manager_id__in=self.owner_user_ids(),
            type=TransactionType.INCOME,
            is_verified=True,
            amount__gt=0,
            date__gte=self.period.start,
            date__lt=self.period.end,
        )

    def sales_revenue(self) -> Decimal:
        total = self.sales_transactions().aggregate(total=Sum("amount"))["total"]
        if total is None:
            logger.debug("No sales revenue for %s:%s in %s", self.owner_type, self.owner_id, self.period.month)
        return quantize_decimal(to_decimal(total))

    def sales_transaction_amounts(self) -> list:
        return [quantize_decimal(amount) for amount in self.sales_transactions().values_list("amount", flat=True)]

    def project_retention(self) -> MetricSample:
        """Share of the owner's projects ending in the window that were renewed in the window.

        The base value is the revenue of those renewals.
        """
        projects = Project.objects.filter(
            team__id__in=self.owner_user_ids(),
            end_date__gte=self.period.start.date(),
            end_date__lt=self.period.end.date(),
        ).distinct()
        project_ids = list(projects.values_list("id", flat=True))
        if not project_ids:
            logger.debug("No ending projects for %s:%s in %s", self.owner_type, self.owner_id, self.period.month)
            return MetricSample(value=Decimal("0"), base_value=Decimal("0"))

        renewals = ProjectRenewal.objects.filter(
            project_id__in=project_ids,
            renewal_date__gte=self.period.start.date(),
            renewal_date__lt=self.period.end.date(),
        )
        renewed_count = renewals.values("project_id").distinct().count()
        revenue = renewals.aggregate(total=Sum("renewed_amount"))["total"]

        rate = quantize_decimal(Decimal(renewed_count) * DECIMAL_HUNDRED / Decimal(len(project_ids)))
        return MetricSample(value=rate, base_value=quantize_decimal(to_decimal(revenue)))

    def manual_value(self, metric_source) -> Decimal:
        total = ManualMetricValue.objects.filter(
            user_id__in=self.owner_user_ids(),
            month__in=self.period.months,
            metric_source=metric_source,
        ).aggregate(total=Sum("value"))["total"]
        if total is None:
            logger.debug(
                "No %s value for %s:%s in %s", metric_source, self.owner_type, self.owner_id, self.period.month
            )
        return to_decimal(total)


def aggregate(owner_id, owner_type, metric_source, period: Period, task_types=None) -> Decimal:
    """Return the aggregated metric value for an owner over ``period``."""
    return MetricAggregator(owner_id, owner_type, period, task_types=task_types).sample(metric_source).value


def sample(owner_id, owner_type, metric_source, period: Period, task_types=None) -> MetricSample:
    """Same as ``aggregate`` but also returns the base value of the metric."""
    return MetricAggregator(owner_id, owner_type, period, task_types=task_types).sample(metric_source)
