import re
from datetime import date, datetime, time

from django.utils import timezone

MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def make_aware(dt):
    if not dt:
        return

    if timezone.is_aware(dt):
        return dt
    return timezone.make_aware(dt)


def combine_datetime(day, at):
    if not at:
        return
    dt = datetime.combine(day, at)
    return make_aware(dt)


def parse_month(month: str) -> date:
    """Parse a ``YYYY-MM`` string into the first day of that month.

    Raises:
        ValueError: If the string is not a valid month key
    """
    match = MONTH_PATTERN.match(month or "")
    if not match:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def format_month(value: date) -> str:
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return f"{value.year:04d}-{value.month:02d}"


def current_month() -> str:
    return format_month(timezone.localdate())


def add_months(first_day: date, months: int) -> date:
    index = first_day.year * 12 + (first_day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def previous_month(month: str) -> str:
    return format_month(add_months(parse_month(month), -1))


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` aware datetimes covering the month."""
    first_day = parse_month(month)
    start = combine_datetime(first_day, time.min)
    end = combine_datetime(add_months(first_day, 1), time.min)
    return start, end


def quarter_bounds(month: str) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` aware datetimes covering the quarter containing the month."""
    first_day = parse_month(month)
    quarter_first = date(first_day.year, ((first_day.month - 1) // 3) * 3 + 1, 1)
    start = combine_datetime(quarter_first, time.min)
    end = combine_datetime(add_months(quarter_first, 3), time.min)
    return start, end
