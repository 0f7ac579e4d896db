"""Date picker arithmetic."""

from __future__ import annotations

from datetime import datetime, time, timedelta

from todo_tui.core.state import DateField

DEFAULT_DEADLINE_TIME = time(17, 0, 0)

_FIELD_STEPS = {
    DateField.DAY: timedelta(days=1),
    DateField.HOUR: timedelta(hours=1),
    DateField.MINUTE: timedelta(minutes=10),
    DateField.SECOND: timedelta(seconds=10),
}


def default_deadline(now: datetime | None = None) -> datetime:
    """Today at the default deadline time."""
    if now is None:
        now = datetime.now()
    return datetime.combine(now.date(), DEFAULT_DEADLINE_TIME)


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months; a day past the target month's end rolls into the next.

    Jan 31 + 1 month is Mar 3 (or Mar 2 in a leap year).
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    first = value.replace(year=year, month=month, day=1)
    return first + timedelta(days=value.day - 1)


def adjust(value: datetime, field: DateField, delta: int) -> datetime:
    """Step the focused field of ``value`` by ``delta`` units.

    Steps that would leave the representable datetime range are ignored.
    """
    try:
        if field is DateField.YEAR:
            return add_months(value, 12 * delta)
        if field is DateField.MONTH:
            return add_months(value, delta)
        return value + _FIELD_STEPS[field] * delta
    except (ValueError, OverflowError):
        return value
