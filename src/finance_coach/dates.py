"""
Calendar helpers.
"""
from calendar import monthrange
from datetime import date, datetime


def to_date(value):
    """Coerce a date, datetime or ISO ``YYYY-MM-DD`` string to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            raise ValueError(f"Unparseable transaction date: {value!r}") from None
    raise ValueError(f"Unparseable transaction date: {value!r}")


def month_start(day):
    return date(day.year, day.month, 1)


def days_in_month(day):
    return monthrange(day.year, day.month)[1]


def shift_months(day, months):
    """First day of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
