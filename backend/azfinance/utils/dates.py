from datetime import date

from dateutil.relativedelta import relativedelta


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """Calendar month shift; the day is clamped to the target month's length."""
    return value + relativedelta(months=months)


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def calendar_months_between(start: date, end: date) -> int:
    """Month-number difference, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def days_past_due(due_date: date, as_of: date) -> int:
    return (as_of - due_date).days
