from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from azfinance.utils.dates import add_months, calendar_months_between
from azfinance.utils.decimal_math import HUNDRED, money


@dataclass(frozen=True)
class InvestmentFinancials:
    face_value: Decimal
    expected_irr: Decimal
    start_date: date
    end_date: date
    duration_months: int
    total_expected_profit: Decimal


def calculate_expected_profit(face_value: Decimal, irr_percent: Decimal, duration_months: int) -> Decimal:
    """face value x IRR x years, rounded to cents."""
    if face_value <= 0 or irr_percent < 0 or duration_months <= 0:
        return money(0)
    years = Decimal(duration_months) / Decimal(12)
    return money(face_value * (irr_percent / HUNDRED) * years)


def calculate_duration_months(start_date: date, end_date: date) -> int:
    """Whole months between the dates; a trailing partial month counts as one."""
    if end_date <= start_date:
        return 0
    months = calendar_months_between(start_date, end_date)
    if end_date.day > start_date.day:
        months += 1
    return max(1, months)


def calculate_end_date(start_date: date, duration_months: int) -> date:
    return add_months(start_date, duration_months)


def validate_investment_financials(
    *,
    face_value: Decimal,
    expected_irr: Decimal,
    start_date: date,
    end_date: date | None = None,
    duration_months: int | None = None,
    total_expected_profit: Decimal | None = None,
) -> InvestmentFinancials:
    if end_date is not None and end_date <= start_date:
        raise ValueError("end_date must be after start_date.")
    if duration_months and end_date is None:
        end_date = calculate_end_date(start_date, duration_months)
    if end_date is not None and not duration_months:
        duration_months = calculate_duration_months(start_date, end_date)
    if end_date is None or not duration_months:
        raise ValueError("Either end_date or duration_months must be provided.")

    if not total_expected_profit:
        total_expected_profit = calculate_expected_profit(face_value, expected_irr, duration_months)

    return InvestmentFinancials(
        face_value=face_value,
        expected_irr=expected_irr,
        start_date=start_date,
        end_date=end_date,
        duration_months=duration_months,
        total_expected_profit=money(total_expected_profit),
    )
