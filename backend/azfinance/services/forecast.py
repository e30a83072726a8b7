from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from azfinance.models.enums import CashflowStatus, CashflowType
from azfinance.models.investment import Cashflow
from azfinance.utils.dates import add_months, month_key, start_of_month
from azfinance.utils.decimal_math import money


logger = logging.getLogger("azfinance.forecast")

DEFAULT_HORIZON_MONTHS = 40
SUMMARY_CHECKPOINTS = {
    "month1": 1,
    "months3": 3,
    "months6": 6,
    "months12": 12,
    "months24": 24,
    "months60": 60,
}
_FORECAST_STATUSES = {CashflowStatus.expected, CashflowStatus.upcoming}
# fixed English names, independent of the process locale
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class MonthlyForecast:
    month: str
    month_label: str
    principal: Decimal
    profit: Decimal
    total: Decimal
    date: date


@dataclass(frozen=True)
class PeriodTotals:
    principal: Decimal
    profit: Decimal
    total: Decimal


@dataclass(frozen=True)
class ForecastSummaries:
    month1: PeriodTotals
    months3: PeriodTotals
    months6: PeriodTotals
    months12: PeriodTotals
    months24: PeriodTotals
    months60: PeriodTotals


def _month_label(month_start: date, offset: int) -> str:
    # current month is unnumbered, the next one is (1), and so on
    label = f"{MONTH_ABBREVIATIONS[month_start.month - 1]}-{month_start.year % 100:02d}"
    return label if offset == 0 else f"{label} ({offset})"


def calculate_monthly_forecast(
    cashflows: Iterable[Cashflow],
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    *,
    as_of: date | None = None,
) -> list[MonthlyForecast]:
    """Bucket expected/upcoming cashflows into calendar months.

    Returns exactly `horizon_months` buckets starting at the month of `as_of`
    (today when omitted). Received cashflows and cashflows due before the
    current month are left out. "Now" is read once for the whole call.
    """
    horizon = max(0, horizon_months)
    window_start = start_of_month(as_of or date.today())
    window_end = add_months(window_start, horizon)

    month_starts = [add_months(window_start, offset) for offset in range(horizon)]
    buckets: dict[str, dict[str, Decimal]] = {
        month_key(value): {"principal": Decimal("0"), "profit": Decimal("0")} for value in month_starts
    }

    included = 0
    for cf in cashflows:
        if cf.status not in _FORECAST_STATUSES:
            continue
        if not (window_start <= cf.due_date < window_end):
            continue
        bucket = buckets.get(month_key(cf.due_date))
        if bucket is None:
            continue
        if cf.type == CashflowType.principal:
            bucket["principal"] += cf.amount
        else:
            bucket["profit"] += cf.amount
        included += 1
    logger.debug("Forecast window %s..%s includes %d cashflows", window_start, window_end, included)

    rows: list[MonthlyForecast] = []
    for offset, month_start in enumerate(month_starts):
        data = buckets[month_key(month_start)]
        principal = money(data["principal"])
        profit = money(data["profit"])
        rows.append(
            MonthlyForecast(
                month=month_key(month_start),
                month_label=_month_label(month_start, offset),
                principal=principal,
                profit=profit,
                total=money(principal + profit),
                date=month_start,
            )
        )
    return rows


def _period_totals(forecast: Sequence[MonthlyForecast], months: int) -> PeriodTotals:
    window = forecast[:months]
    return PeriodTotals(
        principal=money(sum((row.principal for row in window), Decimal("0"))),
        profit=money(sum((row.profit for row in window), Decimal("0"))),
        total=money(sum((row.total for row in window), Decimal("0"))),
    )


def calculate_forecast_summaries(forecast: Sequence[MonthlyForecast]) -> ForecastSummaries:
    return ForecastSummaries(
        **{name: _period_totals(forecast, months) for name, months in SUMMARY_CHECKPOINTS.items()}
    )
