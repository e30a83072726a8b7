from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from azfinance.models.cash import CashTransaction
from azfinance.models.enums import CashflowType, InvestmentStatus
from azfinance.models.investment import Cashflow, Investment
from azfinance.models.platform import Platform
from azfinance.services.classification import DEFAULT_AFTER_DAYS, is_defaulted, is_late
from azfinance.utils.dates import calendar_months_between
from azfinance.utils.decimal_math import HUNDRED, money, pct, safe_pct


logger = logging.getLogger("azfinance.analytics")

ZERO = Decimal("0")
UNKNOWN_PLATFORM = "Unknown"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class PlatformShare:
    platform_id: str
    platform_name: str
    value: Decimal
    count: int
    percentage: Decimal


@dataclass(frozen=True)
class DashboardMetrics:
    portfolio_value: Decimal
    total_cash: Decimal
    cash_by_platform: dict[str, Decimal]
    actual_returns: Decimal
    expected_returns: Decimal
    returns_ratio: Decimal
    cash_ratio: Decimal
    weighted_apr: Decimal
    historical_apr: Decimal
    portfolio_roi: Decimal
    total_profit_amount: Decimal
    avg_duration: Decimal
    avg_amount: Decimal
    avg_payment_amount: Decimal
    total_investments: int
    active_investments: int
    completed_investments: int
    late_investments: int
    defaulted_investments: int
    status_distribution: dict[str, int]
    platform_distribution: list[PlatformShare] = field(default_factory=list)
    platform_distribution_active: list[PlatformShare] = field(default_factory=list)
    platform_distribution_count: list[PlatformShare] = field(default_factory=list)


def calculate_duration_months(start_date: date, end_date: date) -> int:
    return max(1, calendar_months_between(start_date, end_date))


def calculate_apr(amount: Decimal, profit: Decimal, duration_months: int) -> Decimal:
    """Simple annualized return: (profit / amount) * (12 / months), as a percentage."""
    if duration_months == 0 or amount == 0:
        return ZERO
    roi = profit / amount
    return roi * (Decimal(12) / Decimal(duration_months)) * HUNDRED


def calculate_total_cash(cash_transactions: Sequence[CashTransaction]) -> Decimal:
    return money(sum((tx.signed_amount for tx in cash_transactions), ZERO))


def _face_total(investments: Sequence[Investment]) -> Decimal:
    return sum((inv.face_value for inv in investments), ZERO)


def _weighted_apr(investments: Sequence[Investment]) -> Decimal:
    total_value = _face_total(investments)
    if not investments or total_value == 0:
        return pct(0)
    weighted = ZERO
    for inv in investments:
        months = calculate_duration_months(inv.start_date, inv.end_date)
        apr = calculate_apr(inv.face_value, inv.total_expected_profit, months)
        weighted += apr * (inv.face_value / total_value)
    return pct(weighted)


def _cash_by_platform(
    cash_transactions: Sequence[CashTransaction],
    *,
    platform_id: str | None,
    total_cash: Decimal,
) -> dict[str, Decimal]:
    if platform_id is not None:
        return {platform_id: total_cash}
    totals: dict[str, Decimal] = {}
    for tx in cash_transactions:
        if not tx.platform_id:
            continue
        totals[tx.platform_id] = money(totals.get(tx.platform_id, ZERO) + tx.signed_amount)
    return totals


def _group_by_platform(investments: Sequence[Investment]) -> dict[str, dict[str, Decimal | int]]:
    stats: dict[str, dict[str, Decimal | int]] = {}
    for inv in investments:
        row = stats.setdefault(inv.platform_id, {"value": ZERO, "count": 0})
        row["value"] = row["value"] + inv.face_value
        row["count"] = row["count"] + 1
    return stats


def _platform_shares(
    stats: dict[str, dict[str, Decimal | int]],
    names: dict[str, str],
    *,
    by_count: bool = False,
) -> list[PlatformShare]:
    total_value = sum((row["value"] for row in stats.values()), ZERO)
    total_count = sum(int(row["count"]) for row in stats.values())
    rows: list[PlatformShare] = []
    for platform_id, row in stats.items():
        if by_count:
            share = safe_pct(Decimal(int(row["count"])), Decimal(total_count))
        else:
            share = safe_pct(Decimal(row["value"]), total_value)
        rows.append(
            PlatformShare(
                platform_id=platform_id,
                platform_name=names.get(platform_id, UNKNOWN_PLATFORM),
                value=money(row["value"]),
                count=int(row["count"]),
                percentage=share,
            )
        )
    if by_count:
        return sorted(rows, key=lambda item: item.count, reverse=True)
    return sorted(rows, key=lambda item: item.value, reverse=True)


def calculate_dashboard_metrics(
    investments: Sequence[Investment],
    cash_transactions: Sequence[CashTransaction],
    platforms: Sequence[Platform],
    cashflows: Sequence[Cashflow],
    date_range: DateRange | None = None,
    *,
    platform_id: str | None = None,
    as_of: date | None = None,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> DashboardMetrics:
    today = as_of or date.today()

    filtered = list(investments)
    filtered_cash = list(cash_transactions)
    if platform_id is not None:
        filtered = [inv for inv in filtered if inv.platform_id == platform_id]
        # unassigned cash only shows up in the all-platforms view
        filtered_cash = [tx for tx in filtered_cash if tx.platform_id == platform_id]
    if date_range is not None:
        filtered = [inv for inv in filtered if inv.start_date in date_range]

    investment_ids = {inv.id for inv in filtered}
    filtered_cashflows = [cf for cf in cashflows if cf.investment_id in investment_ids]
    logger.debug(
        "Aggregating %d investments, %d cashflows, %d cash transactions",
        len(filtered),
        len(filtered_cashflows),
        len(filtered_cash),
    )

    total_cash = calculate_total_cash(filtered_cash)
    cash_by_platform = _cash_by_platform(filtered_cash, platform_id=platform_id, total_cash=total_cash)

    active = [inv for inv in filtered if inv.status == InvestmentStatus.active]
    active_value = _face_total(active)
    portfolio_value = money(active_value + total_cash)

    profit_cashflows = [cf for cf in filtered_cashflows if cf.type == CashflowType.profit]
    actual_returns = money(sum((cf.amount for cf in profit_cashflows if cf.is_received), ZERO))
    expected_returns = money(sum((inv.total_expected_profit for inv in filtered), ZERO))

    invested_capital = _face_total(filtered)

    durations = [calculate_duration_months(inv.start_date, inv.end_date) for inv in filtered]
    avg_duration = money(Decimal(sum(durations)) / Decimal(len(durations))) if durations else money(0)
    avg_amount = money(invested_capital / Decimal(len(filtered))) if filtered else money(0)
    avg_payment_amount = (
        money(sum((cf.amount for cf in profit_cashflows), ZERO) / Decimal(len(profit_cashflows)))
        if profit_cashflows
        else money(0)
    )

    completed_count = sum(1 for inv in filtered if inv.status == InvestmentStatus.completed)
    late_count = sum(1 for inv in filtered if is_late(inv, filtered_cashflows, as_of=today))
    defaulted_count = sum(
        1
        for inv in filtered
        if is_defaulted(inv, filtered_cashflows, as_of=today, default_after_days=default_after_days)
    )

    names = {platform.id: platform.name for platform in platforms}
    all_stats = _group_by_platform(filtered)

    return DashboardMetrics(
        portfolio_value=portfolio_value,
        total_cash=total_cash,
        cash_by_platform=cash_by_platform,
        actual_returns=actual_returns,
        expected_returns=expected_returns,
        returns_ratio=safe_pct(actual_returns, expected_returns),
        cash_ratio=safe_pct(total_cash, portfolio_value),
        weighted_apr=_weighted_apr(active),
        historical_apr=_weighted_apr(filtered),
        portfolio_roi=safe_pct(actual_returns, invested_capital),
        total_profit_amount=actual_returns,
        avg_duration=avg_duration,
        avg_amount=avg_amount,
        avg_payment_amount=avg_payment_amount,
        total_investments=len(filtered),
        active_investments=len(active),
        completed_investments=completed_count,
        late_investments=late_count,
        defaulted_investments=defaulted_count,
        status_distribution={
            "active": len(active),
            "completed": completed_count,
            "late": late_count,
            "defaulted": defaulted_count,
        },
        platform_distribution=_platform_shares(all_stats, names),
        platform_distribution_active=_platform_shares(_group_by_platform(active), names),
        platform_distribution_count=_platform_shares(all_stats, names, by_count=True),
    )
