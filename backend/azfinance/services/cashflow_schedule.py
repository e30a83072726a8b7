from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from azfinance.models.enums import CashflowType, DistributionFrequency, ProfitPaymentStructure
from azfinance.utils.dates import add_months
from azfinance.utils.decimal_math import money


MONTHS_INTERVAL = {
    DistributionFrequency.monthly: 1,
    DistributionFrequency.quarterly: 3,
    DistributionFrequency.semi_annually: 6,
    DistributionFrequency.annually: 12,
}


@dataclass(frozen=True)
class GeneratedCashflow:
    due_date: date
    amount: Decimal
    type: CashflowType


def months_interval(frequency: DistributionFrequency) -> int:
    return MONTHS_INTERVAL.get(frequency, 12)


def _payment_dates(start_date: date, end_date: date, interval: int) -> list[date]:
    # offsets are taken from the start date so month-end days do not drift
    dates: list[date] = []
    step = 1
    current = add_months(start_date, interval)
    while current <= end_date:
        dates.append(current)
        step += 1
        current = add_months(start_date, interval * step)
    return dates


def _split_evenly(total: Decimal, parts: int) -> list[Decimal]:
    """Equal cent shares; the last share absorbs the rounding remainder."""
    base = money(total / Decimal(parts))
    shares = [base] * (parts - 1)
    shares.append(money(total - base * (parts - 1)))
    return shares


def generate_cashflows(
    *,
    start_date: date,
    end_date: date,
    face_value: Decimal,
    total_expected_profit: Decimal,
    distribution_frequency: DistributionFrequency,
    profit_payment_structure: ProfitPaymentStructure = ProfitPaymentStructure.periodic,
) -> list[GeneratedCashflow]:
    face = money(face_value)
    profit = money(total_expected_profit)

    if distribution_frequency == DistributionFrequency.at_maturity:
        rows: list[GeneratedCashflow] = []
        if profit > 0:
            rows.append(GeneratedCashflow(due_date=end_date, amount=profit, type=CashflowType.profit))
        rows.append(GeneratedCashflow(due_date=end_date, amount=face, type=CashflowType.principal))
        return rows

    if profit_payment_structure == ProfitPaymentStructure.at_maturity:
        return [
            GeneratedCashflow(due_date=end_date, amount=money(face + profit), type=CashflowType.principal)
        ]

    payment_dates = _payment_dates(start_date, end_date, months_interval(distribution_frequency))
    if not payment_dates:
        payment_dates = [end_date]

    rows = [
        GeneratedCashflow(due_date=due, amount=share, type=CashflowType.profit)
        for due, share in zip(payment_dates, _split_evenly(profit, len(payment_dates)))
    ]
    # principal settles the day after the final profit distribution
    rows.append(
        GeneratedCashflow(
            due_date=payment_dates[-1] + timedelta(days=1),
            amount=face,
            type=CashflowType.principal,
        )
    )
    return sorted(rows, key=lambda row: row.due_date)


def calculate_number_of_payments(
    start_date: date,
    end_date: date,
    frequency: DistributionFrequency,
    profit_payment_structure: ProfitPaymentStructure = ProfitPaymentStructure.periodic,
) -> int:
    """Profit payments `generate_cashflows` produces for the same terms."""
    if frequency == DistributionFrequency.at_maturity:
        return 1
    if profit_payment_structure == ProfitPaymentStructure.at_maturity:
        return 1
    return max(1, len(_payment_dates(start_date, end_date, months_interval(frequency))))
