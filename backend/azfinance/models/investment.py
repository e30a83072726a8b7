from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from azfinance.models.enums import (
    CashflowStatus,
    CashflowType,
    DistributionFrequency,
    InvestmentStatus,
)


@dataclass(frozen=True)
class Investment:
    id: str
    platform_id: str
    face_value: Decimal
    expected_irr: Decimal
    total_expected_profit: Decimal
    start_date: date
    end_date: date
    status: InvestmentStatus = InvestmentStatus.active
    name: str = ""
    distribution_frequency: DistributionFrequency | None = None
    late_date: date | None = None


@dataclass(frozen=True)
class Cashflow:
    id: str
    investment_id: str
    type: CashflowType
    amount: Decimal
    due_date: date
    status: CashflowStatus = CashflowStatus.upcoming
    received_date: date | None = None

    @property
    def is_received(self) -> bool:
        return self.status == CashflowStatus.received
