from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from azfinance.models.enums import CashTransactionType


CREDIT_TYPES = frozenset({CashTransactionType.deposit, CashTransactionType.distribution})
DEBIT_TYPES = frozenset({CashTransactionType.withdrawal, CashTransactionType.investment})


@dataclass(frozen=True)
class CashTransaction:
    id: str
    type: CashTransactionType
    amount: Decimal
    date: date
    source: str | None = None
    platform_id: str | None = None

    @property
    def signed_amount(self) -> Decimal:
        if self.type in CREDIT_TYPES:
            return self.amount
        if self.type in DEBIT_TYPES:
            return -self.amount
        return Decimal("0")
