from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal


@dataclass(frozen=True)
class ScenarioInputs:
    initial_amount: Decimal
    monthly_deposit: Decimal
    expected_irr: Decimal
    target_amount: Decimal
    duration_years: Decimal

    @property
    def monthly_rate(self) -> Decimal:
        return Decimal(str(self.expected_irr)) / Decimal("100") / Decimal("12")

    @property
    def months(self) -> int:
        # Partial months are dropped so the simulator and the solver share one horizon.
        return max(0, int(Decimal(str(self.duration_years)) * 12))

    def with_deposit(self, monthly_deposit: Decimal) -> ScenarioInputs:
        return replace(self, monthly_deposit=monthly_deposit)
