import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from azfinance.models.scenario import ScenarioInputs
from azfinance.schemas.common import ORMModel
from azfinance.services.projection import MonthlyTarget


class ScenarioInputsIn(BaseModel):
    initial_amount: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    monthly_deposit: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    # omitted -> the portfolio's weighted APR, then the configured fallback
    expected_irr: Decimal | None = Field(default=None, ge=Decimal("0"))
    target_amount: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    duration_years: Decimal = Field(default=Decimal("0"), ge=Decimal("0"), le=Decimal("100"))

    def to_domain(self, expected_irr: Decimal) -> ScenarioInputs:
        return ScenarioInputs(
            initial_amount=self.initial_amount,
            monthly_deposit=self.monthly_deposit,
            expected_irr=self.expected_irr if self.expected_irr is not None else expected_irr,
            target_amount=self.target_amount,
            duration_years=self.duration_years,
        )


class GoalRequest(BaseModel):
    scenario: ScenarioInputsIn
    weighted_apr: Decimal = Field(default=Decimal("0"))
    current_portfolio_value: Decimal | None = None
    target_capital: Decimal | None = Field(default=None, ge=Decimal("0"))


class GoalProjectionOut(ORMModel):
    months: int
    monthly_rate_pct: Decimal
    projected_value: Decimal
    target_amount: Decimal
    required_monthly_deposit: Decimal
    monthly_gap: Decimal
    current_progress_pct: Decimal
    projected_progress_pct: Decimal


class GoalResponse(BaseModel):
    assumptions: dict[str, Any]
    goal: GoalProjectionOut


class MonthlyTargetIn(BaseModel):
    month: dt.date
    target_value: Decimal
    scenario_id: str | None = None
    generated: int = Field(default=0, ge=0, le=1)

    def to_domain(self) -> MonthlyTarget:
        return MonthlyTarget(
            month=self.month,
            target_value=self.target_value,
            scenario_id=self.scenario_id,
            generated=self.generated,
        )


class TargetsRequest(BaseModel):
    scenario: ScenarioInputsIn
    weighted_apr: Decimal = Field(default=Decimal("0"))
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    scenario_id: str | None = Field(default=None, max_length=255)
    # manual months already stored by the caller are left out of the result
    existing: list[MonthlyTargetIn] = Field(default_factory=list)


class InterpolateRequest(BaseModel):
    start_value: Decimal
    end_value: Decimal
    months: int = Field(ge=0, le=1200)
    start_date: dt.date | None = None
    scenario_id: str | None = Field(default=None, max_length=255)
    existing: list[MonthlyTargetIn] = Field(default_factory=list)


class MonthlyTargetOut(ORMModel):
    month: dt.date
    target_value: Decimal
    scenario_id: str | None = None
    generated: int


class TargetsResponse(BaseModel):
    items: list[MonthlyTargetOut]
