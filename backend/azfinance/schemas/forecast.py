import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from azfinance.schemas.common import ORMModel
from azfinance.schemas.portfolio import CashflowIn


class ForecastRequest(BaseModel):
    cashflows: list[CashflowIn] = Field(default_factory=list)
    horizon_months: int | None = Field(default=None, ge=1, le=120)
    as_of: dt.date | None = None


class MonthlyForecastOut(ORMModel):
    month: str
    month_label: str
    principal: Decimal
    profit: Decimal
    total: Decimal
    date: dt.date


class PeriodTotalsOut(ORMModel):
    principal: Decimal
    profit: Decimal
    total: Decimal


class ForecastSummariesOut(ORMModel):
    month1: PeriodTotalsOut
    months3: PeriodTotalsOut
    months6: PeriodTotalsOut
    months12: PeriodTotalsOut
    months24: PeriodTotalsOut
    months60: PeriodTotalsOut


class ForecastResponse(BaseModel):
    horizon_months: int
    months: list[MonthlyForecastOut]
    summaries: ForecastSummariesOut
