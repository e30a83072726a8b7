import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from azfinance.models.enums import InvestmentStatus
from azfinance.schemas.common import ORMModel
from azfinance.schemas.portfolio import CashflowIn, CashTransactionIn, DateRangeIn, InvestmentIn, PlatformIn


class DashboardRequest(BaseModel):
    investments: list[InvestmentIn] = Field(default_factory=list)
    cash_transactions: list[CashTransactionIn] = Field(default_factory=list)
    platforms: list[PlatformIn] = Field(default_factory=list)
    cashflows: list[CashflowIn] = Field(default_factory=list)
    date_range: DateRangeIn | None = None
    platform_id: str | None = None
    as_of: dt.date | None = None


class PlatformShareOut(ORMModel):
    platform_id: str
    platform_name: str
    value: Decimal
    count: int
    percentage: Decimal


class DashboardMetricsOut(ORMModel):
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
    platform_distribution: list[PlatformShareOut]
    platform_distribution_active: list[PlatformShareOut]
    platform_distribution_count: list[PlatformShareOut]


class StatusRequest(BaseModel):
    investments: list[InvestmentIn] = Field(default_factory=list)
    cashflows: list[CashflowIn] = Field(default_factory=list)
    as_of: dt.date | None = None


class InvestmentStatusOut(BaseModel):
    investment_id: str
    stored_status: str
    overlay: str
    is_late: bool
    is_defaulted: bool


class StatusUpdateOut(ORMModel):
    investment_id: str
    new_status: InvestmentStatus
    late_date: dt.date | None = None
    defaulted_date: dt.date | None = None
    message: str = ""


class StatusResponse(BaseModel):
    as_of: dt.date
    statuses: list[InvestmentStatusOut]
    updates: list[StatusUpdateOut]


class DefaultRateRequest(BaseModel):
    investments: list[InvestmentIn] = Field(default_factory=list)
    platforms: list[PlatformIn] = Field(default_factory=list)


class DefaultRateOut(BaseModel):
    platform_id: str
    platform_name: str
    rate: Decimal
    severity: str
    defaulted_count: int
    total_count: int


class DefaultRateResponse(BaseModel):
    items: list[DefaultRateOut]


class CacheStatsOut(ORMModel):
    hits: int
    misses: int
    size: int
    max_entries: int
