import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from azfinance.models.cash import CashTransaction
from azfinance.models.enums import (
    CashflowStatus,
    CashflowType,
    CashTransactionType,
    DistributionFrequency,
    InvestmentStatus,
)
from azfinance.models.investment import Cashflow, Investment
from azfinance.models.platform import Platform


class InvestmentIn(BaseModel):
    id: str = Field(min_length=1)
    platform_id: str = Field(min_length=1)
    name: str = ""
    face_value: Decimal = Field(ge=Decimal("0"))
    expected_irr: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    total_expected_profit: Decimal = Field(default=Decimal("0"))
    start_date: dt.date
    end_date: dt.date
    status: InvestmentStatus = InvestmentStatus.active
    distribution_frequency: DistributionFrequency | None = None
    late_date: dt.date | None = None

    def to_domain(self) -> Investment:
        return Investment(
            id=self.id,
            platform_id=self.platform_id,
            name=self.name,
            face_value=self.face_value,
            expected_irr=self.expected_irr,
            total_expected_profit=self.total_expected_profit,
            start_date=self.start_date,
            end_date=self.end_date,
            status=InvestmentStatus(self.status),
            distribution_frequency=self.distribution_frequency,
            late_date=self.late_date,
        )


class CashflowIn(BaseModel):
    id: str = Field(min_length=1)
    investment_id: str = Field(min_length=1)
    type: CashflowType = CashflowType.profit
    amount: Decimal
    due_date: dt.date
    status: CashflowStatus = CashflowStatus.upcoming
    received_date: dt.date | None = None

    @model_validator(mode="after")
    def check_received_date(self) -> "CashflowIn":
        received = self.status == CashflowStatus.received
        if received and self.received_date is None:
            raise ValueError("received_date is required when status is 'received'.")
        if not received and self.received_date is not None:
            raise ValueError("received_date must be empty unless status is 'received'.")
        return self

    def to_domain(self) -> Cashflow:
        return Cashflow(
            id=self.id,
            investment_id=self.investment_id,
            type=CashflowType(self.type),
            amount=self.amount,
            due_date=self.due_date,
            status=CashflowStatus(self.status),
            received_date=self.received_date,
        )


class CashTransactionIn(BaseModel):
    id: str = Field(min_length=1)
    type: CashTransactionType
    amount: Decimal = Field(gt=Decimal("0"))
    date: dt.date
    source: str | None = None
    platform_id: str | None = None

    def to_domain(self) -> CashTransaction:
        return CashTransaction(
            id=self.id,
            type=CashTransactionType(self.type),
            amount=self.amount,
            date=self.date,
            source=self.source,
            platform_id=self.platform_id,
        )


class PlatformIn(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    type: str = ""

    def to_domain(self) -> Platform:
        return Platform(id=self.id, name=self.name, type=self.type)


class DateRangeIn(BaseModel):
    start: dt.date
    end: dt.date

    @model_validator(mode="after")
    def check_order(self) -> "DateRangeIn":
        if self.end < self.start:
            raise ValueError("date_range.end must be on or after date_range.start.")
        return self
