import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from azfinance.models.enums import CashflowType, DistributionFrequency, ProfitPaymentStructure
from azfinance.schemas.common import ORMModel


class ScheduleRequest(BaseModel):
    face_value: Decimal = Field(gt=Decimal("0"))
    expected_irr: Decimal = Field(ge=Decimal("0"))
    start_date: dt.date
    end_date: dt.date | None = None
    duration_months: int | None = Field(default=None, ge=1, le=600)
    total_expected_profit: Decimal | None = Field(default=None, ge=Decimal("0"))
    distribution_frequency: DistributionFrequency = DistributionFrequency.quarterly
    profit_payment_structure: ProfitPaymentStructure = ProfitPaymentStructure.periodic


class GeneratedCashflowOut(ORMModel):
    due_date: dt.date
    amount: Decimal
    type: CashflowType


class ScheduleResponse(BaseModel):
    start_date: dt.date
    end_date: dt.date
    duration_months: int
    total_expected_profit: Decimal
    number_of_payments: int
    cashflows: list[GeneratedCashflowOut]
