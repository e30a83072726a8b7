import enum


class InvestmentStatus(str, enum.Enum):
    pending = "pending"
    active = "active"
    completed = "completed"
    late = "late"
    defaulted = "defaulted"


class StatusOverlay(str, enum.Enum):
    on_time = "on_time"
    late = "late"
    defaulted = "defaulted"


class CashflowType(str, enum.Enum):
    principal = "principal"
    profit = "profit"


class CashflowStatus(str, enum.Enum):
    upcoming = "upcoming"
    expected = "expected"
    received = "received"


class CashTransactionType(str, enum.Enum):
    deposit = "deposit"
    withdrawal = "withdrawal"
    investment = "investment"
    distribution = "distribution"


class DistributionFrequency(str, enum.Enum):
    monthly = "monthly"
    quarterly = "quarterly"
    semi_annually = "semi_annually"
    annually = "annually"
    at_maturity = "at_maturity"


class ProfitPaymentStructure(str, enum.Enum):
    periodic = "periodic"
    at_maturity = "at_maturity"


class DefaultSeverity(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
