from azfinance.models.cash import CashTransaction
from azfinance.models.enums import (
    CashflowStatus,
    CashflowType,
    CashTransactionType,
    DefaultSeverity,
    DistributionFrequency,
    InvestmentStatus,
    ProfitPaymentStructure,
    StatusOverlay,
)
from azfinance.models.investment import Cashflow, Investment
from azfinance.models.platform import Platform
from azfinance.models.scenario import ScenarioInputs

__all__ = [
    "CashTransaction",
    "CashTransactionType",
    "Cashflow",
    "CashflowStatus",
    "CashflowType",
    "DefaultSeverity",
    "DistributionFrequency",
    "Investment",
    "InvestmentStatus",
    "Platform",
    "ProfitPaymentStructure",
    "ScenarioInputs",
    "StatusOverlay",
]
