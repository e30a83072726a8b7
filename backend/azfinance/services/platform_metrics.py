from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from azfinance.models.enums import DefaultSeverity, InvestmentStatus
from azfinance.models.investment import Investment
from azfinance.utils.decimal_math import pct, safe_pct


MEDIUM_SEVERITY_FROM_PCT = Decimal("5")
HIGH_SEVERITY_ABOVE_PCT = Decimal("10")


@dataclass(frozen=True)
class DefaultRateResult:
    rate: Decimal
    severity: DefaultSeverity
    defaulted_count: int
    total_count: int


def _severity(rate: Decimal) -> DefaultSeverity:
    if rate < MEDIUM_SEVERITY_FROM_PCT:
        return DefaultSeverity.low
    if rate <= HIGH_SEVERITY_ABOVE_PCT:
        return DefaultSeverity.medium
    return DefaultSeverity.high


def calculate_default_rate(investments: Sequence[Investment]) -> DefaultRateResult:
    """Share of a platform's investments whose stored status is `defaulted`."""
    if not investments:
        return DefaultRateResult(rate=pct(0), severity=DefaultSeverity.low, defaulted_count=0, total_count=0)
    defaulted_count = sum(1 for inv in investments if inv.status == InvestmentStatus.defaulted)
    total_count = len(investments)
    rate = safe_pct(Decimal(defaulted_count), Decimal(total_count))
    return DefaultRateResult(
        rate=rate,
        severity=_severity(rate),
        defaulted_count=defaulted_count,
        total_count=total_count,
    )


def default_rates_by_platform(investments: Sequence[Investment]) -> dict[str, DefaultRateResult]:
    grouped: dict[str, list[Investment]] = {}
    for inv in investments:
        grouped.setdefault(inv.platform_id, []).append(inv)
    return {platform_id: calculate_default_rate(rows) for platform_id, rows in grouped.items()}
