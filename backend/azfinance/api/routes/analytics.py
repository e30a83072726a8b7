from fastapi import APIRouter, Depends

from azfinance.api.deps import get_metrics_cache, resolve_as_of
from azfinance.core.config import Settings, get_settings
from azfinance.schemas.analytics import (
    CacheStatsOut,
    DashboardMetricsOut,
    DashboardRequest,
    DefaultRateOut,
    DefaultRateRequest,
    DefaultRateResponse,
    InvestmentStatusOut,
    StatusRequest,
    StatusResponse,
    StatusUpdateOut,
)
from azfinance.services.aggregation import DateRange, calculate_dashboard_metrics
from azfinance.services.classification import (
    check_all_investment_statuses,
    classify,
    is_defaulted,
    is_late,
    status_transition_message,
)
from azfinance.services.metrics_cache import MetricsCache, fingerprint
from azfinance.services.platform_metrics import default_rates_by_platform


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/dashboard", response_model=DashboardMetricsOut)
def get_dashboard_metrics(
    payload: DashboardRequest,
    settings: Settings = Depends(get_settings),
    cache: MetricsCache = Depends(get_metrics_cache),
) -> DashboardMetricsOut:
    as_of = resolve_as_of(payload.as_of)
    investments = tuple(row.to_domain() for row in payload.investments)
    cash_transactions = tuple(row.to_domain() for row in payload.cash_transactions)
    platforms = tuple(row.to_domain() for row in payload.platforms)
    cashflows = tuple(row.to_domain() for row in payload.cashflows)
    date_range = (
        DateRange(start=payload.date_range.start, end=payload.date_range.end)
        if payload.date_range is not None
        else None
    )

    key = fingerprint(
        investments,
        cash_transactions,
        platforms,
        cashflows,
        date_range,
        payload.platform_id,
        as_of,
        settings.default_after_days,
    )
    metrics = cache.get_or_compute(
        key,
        lambda: calculate_dashboard_metrics(
            investments,
            cash_transactions,
            platforms,
            cashflows,
            date_range,
            platform_id=payload.platform_id,
            as_of=as_of,
            default_after_days=settings.default_after_days,
        ),
    )
    return DashboardMetricsOut.model_validate(metrics)


@router.post("/statuses", response_model=StatusResponse)
def get_investment_statuses(
    payload: StatusRequest,
    settings: Settings = Depends(get_settings),
) -> StatusResponse:
    as_of = resolve_as_of(payload.as_of)
    investments = [row.to_domain() for row in payload.investments]
    cashflows = [row.to_domain() for row in payload.cashflows]
    threshold = settings.default_after_days

    statuses = [
        InvestmentStatusOut(
            investment_id=inv.id,
            stored_status=inv.status.value,
            overlay=classify(inv, cashflows, as_of=as_of, default_after_days=threshold).value,
            is_late=is_late(inv, cashflows, as_of=as_of),
            is_defaulted=is_defaulted(inv, cashflows, as_of=as_of, default_after_days=threshold),
        )
        for inv in investments
    ]
    stored = {inv.id: inv.status for inv in investments}
    updates = [
        StatusUpdateOut(
            investment_id=update.investment_id,
            new_status=update.new_status,
            late_date=update.late_date,
            defaulted_date=update.defaulted_date,
            message=status_transition_message(stored[update.investment_id], update.new_status),
        )
        for update in check_all_investment_statuses(
            investments,
            cashflows,
            as_of=as_of,
            default_after_days=threshold,
        )
    ]
    return StatusResponse(as_of=as_of, statuses=statuses, updates=updates)


@router.post("/platforms/default-rate", response_model=DefaultRateResponse)
def get_platform_default_rates(payload: DefaultRateRequest) -> DefaultRateResponse:
    names = {row.id: row.name for row in payload.platforms}
    rates = default_rates_by_platform([row.to_domain() for row in payload.investments])
    items = [
        DefaultRateOut(
            platform_id=platform_id,
            platform_name=names.get(platform_id, "Unknown"),
            rate=result.rate,
            severity=result.severity.value,
            defaulted_count=result.defaulted_count,
            total_count=result.total_count,
        )
        for platform_id, result in sorted(rates.items(), key=lambda item: item[1].rate, reverse=True)
    ]
    return DefaultRateResponse(items=items)


@router.post("/cache/invalidate", response_model=CacheStatsOut)
def invalidate_metrics_cache(cache: MetricsCache = Depends(get_metrics_cache)) -> CacheStatsOut:
    cache.invalidate()
    return CacheStatsOut.model_validate(cache.stats())
