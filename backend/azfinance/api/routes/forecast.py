from fastapi import APIRouter, Depends

from azfinance.api.deps import resolve_as_of
from azfinance.core.config import Settings, get_settings
from azfinance.schemas.forecast import (
    ForecastRequest,
    ForecastResponse,
    ForecastSummariesOut,
    MonthlyForecastOut,
)
from azfinance.services.forecast import calculate_forecast_summaries, calculate_monthly_forecast


router = APIRouter(prefix="/forecast", tags=["forecast"])


@router.post("/monthly", response_model=ForecastResponse)
def get_monthly_forecast(
    payload: ForecastRequest,
    settings: Settings = Depends(get_settings),
) -> ForecastResponse:
    horizon = payload.horizon_months or settings.forecast_horizon_months
    forecast = calculate_monthly_forecast(
        [row.to_domain() for row in payload.cashflows],
        horizon,
        as_of=resolve_as_of(payload.as_of),
    )
    return ForecastResponse(
        horizon_months=horizon,
        months=[MonthlyForecastOut.model_validate(row) for row in forecast],
        summaries=ForecastSummariesOut.model_validate(calculate_forecast_summaries(forecast)),
    )
