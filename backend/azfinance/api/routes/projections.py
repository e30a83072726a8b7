from fastapi import APIRouter, Depends

from azfinance.api.deps import resolve_as_of
from azfinance.core.config import Settings, get_settings
from azfinance.schemas.projections import (
    GoalProjectionOut,
    GoalRequest,
    GoalResponse,
    InterpolateRequest,
    MonthlyTargetOut,
    TargetsRequest,
    TargetsResponse,
)
from azfinance.services.projection import (
    build_goal_projection,
    generate_monthly_targets,
    generate_targets_for_range,
    interpolate_targets,
    merge_targets,
    scenario_expected_irr,
)
from azfinance.utils.decimal_math import money, pct


router = APIRouter(prefix="/projections", tags=["projections"])


@router.post("/goal", response_model=GoalResponse)
def run_goal_projection(
    payload: GoalRequest,
    settings: Settings = Depends(get_settings),
) -> GoalResponse:
    irr = scenario_expected_irr(payload.weighted_apr, settings.fallback_expected_irr)
    inputs = payload.scenario.to_domain(irr)
    goal = build_goal_projection(
        inputs,
        current_portfolio_value=payload.current_portfolio_value,
        target_capital=payload.target_capital,
    )
    return GoalResponse(
        assumptions={
            "initial_amount": money(inputs.initial_amount),
            "monthly_deposit": money(inputs.monthly_deposit),
            "expected_irr": pct(inputs.expected_irr),
            "target_amount": money(inputs.target_amount),
            "duration_years": inputs.duration_years,
        },
        goal=GoalProjectionOut.model_validate(goal),
    )


@router.post("/targets", response_model=TargetsResponse)
def build_monthly_targets(
    payload: TargetsRequest,
    settings: Settings = Depends(get_settings),
) -> TargetsResponse:
    irr = scenario_expected_irr(payload.weighted_apr, settings.fallback_expected_irr)
    inputs = payload.scenario.to_domain(irr)
    start_date = resolve_as_of(payload.start_date)
    if payload.end_date is not None:
        targets = generate_targets_for_range(inputs, start_date, payload.end_date, payload.scenario_id)
    else:
        targets = generate_monthly_targets(inputs, start_date, payload.scenario_id)
    targets = merge_targets(targets, [row.to_domain() for row in payload.existing])
    return TargetsResponse(items=[MonthlyTargetOut.model_validate(row) for row in targets])


@router.post("/targets/interpolate", response_model=TargetsResponse)
def build_interpolated_targets(payload: InterpolateRequest) -> TargetsResponse:
    targets = interpolate_targets(
        payload.start_value,
        payload.end_value,
        payload.months,
        resolve_as_of(payload.start_date),
        payload.scenario_id,
    )
    targets = merge_targets(targets, [row.to_domain() for row in payload.existing])
    return TargetsResponse(items=[MonthlyTargetOut.model_validate(row) for row in targets])
