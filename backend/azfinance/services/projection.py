from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from azfinance.models.scenario import ScenarioInputs
from azfinance.utils.dates import add_months, month_key, start_of_month
from azfinance.utils.decimal_math import HUNDRED, money, pct, safe_pct, whole


logger = logging.getLogger("azfinance.projection")

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True)
class GoalProjection:
    months: int
    monthly_rate_pct: Decimal
    projected_value: Decimal
    target_amount: Decimal
    required_monthly_deposit: Decimal
    monthly_gap: Decimal
    current_progress_pct: Decimal
    projected_progress_pct: Decimal


@dataclass(frozen=True)
class MonthlyTarget:
    month: date
    target_value: Decimal
    scenario_id: str | None = None
    generated: int = 1


def _step(value: Decimal, *, monthly_rate: Decimal, monthly_deposit: Decimal) -> Decimal:
    # deposits land at the end of each period, after that month's growth
    return value * (ONE + monthly_rate) + monthly_deposit


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def project_future_value(inputs: ScenarioInputs) -> Decimal:
    """Iterative monthly compounding with end-of-period deposits.

    Unrounded; quantize at the presentation boundary.
    """
    rate = inputs.monthly_rate
    deposit = _as_decimal(inputs.monthly_deposit)
    value = _as_decimal(inputs.initial_amount)
    for _ in range(inputs.months):
        value = _step(value, monthly_rate=rate, monthly_deposit=deposit)
    return value


def projection_path(inputs: ScenarioInputs) -> list[Decimal]:
    """Value after each month; index 0 is the initial amount."""
    rate = inputs.monthly_rate
    deposit = _as_decimal(inputs.monthly_deposit)
    value = _as_decimal(inputs.initial_amount)
    path = [value]
    for _ in range(inputs.months):
        value = _step(value, monthly_rate=rate, monthly_deposit=deposit)
        path.append(value)
    return path


def solve_required_monthly_deposit(inputs: ScenarioInputs) -> Decimal:
    """Monthly end-of-period deposit that grows `initial_amount` into `target_amount`.

    Closed-form reverse annuity: the future value of the initial amount is
    subtracted from the target and the remainder is divided by the annuity
    factor ((1 + r)^n - 1) / r. A degenerate horizon or a zero rate returns 0,
    as does a target the initial amount already reaches on its own.
    """
    rate = inputs.monthly_rate
    months = inputs.months
    if months == 0 or rate == 0:
        return ZERO

    growth = (ONE + rate) ** months
    future_value_of_initial = _as_decimal(inputs.initial_amount) * growth
    remaining = _as_decimal(inputs.target_amount) - future_value_of_initial
    if remaining <= 0:
        return ZERO

    annuity_factor = (growth - ONE) / rate
    if annuity_factor <= 0:
        return ZERO
    return max(ZERO, remaining / annuity_factor)


def scenario_expected_irr(weighted_apr: Decimal, fallback: Decimal = Decimal("12")) -> Decimal:
    """IRR assumption for the goal planner: the portfolio's APR when it has one."""
    return weighted_apr if weighted_apr > 0 else fallback


def build_goal_projection(
    inputs: ScenarioInputs,
    *,
    current_portfolio_value: Decimal | None = None,
    target_capital: Decimal | None = None,
) -> GoalProjection:
    """Goal summary for the planner widgets.

    Progress percentages are not clamped; values above 100 mean the goal is
    (or will be) exceeded.
    """
    target = _as_decimal(target_capital if target_capital is not None else inputs.target_amount)
    current = _as_decimal(current_portfolio_value if current_portfolio_value is not None else inputs.initial_amount)

    projected = project_future_value(inputs)
    required = solve_required_monthly_deposit(inputs)
    gap = max(ZERO, required - _as_decimal(inputs.monthly_deposit))
    logger.debug(
        "Goal projection over %d months: projected=%s required=%s",
        inputs.months,
        money(projected),
        money(required),
    )

    return GoalProjection(
        months=inputs.months,
        monthly_rate_pct=pct(inputs.monthly_rate * HUNDRED),
        projected_value=money(projected),
        target_amount=money(target),
        required_monthly_deposit=money(required),
        monthly_gap=money(gap),
        current_progress_pct=safe_pct(current, target),
        projected_progress_pct=safe_pct(projected, target),
    )


def generate_monthly_targets(
    inputs: ScenarioInputs,
    start_date: date | None = None,
    scenario_id: str | None = None,
) -> list[MonthlyTarget]:
    first_month = start_of_month(start_date or date.today())
    return [
        MonthlyTarget(
            month=add_months(first_month, index),
            target_value=whole(value),
            scenario_id=scenario_id,
        )
        for index, value in enumerate(projection_path(inputs))
    ]


def generate_targets_for_range(
    inputs: ScenarioInputs,
    start_date: date,
    end_date: date,
    scenario_id: str | None = None,
) -> list[MonthlyTarget]:
    first_month = start_of_month(start_date)
    return [
        target
        for target in generate_monthly_targets(inputs, start_date, scenario_id)
        if first_month <= target.month <= end_date
    ]


def interpolate_targets(
    start_value: Decimal,
    end_value: Decimal,
    months: int,
    start_date: date | None = None,
    scenario_id: str | None = None,
) -> list[MonthlyTarget]:
    """Straight-line path from `start_value` to `end_value`, one point per month."""
    first_month = start_of_month(start_date or date.today())
    start = _as_decimal(start_value)
    if months <= 0:
        return [MonthlyTarget(month=first_month, target_value=whole(start), scenario_id=scenario_id)]
    increment = (_as_decimal(end_value) - start) / Decimal(months)
    return [
        MonthlyTarget(
            month=add_months(first_month, index),
            target_value=whole(start + increment * index),
            scenario_id=scenario_id,
        )
        for index in range(months + 1)
    ]


def merge_targets(
    generated: Sequence[MonthlyTarget],
    existing: Iterable[MonthlyTarget],
) -> list[MonthlyTarget]:
    """Drop generated targets for months that already hold a manual entry."""
    manual_months = {month_key(row.month) for row in existing if row.generated == 0}
    return [row for row in generated if month_key(row.month) not in manual_months]
