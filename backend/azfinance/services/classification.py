from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from azfinance.models.enums import InvestmentStatus, StatusOverlay
from azfinance.models.investment import Cashflow, Investment
from azfinance.utils.dates import days_past_due


DEFAULT_AFTER_DAYS = 60

_UNTRACKED_STATUSES = {InvestmentStatus.completed, InvestmentStatus.pending}

_TRANSITION_MESSAGES = {
    ("active", "late"): "Investment marked as late due to overdue payment",
    ("late", "defaulted"): "Investment marked as defaulted after the grace period",
    ("active", "defaulted"): "Investment marked as defaulted after the grace period",
    ("active", "completed"): "Investment completed - all payments received",
    ("late", "completed"): "Investment completed - all payments received",
    ("defaulted", "completed"): "Investment completed - all payments received",
    ("late", "active"): "Investment back to active status",
    ("defaulted", "active"): "Investment back to active status",
}


@dataclass(frozen=True)
class StatusUpdate:
    investment_id: str
    new_status: InvestmentStatus
    late_date: date | None = None
    defaulted_date: date | None = None


def _own_cashflows(investment: Investment, cashflows: Iterable[Cashflow]) -> list[Cashflow]:
    return [cf for cf in cashflows if cf.investment_id == investment.id]


def _overdue(cashflows: Iterable[Cashflow], today: date) -> list[Cashflow]:
    return [cf for cf in cashflows if not cf.is_received and cf.due_date < today]


def is_late(
    investment: Investment,
    cashflows: Iterable[Cashflow],
    *,
    as_of: date | None = None,
) -> bool:
    if investment.status in _UNTRACKED_STATUSES:
        return False
    today = as_of or date.today()
    return bool(_overdue(_own_cashflows(investment, cashflows), today))


def is_defaulted(
    investment: Investment,
    cashflows: Iterable[Cashflow],
    *,
    as_of: date | None = None,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> bool:
    if investment.status != InvestmentStatus.active:
        return False
    today = as_of or date.today()
    return any(
        not cf.is_received and days_past_due(cf.due_date, today) > default_after_days
        for cf in _own_cashflows(investment, cashflows)
    )


def classify(
    investment: Investment,
    cashflows: Sequence[Cashflow],
    *,
    as_of: date | None = None,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> StatusOverlay:
    """Derived overlay on top of the stored lifecycle status. Never persisted."""
    today = as_of or date.today()
    if is_defaulted(investment, cashflows, as_of=today, default_after_days=default_after_days):
        return StatusOverlay.defaulted
    if is_late(investment, cashflows, as_of=today):
        return StatusOverlay.late
    return StatusOverlay.on_time


def determine_investment_status(
    investment: Investment,
    cashflows: Sequence[Cashflow],
    *,
    as_of: date | None = None,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> StatusUpdate:
    """Suggest the lifecycle status an investment should move to.

    `cashflows` may be the full collection; only rows of this investment count.
    All received -> completed, nothing overdue -> active, oldest overdue
    payment beyond `default_after_days` -> defaulted, otherwise late.
    """
    today = as_of or date.today()
    own = _own_cashflows(investment, cashflows)

    if own and all(cf.is_received for cf in own):
        return StatusUpdate(investment_id=investment.id, new_status=InvestmentStatus.completed)

    overdue = _overdue(own, today)
    if not overdue:
        return StatusUpdate(investment_id=investment.id, new_status=InvestmentStatus.active)

    oldest_due = min(cf.due_date for cf in overdue)
    late_date = investment.late_date or oldest_due
    if days_past_due(oldest_due, today) > default_after_days:
        return StatusUpdate(
            investment_id=investment.id,
            new_status=InvestmentStatus.defaulted,
            late_date=late_date,
            defaulted_date=oldest_due + timedelta(days=default_after_days),
        )
    return StatusUpdate(
        investment_id=investment.id,
        new_status=InvestmentStatus.late,
        late_date=late_date,
    )


def check_all_investment_statuses(
    investments: Iterable[Investment],
    cashflows: Sequence[Cashflow],
    *,
    as_of: date | None = None,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> list[StatusUpdate]:
    today = as_of or date.today()
    updates: list[StatusUpdate] = []
    for investment in investments:
        # pending ones have not started paying out; completed ones only change by hand
        if investment.status in _UNTRACKED_STATUSES:
            continue
        update = determine_investment_status(
            investment,
            cashflows,
            as_of=today,
            default_after_days=default_after_days,
        )
        if update.new_status != investment.status:
            updates.append(update)
    return updates


def status_transition_message(old_status: str, new_status: str) -> str:
    old_value = getattr(old_status, "value", old_status)
    new_value = getattr(new_status, "value", new_status)
    message = _TRANSITION_MESSAGES.get((old_value, new_value))
    if message is None:
        return f"Status changed from {old_value} to {new_value}"
    return message
