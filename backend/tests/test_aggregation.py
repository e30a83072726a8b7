from datetime import date, timedelta
from decimal import Decimal

from azfinance.models.cash import CashTransaction
from azfinance.models.enums import CashflowStatus, CashflowType, CashTransactionType, InvestmentStatus
from azfinance.models.investment import Cashflow, Investment
from azfinance.models.platform import Platform
from azfinance.services.aggregation import (
    DateRange,
    calculate_apr,
    calculate_dashboard_metrics,
    calculate_duration_months,
    calculate_total_cash,
)


AS_OF = date(2025, 6, 15)


def _investment(
    inv_id: str,
    face_value: str,
    profit: str,
    *,
    status: InvestmentStatus = InvestmentStatus.active,
    platform_id: str = "sukuk",
    start: date = date(2024, 1, 1),
    end: date = date(2025, 1, 1),
) -> Investment:
    return Investment(
        id=inv_id,
        platform_id=platform_id,
        face_value=Decimal(face_value),
        expected_irr=Decimal("12"),
        total_expected_profit=Decimal(profit),
        start_date=start,
        end_date=end,
        status=status,
    )


def _cashflow(
    cf_id: str,
    investment_id: str,
    amount: str,
    *,
    type: CashflowType = CashflowType.profit,
    status: CashflowStatus = CashflowStatus.received,
    due: date = date(2024, 12, 1),
) -> Cashflow:
    return Cashflow(
        id=cf_id,
        investment_id=investment_id,
        type=type,
        amount=Decimal(amount),
        due_date=due,
        status=status,
        received_date=due if status == CashflowStatus.received else None,
    )


def _cash(tx_id: str, type: CashTransactionType, amount: str, platform_id: str | None = None) -> CashTransaction:
    return CashTransaction(
        id=tx_id,
        type=type,
        amount=Decimal(amount),
        date=date(2024, 1, 1),
        source="transfer",
        platform_id=platform_id,
    )


def test_single_active_investment_scenario() -> None:
    metrics = calculate_dashboard_metrics(
        [_investment("inv-1", "100000", "12000")],
        [_cash("tx-1", CashTransactionType.deposit, "50000")],
        [Platform(id="sukuk", name="Sukuk", type="sukuk")],
        [_cashflow("cf-1", "inv-1", "12000")],
        as_of=AS_OF,
    )
    assert metrics.portfolio_value == Decimal("150000")
    assert metrics.actual_returns == Decimal("12000")
    assert metrics.expected_returns == Decimal("12000")
    assert metrics.returns_ratio == Decimal("100")
    assert metrics.weighted_apr == Decimal("12")
    assert metrics.portfolio_roi == Decimal("12")
    assert metrics.cash_ratio == Decimal("33.333333")
    assert metrics.total_profit_amount == metrics.actual_returns
    assert metrics.avg_duration == Decimal("12")
    assert metrics.avg_payment_amount == Decimal("12000")
    assert metrics.active_investments == 1
    assert metrics.platform_distribution[0].platform_name == "Sukuk"
    assert metrics.platform_distribution[0].percentage == Decimal("100")


def test_empty_collections_default_every_ratio_to_zero() -> None:
    metrics = calculate_dashboard_metrics([], [], [], [], as_of=AS_OF)
    for value in (
        metrics.portfolio_value,
        metrics.returns_ratio,
        metrics.cash_ratio,
        metrics.weighted_apr,
        metrics.historical_apr,
        metrics.portfolio_roi,
        metrics.avg_duration,
        metrics.avg_amount,
        metrics.avg_payment_amount,
    ):
        assert value.is_finite()
        assert value == 0
    assert metrics.platform_distribution == []
    assert metrics.status_distribution == {"active": 0, "completed": 0, "late": 0, "defaulted": 0}


def test_cash_balance_is_signed_sum() -> None:
    transactions = [
        _cash("d", CashTransactionType.deposit, "1000"),
        _cash("r", CashTransactionType.distribution, "250.50"),
        _cash("w", CashTransactionType.withdrawal, "300"),
        _cash("i", CashTransactionType.investment, "500"),
    ]
    assert calculate_total_cash(transactions) == Decimal("450.50")
    assert calculate_total_cash([]) == Decimal("0")


def test_cash_only_portfolio_and_negative_cash() -> None:
    metrics = calculate_dashboard_metrics(
        [],
        [_cash("w", CashTransactionType.withdrawal, "200")],
        [],
        [],
        as_of=AS_OF,
    )
    assert metrics.total_cash == Decimal("-200")
    assert metrics.portfolio_value == Decimal("-200")
    assert metrics.cash_ratio == Decimal("100")


def test_weighted_apr_uses_active_face_value_weights() -> None:
    investments = [
        _investment("a", "100000", "12000"),
        _investment("b", "300000", "36000", start=date(2024, 1, 1), end=date(2024, 7, 1)),
        _investment("done", "500000", "0", status=InvestmentStatus.completed),
    ]
    metrics = calculate_dashboard_metrics(investments, [], [], [], as_of=AS_OF)
    # a: 12% over 12 months, b: 12% over 6 months -> 24% annualized
    assert metrics.weighted_apr == Decimal("21")
    assert metrics.historical_apr == Decimal("9.333333")
    assert metrics.portfolio_value == Decimal("400000")


def test_apr_guards_and_duration_clamp() -> None:
    assert calculate_apr(Decimal("0"), Decimal("100"), 12) == 0
    assert calculate_apr(Decimal("100"), Decimal("10"), 0) == 0
    assert calculate_duration_months(date(2024, 5, 1), date(2024, 5, 20)) == 1
    assert calculate_duration_months(date(2024, 5, 1), date(2023, 5, 1)) == 1

    same_day = _investment("x", "1000", "10", start=date(2024, 5, 1), end=date(2024, 5, 1))
    metrics = calculate_dashboard_metrics([same_day], [], [], [], as_of=AS_OF)
    assert metrics.weighted_apr == Decimal("12")


def test_returns_only_count_received_profit_of_filtered_investments() -> None:
    investments = [_investment("inv-1", "100000", "10000")]
    cashflows = [
        _cashflow("p1", "inv-1", "2500"),
        _cashflow("p2", "inv-1", "2500", status=CashflowStatus.expected, due=date(2025, 9, 1)),
        _cashflow("pr", "inv-1", "100000", type=CashflowType.principal),
        _cashflow("other", "inv-x", "9999"),
    ]
    metrics = calculate_dashboard_metrics(investments, [], [], cashflows, as_of=AS_OF)
    assert metrics.actual_returns == Decimal("2500")
    assert metrics.returns_ratio == Decimal("25")
    assert metrics.portfolio_roi == Decimal("2.5")
    assert metrics.avg_payment_amount == Decimal("2500")


def test_date_range_filters_investments_but_not_cash() -> None:
    investments = [
        _investment("old", "50000", "5000", start=date(2023, 3, 1), end=date(2024, 3, 1)),
        _investment("new", "80000", "8000", start=date(2024, 2, 1), end=date(2025, 2, 1)),
    ]
    metrics = calculate_dashboard_metrics(
        investments,
        [_cash("d", CashTransactionType.deposit, "1000")],
        [],
        [],
        DateRange(start=date(2024, 1, 1), end=date(2024, 12, 31)),
        as_of=AS_OF,
    )
    assert metrics.total_investments == 1
    assert metrics.expected_returns == Decimal("8000")
    assert metrics.total_cash == Decimal("1000")
    assert metrics.portfolio_value == Decimal("81000")


def test_platform_filter_restricts_investments_and_cash() -> None:
    investments = [
        _investment("a", "1000", "100", platform_id="p1"),
        _investment("b", "2000", "200", platform_id="p2"),
    ]
    cash = [
        _cash("c1", CashTransactionType.deposit, "300", platform_id="p1"),
        _cash("c2", CashTransactionType.deposit, "700", platform_id="p2"),
        _cash("c3", CashTransactionType.deposit, "50"),
    ]
    filtered = calculate_dashboard_metrics(investments, cash, [], [], platform_id="p1", as_of=AS_OF)
    assert filtered.total_investments == 1
    assert filtered.total_cash == Decimal("300")
    assert filtered.cash_by_platform == {"p1": Decimal("300")}

    everything = calculate_dashboard_metrics(investments, cash, [], [], as_of=AS_OF)
    assert everything.total_cash == Decimal("1050")
    assert everything.cash_by_platform == {"p1": Decimal("300"), "p2": Decimal("700")}


def test_platform_distribution_sums_to_one_hundred_and_sorts_by_value() -> None:
    investments = [
        _investment("a", "33333.33", "0", platform_id="p1"),
        _investment("b", "100000", "0", platform_id="p2"),
        _investment("c", "12345.67", "0", platform_id="p3", status=InvestmentStatus.completed),
        _investment("d", "777.77", "0", platform_id="p1"),
    ]
    platforms = [Platform(id="p1", name="Manafa"), Platform(id="p2", name="Sukuk")]
    metrics = calculate_dashboard_metrics(investments, [], platforms, [], as_of=AS_OF)

    shares = metrics.platform_distribution
    assert [row.platform_id for row in shares] == ["p2", "p1", "p3"]
    assert shares[1].count == 2
    assert shares[2].platform_name == "Unknown"
    assert abs(sum(row.percentage for row in shares) - Decimal("100")) <= Decimal("0.0001")

    active_shares = metrics.platform_distribution_active
    assert [row.platform_id for row in active_shares] == ["p2", "p1"]
    assert abs(sum(row.percentage for row in active_shares) - Decimal("100")) <= Decimal("0.0001")

    by_count = metrics.platform_distribution_count
    assert by_count[0].platform_id == "p1"
    assert by_count[0].percentage == Decimal("50")


def test_status_counts_use_derived_late_and_defaulted() -> None:
    investments = [
        _investment("ok", "1000", "100"),
        _investment("late", "1000", "100"),
        _investment("gone", "1000", "100"),
        _investment("done", "1000", "100", status=InvestmentStatus.completed),
    ]
    cashflows = [
        _cashflow("c1", "ok", "10", status=CashflowStatus.upcoming, due=AS_OF + timedelta(days=30)),
        _cashflow("c2", "late", "10", status=CashflowStatus.expected, due=AS_OF - timedelta(days=10)),
        _cashflow("c3", "gone", "10", status=CashflowStatus.expected, due=AS_OF - timedelta(days=90)),
        _cashflow("c4", "done", "10", status=CashflowStatus.expected, due=AS_OF - timedelta(days=90)),
    ]
    metrics = calculate_dashboard_metrics(investments, [], [], cashflows, as_of=AS_OF)
    assert metrics.active_investments == 3
    assert metrics.completed_investments == 1
    assert metrics.late_investments == 2
    assert metrics.defaulted_investments == 1
    assert metrics.status_distribution["defaulted"] == 1


def test_average_duration_is_rounded_to_two_decimals() -> None:
    investments = [
        _investment("a", "1000", "0", start=date(2024, 1, 1), end=date(2025, 1, 1)),
        _investment("b", "2000", "0", start=date(2024, 1, 1), end=date(2024, 8, 1)),
        _investment("c", "3000", "0", start=date(2024, 1, 1), end=date(2024, 7, 1)),
    ]
    metrics = calculate_dashboard_metrics(investments, [], [], [], as_of=AS_OF)
    assert metrics.avg_duration == Decimal("8.33")
    assert metrics.avg_amount == Decimal("2000")


def test_metrics_are_idempotent() -> None:
    investments = [_investment("a", "1000", "120"), _investment("b", "2500", "300", platform_id="p2")]
    cashflows = [_cashflow("c", "a", "60"), _cashflow("d", "b", "100", status=CashflowStatus.expected)]
    cash = [_cash("x", CashTransactionType.deposit, "400")]
    first = calculate_dashboard_metrics(investments, cash, [], cashflows, as_of=AS_OF)
    second = calculate_dashboard_metrics(investments, cash, [], cashflows, as_of=AS_OF)
    assert first == second
