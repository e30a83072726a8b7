from datetime import date
from decimal import Decimal

from azfinance.models.enums import CashflowType, DistributionFrequency, ProfitPaymentStructure
from azfinance.services.cashflow_schedule import calculate_number_of_payments, generate_cashflows


def _profit_rows(rows):
    return [row for row in rows if row.type == CashflowType.profit]


def test_quarterly_schedule_splits_profit_evenly() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 1),
        end_date=date(2025, 1, 1),
        face_value=Decimal("10000"),
        total_expected_profit=Decimal("1000"),
        distribution_frequency=DistributionFrequency.quarterly,
    )
    profits = _profit_rows(rows)
    assert [row.due_date for row in profits] == [
        date(2024, 4, 1),
        date(2024, 7, 1),
        date(2024, 10, 1),
        date(2025, 1, 1),
    ]
    assert all(row.amount == Decimal("250.00") for row in profits)

    principal = rows[-1]
    assert principal.type == CashflowType.principal
    assert principal.amount == Decimal("10000.00")
    assert principal.due_date == date(2025, 1, 2)


def test_last_profit_share_absorbs_rounding() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 4, 1),
        face_value=Decimal("5000"),
        total_expected_profit=Decimal("100"),
        distribution_frequency=DistributionFrequency.monthly,
    )
    amounts = [row.amount for row in _profit_rows(rows)]
    assert amounts == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(amounts) == Decimal("100")


def test_month_end_start_dates_do_not_drift() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 31),
        end_date=date(2024, 5, 31),
        face_value=Decimal("1000"),
        total_expected_profit=Decimal("40"),
        distribution_frequency=DistributionFrequency.monthly,
    )
    assert [row.due_date for row in _profit_rows(rows)] == [
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
        date(2024, 5, 31),
    ]


def test_term_shorter_than_interval_pays_once_at_maturity() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 10),
        end_date=date(2024, 1, 25),
        face_value=Decimal("1000"),
        total_expected_profit=Decimal("5"),
        distribution_frequency=DistributionFrequency.monthly,
    )
    assert [(row.type, row.due_date, row.amount) for row in rows] == [
        (CashflowType.profit, date(2024, 1, 25), Decimal("5.00")),
        (CashflowType.principal, date(2024, 1, 26), Decimal("1000.00")),
    ]


def test_at_maturity_frequency_pays_profit_and_principal_on_end_date() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 1),
        end_date=date(2026, 1, 1),
        face_value=Decimal("20000"),
        total_expected_profit=Decimal("3000"),
        distribution_frequency=DistributionFrequency.at_maturity,
    )
    assert [(row.type, row.due_date) for row in rows] == [
        (CashflowType.profit, date(2026, 1, 1)),
        (CashflowType.principal, date(2026, 1, 1)),
    ]


def test_profit_at_maturity_structure_rolls_into_one_payment() -> None:
    rows = generate_cashflows(
        start_date=date(2024, 1, 1),
        end_date=date(2025, 1, 1),
        face_value=Decimal("20000"),
        total_expected_profit=Decimal("2400"),
        distribution_frequency=DistributionFrequency.monthly,
        profit_payment_structure=ProfitPaymentStructure.at_maturity,
    )
    assert len(rows) == 1
    assert rows[0].amount == Decimal("22400.00")
    assert rows[0].due_date == date(2025, 1, 1)


def test_number_of_payments() -> None:
    assert calculate_number_of_payments(date(2024, 1, 1), date(2025, 1, 1), DistributionFrequency.quarterly) == 4
    assert calculate_number_of_payments(date(2024, 1, 1), date(2025, 1, 1), DistributionFrequency.monthly) == 12
    assert calculate_number_of_payments(date(2024, 1, 1), date(2024, 1, 20), DistributionFrequency.monthly) == 1
    assert calculate_number_of_payments(date(2024, 1, 1), date(2030, 1, 1), DistributionFrequency.at_maturity) == 1


def test_number_of_payments_matches_generated_schedule() -> None:
    terms = {
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 12, 15),
        "face_value": Decimal("10000"),
        "total_expected_profit": Decimal("900"),
        "distribution_frequency": DistributionFrequency.quarterly,
    }
    rows = generate_cashflows(**terms)
    assert len(_profit_rows(rows)) == 3
    assert calculate_number_of_payments(date(2024, 1, 1), date(2024, 12, 15), DistributionFrequency.quarterly) == 3

    rolled = generate_cashflows(**terms, profit_payment_structure=ProfitPaymentStructure.at_maturity)
    assert len(rolled) == 1
    assert (
        calculate_number_of_payments(
            date(2024, 1, 1),
            date(2024, 12, 15),
            DistributionFrequency.quarterly,
            ProfitPaymentStructure.at_maturity,
        )
        == 1
    )
