from fastapi import APIRouter, HTTPException, status

from azfinance.schemas.investments import GeneratedCashflowOut, ScheduleRequest, ScheduleResponse
from azfinance.services.cashflow_schedule import calculate_number_of_payments, generate_cashflows
from azfinance.services.profit import validate_investment_financials


router = APIRouter(prefix="/investments", tags=["investments"])


@router.post("/schedule", response_model=ScheduleResponse)
def build_cashflow_schedule(payload: ScheduleRequest) -> ScheduleResponse:
    try:
        financials = validate_investment_financials(
            face_value=payload.face_value,
            expected_irr=payload.expected_irr,
            start_date=payload.start_date,
            end_date=payload.end_date,
            duration_months=payload.duration_months,
            total_expected_profit=payload.total_expected_profit,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    cashflows = generate_cashflows(
        start_date=financials.start_date,
        end_date=financials.end_date,
        face_value=financials.face_value,
        total_expected_profit=financials.total_expected_profit,
        distribution_frequency=payload.distribution_frequency,
        profit_payment_structure=payload.profit_payment_structure,
    )
    return ScheduleResponse(
        start_date=financials.start_date,
        end_date=financials.end_date,
        duration_months=financials.duration_months,
        total_expected_profit=financials.total_expected_profit,
        number_of_payments=calculate_number_of_payments(
            financials.start_date,
            financials.end_date,
            payload.distribution_frequency,
            payload.profit_payment_structure,
        ),
        cashflows=[GeneratedCashflowOut.model_validate(row) for row in cashflows],
    )
