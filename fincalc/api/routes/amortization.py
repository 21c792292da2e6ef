"""Amortization routes."""

from fastapi import APIRouter

from fincalc.api.schemas import (
    AmortizationRequest,
    AmortizationRowResponse,
    AmortizationScheduleResponse,
    AmortizationSummaryResponse,
)
from fincalc.engine.amortization import amortization_schedule, amortize_range

router = APIRouter(prefix="/api/v1/amortization", tags=["amortization"])


@router.post("/schedule", response_model=AmortizationScheduleResponse)
def schedule(req: AmortizationRequest):
    rows = amortization_schedule(
        req.n, req.rate, req.principal, req.payment, req.start_period, req.end_period
    )
    return AmortizationScheduleResponse(
        rows=[
            AmortizationRowResponse(
                period=r.period,
                interest=r.interest,
                principal=r.principal,
                balance=r.balance,
                cumulative_interest=r.cumulative_interest,
                cumulative_principal=r.cumulative_principal,
            )
            for r in rows
        ]
    )


@router.post("/summary", response_model=AmortizationSummaryResponse)
def summary(req: AmortizationRequest):
    """AMORT key: totals over start_period..end_period."""
    end_period = req.n if req.end_period is None else req.end_period
    s = amortize_range(req.n, req.rate, req.principal, req.payment, req.start_period, end_period)
    return AmortizationSummaryResponse(
        start_period=s.start_period,
        end_period=s.end_period,
        interest=s.interest,
        principal=s.principal,
        balance=s.balance,
    )
