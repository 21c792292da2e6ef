"""Cash flow routes: NPV, NFV, IRR."""

from fastapi import APIRouter

from fincalc.api.schemas import CashFlowEntry, IRRRequest, NPVRequest, ValueResponse
from fincalc.engine.cashflow import compute_irr, compute_nfv, compute_npv
from fincalc.engine.decimal_math import default_math
from fincalc.models.cashflow import CashFlow

router = APIRouter(prefix="/api/v1/cashflow", tags=["cashflow"])


def _to_cash_flows(entries: list[CashFlowEntry]) -> list[CashFlow]:
    return [CashFlow(amount=e.amount, count=e.count) for e in entries]


def _value(value) -> ValueResponse:
    return ValueResponse(value=value, display=default_math().format(value))


@router.post("/npv", response_model=ValueResponse)
def npv(req: NPVRequest):
    return _value(compute_npv(_to_cash_flows(req.cash_flows), req.rate))


@router.post("/nfv", response_model=ValueResponse)
def nfv(req: NPVRequest):
    return _value(compute_nfv(_to_cash_flows(req.cash_flows), req.rate))


@router.post("/irr", response_model=ValueResponse)
def irr(req: IRRRequest):
    """IRR in percent per period."""
    return _value(compute_irr(_to_cash_flows(req.cash_flows), guess=req.guess))
