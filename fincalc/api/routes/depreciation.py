"""Depreciation routes."""

from fastapi import APIRouter

from fincalc.api.schemas import DepreciationRequest, DepreciationResponse
from fincalc.engine.depreciation import depreciation

router = APIRouter(prefix="/api/v1", tags=["depreciation"])


@router.post("/depreciation", response_model=DepreciationResponse)
def depreciate(req: DepreciationRequest):
    result = depreciation(req.method, req.cost, req.salvage, req.life, req.period, req.factor)
    return DepreciationResponse(
        method=req.method,
        period_amount=result.period_amount,
        accumulated=result.accumulated,
        book_value=result.book_value,
    )
