"""Bond routes."""

from fastapi import APIRouter

from fincalc.api.schemas import BondPriceRequest, BondYieldRequest, ValueResponse
from fincalc.engine.bond import bond_price, bond_yield
from fincalc.engine.decimal_math import default_math

router = APIRouter(prefix="/api/v1/bond", tags=["bond"])


@router.post("/price", response_model=ValueResponse)
def price(req: BondPriceRequest):
    value = bond_price(
        req.settlement,
        req.maturity,
        req.coupon_rate,
        req.yield_rate,
        req.redemption,
        req.payments_per_year,
    )
    return ValueResponse(value=value, display=default_math().format(value))


@router.post("/yield", response_model=ValueResponse)
def yield_to_maturity(req: BondYieldRequest):
    """Annual yield as a fraction; display is in percent."""
    dm = default_math()
    value = bond_yield(
        req.settlement,
        req.maturity,
        req.coupon_rate,
        req.price,
        req.redemption,
        req.payments_per_year,
    )
    return ValueResponse(value=value, display=dm.format(dm.mul(value, 100)))
