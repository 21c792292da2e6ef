"""Interest conversion, break-even and capital accumulation routes."""

from fastapi import APIRouter

from fincalc.api.schemas import (
    BreakEvenRequest,
    BreakEvenResponse,
    CapitalProjectionRequest,
    CapitalProjectionResponse,
    CapitalYearResponse,
    InterestConversionRequest,
    ValueResponse,
)
from fincalc.engine.breakeven import break_even
from fincalc.engine.capital import (
    annualized_roi,
    capital_irr,
    capital_roi,
    payback_period,
    project_capital,
)
from fincalc.engine.decimal_math import default_math
from fincalc.engine.interest import effective_to_nominal, nominal_to_effective

router = APIRouter(prefix="/api/v1", tags=["analysis"])


@router.post("/interest/convert", response_model=ValueResponse)
def convert_interest(req: InterestConversionRequest):
    """NOM% <-> EFF%. Rates are fractions; display is in percent."""
    dm = default_math()
    if req.direction == "nominal_to_effective":
        value = nominal_to_effective(req.rate, req.periods_per_year)
    else:
        value = effective_to_nominal(req.rate, req.periods_per_year)
    return ValueResponse(value=value, display=dm.format(dm.mul(value, 100)))


@router.post("/breakeven", response_model=BreakEvenResponse)
def breakeven(req: BreakEvenRequest):
    result = break_even(req.fixed_cost, req.variable_cost, req.price, req.expected_sales)
    return BreakEvenResponse(
        units=result.units,
        sales=result.sales,
        contribution_margin_ratio=result.contribution_margin_ratio,
        margin_of_safety=result.margin_of_safety,
    )


@router.post("/capital/projection", response_model=CapitalProjectionResponse)
def capital_projection(req: CapitalProjectionRequest):
    rows = project_capital(req.reinvestment_pct, req.safety_pct, req.total_investment, req.years)
    return CapitalProjectionResponse(
        rows=[
            CapitalYearResponse(
                year=r.year,
                investment_value=r.investment_value,
                accumulated_capital=r.accumulated_capital,
                total_value=r.total_value,
                reinvestment_amount=r.reinvestment_amount,
                safety_amount=r.safety_amount,
            )
            for r in rows
        ],
        irr=capital_irr(rows),
        payback_period=payback_period(rows),
        roi=capital_roi(rows),
        annualized_roi=annualized_roi(rows),
    )
