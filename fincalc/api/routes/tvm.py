"""Time value of money routes."""

from fastapi import APIRouter

from fincalc.api.schemas import TVMAnnualRequest, TVMResponse, TVMSolveRequest
from fincalc.engine.decimal_math import default_math
from fincalc.engine.tvm import solve_tvm, solve_tvm_annual
from fincalc.models.tvm import TVMParameters

router = APIRouter(prefix="/api/v1/tvm", tags=["tvm"])


@router.post("/solve", response_model=TVMResponse)
def solve(req: TVMSolveRequest):
    """Solve for one of N, rate, PV, PMT, FV given the other four."""
    params = TVMParameters(
        n=req.n,
        rate=req.rate,
        pv=req.pv,
        pmt=req.pmt,
        fv=req.fv,
        begin_mode=req.begin_mode,
    )
    value = solve_tvm(params, req.solve_for, guess=req.guess)
    return TVMResponse(solve_for=req.solve_for, value=value, display=default_math().format(value))


@router.post("/solve-annual", response_model=TVMResponse)
def solve_annual(req: TVMAnnualRequest):
    """Same solve, with the rate entered as I/YR over P/YR periods."""
    value = solve_tvm_annual(
        req.solve_for,
        n=req.n,
        i_yr=req.i_yr,
        pv=req.pv,
        pmt=req.pmt,
        fv=req.fv,
        periods_per_year=req.periods_per_year,
        begin_mode=req.begin_mode,
    )
    return TVMResponse(solve_for=req.solve_for, value=value, display=default_math().format(value))
