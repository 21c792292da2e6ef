"""Time value of money: N, I, PV, PMT, FV.

All five variables obey

    PV*(1+i)^N + PMT*b*((1+i)^N - 1)/i + FV = 0

with b = 1+i in begin mode, 1 otherwise. At i = 0 this degenerates to
PV + PMT*N + FV = 0. Pure functions; signs are the caller's problem.
"""

from decimal import Decimal

from fincalc.config import settings
from fincalc.engine.decimal_math import ONE, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import DomainError, InvalidInputError
from fincalc.engine.interest import annual_rate_pct, periodic_rate
from fincalc.engine.solver import SolverConfig, newton_raphson
from fincalc.models.tvm import TVMParameters, TVMVariable


def _begin_factor(rate: Decimal, begin_mode: bool) -> Decimal:
    return ONE + rate if begin_mode else ONE


def present_value(n, rate, pmt, fv, begin_mode: bool = False, math: DecimalMath | None = None) -> Decimal:
    dm = math or default_math()
    n, rate, pmt, fv = (to_decimal(v) for v in (n, rate, pmt, fv))
    with dm.local():
        if rate.is_zero():
            return -(fv + pmt * n)
        growth = dm.power(ONE + rate, n)
        annuity = dm.div(pmt * _begin_factor(rate, begin_mode) * (growth - ONE), rate)
        return -dm.div(fv + annuity, growth)


def future_value(n, rate, pmt, pv, begin_mode: bool = False, math: DecimalMath | None = None) -> Decimal:
    dm = math or default_math()
    n, rate, pmt, pv = (to_decimal(v) for v in (n, rate, pmt, pv))
    with dm.local():
        if rate.is_zero():
            return -(pv + pmt * n)
        growth = dm.power(ONE + rate, n)
        annuity = dm.div(pmt * _begin_factor(rate, begin_mode) * (growth - ONE), rate)
        return -(pv * growth + annuity)


def payment(n, rate, pv, fv, begin_mode: bool = False, math: DecimalMath | None = None) -> Decimal:
    dm = math or default_math()
    n, rate, pv, fv = (to_decimal(v) for v in (n, rate, pv, fv))
    with dm.local():
        if rate.is_zero():
            return -dm.div(pv + fv, n)
        growth = dm.power(ONE + rate, n)
        return -dm.div((pv * growth + fv) * rate, _begin_factor(rate, begin_mode) * (growth - ONE))


def number_of_periods(rate, pmt, pv, fv, begin_mode: bool = False, math: DecimalMath | None = None) -> Decimal:
    """Solve N = ln((A - FV) / (PV + A)) / ln(1 + i), A = PMT*b/i.

    Raises:
        DomainError: rate <= -1, or the ratio is <= 0 (no real N, e.g.
            PV and FV with incompatible signs) or undefined.
    """
    dm = math or default_math()
    rate, pmt, pv, fv = (to_decimal(v) for v in (rate, pmt, pv, fv))
    with dm.local():
        if rate.is_zero():
            return -dm.div(pv + fv, pmt)
        if rate <= -1:
            raise DomainError(f"No real N for periodic rate {rate} <= -1")
        annuity = dm.div(pmt * _begin_factor(rate, begin_mode), rate)
        if (pv + annuity).is_zero():
            raise DomainError("No real solution for N: PV exactly offsets the payment stream")
        ratio = dm.div(annuity - fv, pv + annuity)
        if ratio <= 0:
            raise DomainError("No real solution for N with these PV/PMT/FV signs")
        return dm.div(dm.ln(ratio), dm.ln(ONE + rate))


def interest_rate(
    n,
    pmt,
    pv,
    fv,
    begin_mode: bool = False,
    guess=None,
    math: DecimalMath | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """Periodic rate by Newton-Raphson on PV(i) - PV. No closed form exists."""
    dm = math or default_math()
    n, pmt, pv, fv = (to_decimal(v) for v in (n, pmt, pv, fv))

    def residual(rate: Decimal) -> Decimal:
        return present_value(n, rate, pmt, fv, begin_mode, math=dm) - pv

    start = settings.solver_initial_guess if guess is None else guess
    return newton_raphson(residual, start, math=dm, config=config)


def solve_tvm(
    params: TVMParameters,
    solve_for: TVMVariable,
    guess=None,
    math: DecimalMath | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """Solve for one TVM variable given the other four.

    `guess` only seeds the iterative rate solve (default 0.1 per period).
    Long horizons such as 360 monthly periods need a closer seed; from 0.1
    the first Newton step overshoots below -100%.
    """
    missing = [
        v.value for v in TVMVariable
        if v is not solve_for and params.get(v) is None
    ]
    if missing:
        raise InvalidInputError(f"Missing TVM inputs for {solve_for.value}: {', '.join(missing)}")

    p = params
    if solve_for is TVMVariable.N:
        return number_of_periods(p.rate, p.pmt, p.pv, p.fv, p.begin_mode, math=math)
    if solve_for is TVMVariable.RATE:
        return interest_rate(p.n, p.pmt, p.pv, p.fv, p.begin_mode, guess=guess, math=math, config=config)
    if solve_for is TVMVariable.PV:
        return present_value(p.n, p.rate, p.pmt, p.fv, p.begin_mode, math=math)
    if solve_for is TVMVariable.PMT:
        return payment(p.n, p.rate, p.pv, p.fv, p.begin_mode, math=math)
    return future_value(p.n, p.rate, p.pmt, p.pv, p.begin_mode, math=math)


def periods_from_years(years, periods_per_year: int | None = None, math: DecimalMath | None = None) -> Decimal:
    """xP/YR: years * payments per year."""
    dm = math or default_math()
    m = settings.periods_per_year if periods_per_year is None else periods_per_year
    if m < 1:
        raise InvalidInputError(f"Periods per year must be >= 1, got {m}")
    return dm.mul(to_decimal(years), Decimal(m))


def solve_tvm_annual(
    solve_for: TVMVariable,
    n=None,
    i_yr=None,
    pv=None,
    pmt=None,
    fv=None,
    periods_per_year: int | None = None,
    begin_mode: bool = False,
    math: DecimalMath | None = None,
) -> Decimal:
    """Calculator-style solve: the rate is I/YR, an annual percentage.

    I/YR is spread over P/YR payment periods; a solved rate comes back as
    I/YR as well.
    """
    dm = math or default_math()
    m = settings.periods_per_year if periods_per_year is None else periods_per_year
    rate = None if i_yr is None else periodic_rate(i_yr, m, math=dm)
    params = TVMParameters(
        n=None if n is None else to_decimal(n),
        rate=rate,
        pv=None if pv is None else to_decimal(pv),
        pmt=None if pmt is None else to_decimal(pmt),
        fv=None if fv is None else to_decimal(fv),
        begin_mode=begin_mode,
    )
    result = solve_tvm(params, solve_for, math=dm)
    if solve_for is TVMVariable.RATE:
        return annual_rate_pct(result, m, math=dm)
    return result
