"""Capital accumulation projection (CCIM-style).

Each year a share of last year's total value is reinvested (grows
accumulated capital) and a share is taken out as a safety cash flow.
Rates are given in percent.

Pure functions: Decimal in, dataclass out.
"""

from decimal import Decimal

from fincalc.engine.cashflow import compute_irr
from fincalc.engine.decimal_math import ONE, ZERO, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError
from fincalc.models.analysis import CapitalYear

HUNDRED = Decimal("100")
DEFAULT_YEARS = 10


def project_capital(
    reinvestment_pct,
    safety_pct,
    total_investment,
    years: int = DEFAULT_YEARS,
    math: DecimalMath | None = None,
) -> list[CapitalYear]:
    """Year-by-year projection. Returns years + 1 rows (year 0 = initial)."""
    if years < 1:
        raise InvalidInputError(f"Projection needs at least 1 year, got {years}")

    dm = math or default_math()
    investment = to_decimal(total_investment)

    with dm.local():
        reinvest_rate = dm.div(to_decimal(reinvestment_pct), HUNDRED)
        safety_rate = dm.div(to_decimal(safety_pct), HUNDRED)

        rows = [CapitalYear(
            year=0,
            investment_value=investment,
            accumulated_capital=ZERO,
            total_value=investment,
            reinvestment_amount=ZERO,
            safety_amount=ZERO,
        )]
        for year in range(1, years + 1):
            prev = rows[-1]
            reinvested = prev.total_value * reinvest_rate
            accumulated = prev.accumulated_capital + reinvested
            rows.append(CapitalYear(
                year=year,
                investment_value=investment,
                accumulated_capital=accumulated,
                total_value=investment + accumulated,
                reinvestment_amount=reinvested,
                safety_amount=prev.total_value * safety_rate,
            ))
    return rows


def _require_projection(rows: list[CapitalYear]) -> None:
    if len(rows) < 2:
        raise InvalidInputError("Need at least two projection rows (year 0 and year 1)")


def capital_cash_flows(rows: list[CapitalYear]) -> list[Decimal]:
    """Investor cash flows: -investment, yearly safety amounts, final value at exit."""
    _require_projection(rows)
    flows = [-rows[0].investment_value] + [r.safety_amount for r in rows[1:]]
    flows[-1] += rows[-1].total_value
    return flows


def capital_irr(rows: list[CapitalYear], math: DecimalMath | None = None) -> Decimal:
    """IRR of the projection in percent."""
    return compute_irr(capital_cash_flows(rows), math=math)


def payback_period(rows: list[CapitalYear], math: DecimalMath | None = None) -> Decimal | None:
    """Years until safety cash flows recover the investment.

    Interpolates linearly inside the payback year. None if never recovered.
    """
    _require_projection(rows)
    dm = math or default_math()
    with dm.local():
        cumulative = -rows[0].investment_value
        if cumulative >= 0:
            return ZERO
        for r in rows[1:]:
            previous = cumulative
            cumulative += r.safety_amount
            if cumulative >= 0:
                fraction = dm.div(abs(previous), r.safety_amount)
                return Decimal(r.year - 1) + fraction
    return None


def capital_roi(rows: list[CapitalYear], math: DecimalMath | None = None) -> Decimal:
    """Total return on the initial investment, percent."""
    _require_projection(rows)
    dm = math or default_math()
    investment = rows[0].investment_value
    with dm.local():
        return dm.div(rows[-1].total_value - investment, investment) * HUNDRED


def annualized_roi(rows: list[CapitalYear], math: DecimalMath | None = None) -> Decimal:
    """Compound annual growth of total value, percent."""
    _require_projection(rows)
    dm = math or default_math()
    years = len(rows) - 1
    with dm.local():
        growth = dm.div(rows[-1].total_value, rows[0].investment_value)
        return (dm.power(growth, dm.div(ONE, Decimal(years))) - ONE) * HUNDRED
