"""Interest rate conversions (NOM%/EFF% and I/YR <-> periodic rate).

Rates are fractions (0.06 = 6%) except where a name ends in _pct.
"""

from decimal import Decimal

from fincalc.engine.decimal_math import ONE, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError

HUNDRED = Decimal("100")


def _check_periods_per_year(periods_per_year: int) -> int:
    if periods_per_year < 1:
        raise InvalidInputError(f"Periods per year must be >= 1, got {periods_per_year}")
    return periods_per_year


def nominal_to_effective(nominal, periods_per_year: int, math: DecimalMath | None = None) -> Decimal:
    """(1 + nominal/m)^m - 1"""
    dm = math or default_math()
    m = _check_periods_per_year(periods_per_year)
    with dm.local():
        return dm.power(ONE + dm.div(to_decimal(nominal), Decimal(m)), m) - ONE


def effective_to_nominal(effective, periods_per_year: int, math: DecimalMath | None = None) -> Decimal:
    """((1 + effective)^(1/m) - 1) * m"""
    dm = math or default_math()
    m = _check_periods_per_year(periods_per_year)
    with dm.local():
        root = dm.power(ONE + to_decimal(effective), dm.div(ONE, Decimal(m)))
        return (root - ONE) * m


def periodic_rate(annual_pct, periods_per_year: int, math: DecimalMath | None = None) -> Decimal:
    """I/YR (annual percent) -> rate per payment period as a fraction."""
    dm = math or default_math()
    m = _check_periods_per_year(periods_per_year)
    with dm.local():
        return dm.div(to_decimal(annual_pct), HUNDRED * m)


def annual_rate_pct(rate, periods_per_year: int, math: DecimalMath | None = None) -> Decimal:
    """Periodic fraction -> I/YR (annual percent)."""
    dm = math or default_math()
    m = _check_periods_per_year(periods_per_year)
    with dm.local():
        return to_decimal(rate) * m * HUNDRED
