"""Bond price from yield (closed form) and yield from price (Newton-Raphson).

Dates are calendar days with no time zone. Remaining life is measured on
an actual/365 basis and may be a fractional number of coupon periods:
coupons are discounted over whole periods, redemption over the exact
fractional count.
"""

from datetime import date
from decimal import Decimal

from fincalc.engine.decimal_math import ONE, ZERO, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError
from fincalc.engine.solver import SolverConfig, newton_raphson

DAYS_PER_YEAR = Decimal("365")
DEFAULT_REDEMPTION = Decimal("100")


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def coupon_periods(
    settlement: date,
    maturity: date,
    payments_per_year: int,
    math: DecimalMath | None = None,
) -> Decimal:
    """Coupon periods remaining: days / 365 * payments_per_year."""
    if settlement >= maturity:
        raise InvalidInputError(f"Settlement {settlement} must precede maturity {maturity}")
    if payments_per_year < 1:
        raise InvalidInputError(f"Payments per year must be >= 1, got {payments_per_year}")
    dm = math or default_math()
    with dm.local():
        return dm.div(Decimal(days_between(settlement, maturity)), DAYS_PER_YEAR) * payments_per_year


def bond_price(
    settlement: date,
    maturity: date,
    coupon_rate,
    yield_rate,
    redemption=DEFAULT_REDEMPTION,
    payments_per_year: int = 2,
    math: DecimalMath | None = None,
) -> Decimal:
    """Price per `redemption` of face given an annual yield.

    Args:
        coupon_rate: Annual coupon as a fraction of redemption (0.05 = 5%)
        yield_rate: Annual yield to maturity as a fraction
        redemption: Redemption value (100 = price quoted per 100 face)
        payments_per_year: Coupons per year (2 = semiannual)
    """
    dm = math or default_math()
    coupon_rate, yield_rate, redemption = (
        to_decimal(v) for v in (coupon_rate, yield_rate, redemption)
    )
    periods = coupon_periods(settlement, maturity, payments_per_year, math=dm)

    with dm.local():
        coupon = dm.div(coupon_rate * redemption, Decimal(payments_per_year))
        discount_base = ONE + dm.div(yield_rate, Decimal(payments_per_year))

        price = ZERO
        for k in range(1, int(periods) + 1):
            price += dm.div(coupon, dm.power(discount_base, k))
        price += dm.div(redemption, dm.power(discount_base, periods))
        return price


def bond_yield(
    settlement: date,
    maturity: date,
    coupon_rate,
    price,
    redemption=DEFAULT_REDEMPTION,
    payments_per_year: int = 2,
    math: DecimalMath | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """Annual yield to maturity that reproduces `price`.

    Newton-Raphson starting from the coupon rate.
    """
    dm = math or default_math()
    coupon_rate, price, redemption = (to_decimal(v) for v in (coupon_rate, price, redemption))

    def residual(y: Decimal) -> Decimal:
        return bond_price(
            settlement, maturity, coupon_rate, y, redemption, payments_per_year, math=dm
        ) - price

    # Validate dates/frequency up front rather than inside the first iteration.
    coupon_periods(settlement, maturity, payments_per_year, math=dm)
    return newton_raphson(residual, coupon_rate, math=dm, config=config)
