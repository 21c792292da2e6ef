"""Depreciation for one period: straight-line, declining balance, SOYD.

Pure functions. Each returns the amount for the requested period together
with the accumulated total and the book value at the end of that period.
"""

from decimal import Decimal

from fincalc.engine.decimal_math import ZERO, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError
from fincalc.models.depreciation import DepreciationMethod, DepreciationResult

DEFAULT_DB_FACTOR = Decimal("2")  # Double-declining balance


def _validate(cost: Decimal, salvage: Decimal, life: int, period: int) -> None:
    if life < 1:
        raise InvalidInputError(f"Useful life must be >= 1 period, got {life}")
    if not 1 <= period <= life:
        raise InvalidInputError(f"Period {period} outside useful life 1-{life}")
    if cost < salvage:
        raise InvalidInputError(f"Cost {cost} is below salvage value {salvage}")


def straight_line(cost, salvage, life: int, period: int, math: DecimalMath | None = None) -> DepreciationResult:
    dm = math or default_math()
    cost, salvage = to_decimal(cost), to_decimal(salvage)
    _validate(cost, salvage, life, period)

    with dm.local():
        per_period = dm.div(cost - salvage, Decimal(life))
        accumulated = per_period * period
        return DepreciationResult(
            period_amount=per_period,
            accumulated=accumulated,
            book_value=cost - accumulated,
        )


def declining_balance(
    cost,
    salvage,
    life: int,
    period: int,
    factor=DEFAULT_DB_FACTOR,
    math: DecimalMath | None = None,
) -> DepreciationResult:
    """rate = factor / life applied to the prior book value.

    Depreciation is clamped so book value never drops below salvage. Once
    salvage is reached the remaining periods depreciate nothing, rather than
    repeating the amount of the period that crossed salvage.
    """
    dm = math or default_math()
    cost, salvage, factor = to_decimal(cost), to_decimal(salvage), to_decimal(factor)
    _validate(cost, salvage, life, period)

    with dm.local():
        rate = dm.div(factor, Decimal(life))
        book_value = cost
        accumulated = ZERO
        current = ZERO

        for _ in range(1, period + 1):
            if book_value <= salvage:
                current = ZERO
                break
            current = book_value * rate
            if book_value - current < salvage:
                current = book_value - salvage
            book_value -= current
            accumulated += current

        return DepreciationResult(period_amount=current, accumulated=accumulated, book_value=book_value)


def sum_of_years_digits(cost, salvage, life: int, period: int, math: DecimalMath | None = None) -> DepreciationResult:
    """Period p is weighted (life - p + 1) / (life * (life + 1) / 2)."""
    dm = math or default_math()
    cost, salvage = to_decimal(cost), to_decimal(salvage)
    _validate(cost, salvage, life, period)

    with dm.local():
        depreciable = cost - salvage
        digits_sum = Decimal(life * (life + 1)) / 2

        def amount(p: int) -> Decimal:
            return dm.div(depreciable * (life - p + 1), digits_sum)

        accumulated = sum((amount(p) for p in range(1, period + 1)), ZERO)
        return DepreciationResult(
            period_amount=amount(period),
            accumulated=accumulated,
            book_value=cost - accumulated,
        )


def depreciation(
    method: DepreciationMethod,
    cost,
    salvage,
    life: int,
    period: int,
    factor=DEFAULT_DB_FACTOR,
    math: DecimalMath | None = None,
) -> DepreciationResult:
    """Dispatch on method. `factor` only applies to declining balance."""
    if method is DepreciationMethod.STRAIGHT_LINE:
        return straight_line(cost, salvage, life, period, math=math)
    if method is DepreciationMethod.DECLINING_BALANCE:
        return declining_balance(cost, salvage, life, period, factor, math=math)
    if method is DepreciationMethod.SUM_OF_YEARS_DIGITS:
        return sum_of_years_digits(cost, salvage, life, period, math=math)
    raise InvalidInputError(f"Unknown depreciation method: {method!r}")
