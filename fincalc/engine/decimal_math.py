"""Decimal arithmetic substrate.

Every money/rate computation runs through a DecimalMath instance. The
instance owns its own decimal.Context (precision + rounding fixed at
construction); it never touches the process-wide context, so repeated or
concurrent calls cannot observe each other's settings.
"""

from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from functools import lru_cache

from fincalc.config import settings
from fincalc.engine.errors import DivisionByZeroError, DomainError, InvalidInputError

MIN_PRECISION = 12

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value) -> Decimal:
    """Convert a caller-supplied primitive to Decimal without binary drift.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not the
    nearest binary fraction. Strings must be plain numerals: no digit
    grouping. NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidInputError(f"Not a decimal number: {value!r}") from None
    else:
        raise InvalidInputError(f"Unsupported numeric type: {type(value).__name__}")
    if not result.is_finite():
        raise InvalidInputError(f"Expected a finite number, got {value!r}")
    return result


class DecimalMath:
    """Fixed-precision decimal operations bound to one explicit context."""

    def __init__(self, precision: int | None = None, rounding: str = ROUND_HALF_UP):
        prec = settings.decimal_precision if precision is None else precision
        if prec < MIN_PRECISION:
            raise ValueError(f"precision must be >= {MIN_PRECISION}, got {prec}")
        self._context = Context(
            prec=prec,
            rounding=rounding,
            traps=[InvalidOperation, DivisionByZero, Overflow],
        )

    def __repr__(self) -> str:
        return f"DecimalMath(precision={self.precision}, rounding={self.rounding})"

    @property
    def precision(self) -> int:
        return self._context.prec

    @property
    def rounding(self) -> str:
        return self._context.rounding

    def local(self):
        """Context manager applying this precision to operators in a block.

        localcontext() works on a copy and is thread-local.
        """
        return localcontext(self._context)

    # ---- Arithmetic ----

    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return self._context.add(a, b)

    def sub(self, a: Decimal, b: Decimal) -> Decimal:
        return self._context.subtract(a, b)

    def mul(self, a: Decimal, b: Decimal) -> Decimal:
        return self._context.multiply(a, b)

    def div(self, a: Decimal, b: Decimal) -> Decimal:
        if b.is_zero():
            raise DivisionByZeroError(f"Division of {a} by zero")
        return self._context.divide(a, b)

    def power(self, base: Decimal, exponent) -> Decimal:
        """base ** exponent.

        Integral exponents use exact repeated-squaring power (negative bases
        allowed). Non-integral exponents go through exp(y * ln(x)) and need
        a positive base.
        """
        exponent = to_decimal(exponent)
        if exponent.is_zero():
            return ONE
        if exponent == exponent.to_integral_value():
            if base.is_zero() and exponent < 0:
                raise DivisionByZeroError("Zero raised to a negative power")
            return self._context.power(base, int(exponent))
        if base <= 0:
            raise DomainError(f"Non-integral power of non-positive base {base}")
        return self.exp(self.mul(exponent, self.ln(base)))

    def ln(self, x: Decimal) -> Decimal:
        if x <= 0:
            raise DomainError(f"Logarithm of non-positive operand {x}")
        return self._context.ln(x)

    def exp(self, x: Decimal) -> Decimal:
        return self._context.exp(x)

    def sqrt(self, x: Decimal) -> Decimal:
        if x < 0:
            raise DomainError(f"Square root of negative operand {x}")
        return self._context.sqrt(x)

    def abs(self, x: Decimal) -> Decimal:
        return self._context.abs(x)

    # ---- Predicates ----

    @staticmethod
    def sign(x: Decimal) -> int:
        if x.is_zero():
            return 0
        return -1 if x.is_signed() else 1

    @staticmethod
    def is_zero(x: Decimal) -> bool:
        return x.is_zero()

    @staticmethod
    def is_negative(x: Decimal) -> bool:
        return x < 0

    @staticmethod
    def is_positive(x: Decimal) -> bool:
        return x > 0

    @staticmethod
    def compare(a: Decimal, b: Decimal) -> int:
        if a < b:
            return -1
        return 1 if a > b else 0

    # ---- Output boundary ----

    def round(self, value: Decimal, places: int) -> Decimal:
        """Quantize to `places` fractional digits using this instance's rounding."""
        quantum = ONE.scaleb(-places)
        # Wide enough that quantize never overflows the working precision.
        digits = max(self._context.prec, value.adjusted() + places + 2)
        result = value.quantize(quantum, rounding=self._context.rounding, context=Context(prec=digits))
        return result.copy_abs() if result.is_zero() else result

    def format(self, value: Decimal, places: int | None = None) -> str:
        places = settings.display_places if places is None else places
        return f"{self.round(value, places):f}"


@lru_cache(maxsize=None)
def default_math() -> DecimalMath:
    """Process-wide substrate built once from settings."""
    return DecimalMath(settings.decimal_precision)
