"""Loan amortization: per-period interest/principal split and AMORT totals.

Pure functions: Decimal in, dataclass out. No I/O. Nothing is rounded
here; callers quantize at display time.
"""

from decimal import Decimal

from fincalc.engine.decimal_math import ZERO, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError
from fincalc.models.amortization import AmortizationRow, AmortizationSummary


def _check_range(n: int, start_period: int, end_period: int) -> None:
    if not 1 <= start_period <= end_period <= n:
        raise InvalidInputError(
            f"Invalid amortization range {start_period}-{end_period} for {n} periods"
        )


def amortization_schedule(
    n: int,
    rate,
    principal,
    payment,
    start_period: int = 1,
    end_period: int | None = None,
    math: DecimalMath | None = None,
) -> list[AmortizationRow]:
    """Rows for periods start_period..end_period (1-based, inclusive).

    Args:
        n: Total number of payment periods
        rate: Periodic interest rate (e.g. 0.005 for 6%/yr paid monthly)
        principal: Opening loan balance
        payment: Level payment per period, same sign as principal
        start_period: First period to emit
        end_period: Last period to emit (defaults to n)

    Periods before start_period are still computed so that the opening
    balance and cumulative totals of the first emitted row are correct.
    """
    end_period = n if end_period is None else end_period
    _check_range(n, start_period, end_period)

    dm = math or default_math()
    rate, balance, payment = to_decimal(rate), to_decimal(principal), to_decimal(payment)

    rows: list[AmortizationRow] = []
    total_interest = ZERO
    total_principal = ZERO

    with dm.local():
        for period in range(1, end_period + 1):
            interest = balance * rate
            principal_paid = payment - interest
            balance -= principal_paid
            total_interest += interest
            total_principal += principal_paid

            if period >= start_period:
                rows.append(AmortizationRow(
                    period=period,
                    interest=interest,
                    principal=principal_paid,
                    balance=balance,
                    cumulative_interest=total_interest,
                    cumulative_principal=total_principal,
                ))

    return rows


def amortize_range(
    n: int,
    rate,
    principal,
    payment,
    start_period: int,
    end_period: int,
    math: DecimalMath | None = None,
) -> AmortizationSummary:
    """Interest and principal paid within a range, plus the balance after it."""
    rows = amortization_schedule(n, rate, principal, payment, start_period, end_period, math=math)
    dm = math or default_math()
    with dm.local():
        interest = sum((r.interest for r in rows), ZERO)
        principal_paid = sum((r.principal for r in rows), ZERO)
    return AmortizationSummary(
        start_period=start_period,
        end_period=end_period,
        interest=interest,
        principal=principal_paid,
        balance=rows[-1].balance,
    )
