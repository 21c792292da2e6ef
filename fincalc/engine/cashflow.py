"""Discounted cash-flow analysis: NPV, NFV and IRR over CFj/Nj entries.

Pure functions. Period 0 is conventionally the (negative) initial outlay.
"""

from decimal import Decimal
from typing import Sequence

from fincalc.config import settings
from fincalc.engine.decimal_math import ONE, ZERO, DecimalMath, default_math, to_decimal
from fincalc.engine.errors import InvalidInputError
from fincalc.engine.solver import SolverConfig, newton_raphson
from fincalc.models.cashflow import CashFlow

HUNDRED = Decimal("100")


def expand_cash_flows(entries: Sequence[CashFlow | Decimal]) -> list[Decimal]:
    """Flatten CFj entries into one amount per period.

    A bare number counts as a single period.
    """
    flat: list[Decimal] = []
    for entry in entries:
        if isinstance(entry, CashFlow):
            flat.extend([to_decimal(entry.amount)] * entry.count)
        else:
            flat.append(to_decimal(entry))
    return flat


def compute_npv(
    cash_flows: Sequence[CashFlow | Decimal],
    rate,
    math: DecimalMath | None = None,
) -> Decimal:
    """Sum of cf[i] / (1 + rate)^i for i = 0, 1, ...

    Only meaningful for rate > -1. At exactly -1 the discount factor is zero
    and DivisionByZeroError propagates; below -1 the sum is computed but has
    no financial meaning.
    """
    dm = math or default_math()
    rate = to_decimal(rate)
    with dm.local():
        base = ONE + rate
        npv = ZERO
        for i, cf in enumerate(expand_cash_flows(cash_flows)):
            npv += dm.div(cf, dm.power(base, i))
        return npv


def compute_nfv(
    cash_flows: Sequence[CashFlow | Decimal],
    rate,
    math: DecimalMath | None = None,
) -> Decimal:
    """NPV compounded forward to the last period."""
    dm = math or default_math()
    flat = expand_cash_flows(cash_flows)
    if not flat:
        return ZERO
    rate = to_decimal(rate)
    with dm.local():
        return compute_npv(flat, rate, math=dm) * dm.power(ONE + rate, len(flat) - 1)


def compute_irr(
    cash_flows: Sequence[CashFlow | Decimal],
    guess=None,
    math: DecimalMath | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """IRR as a percentage (12.5 means 12.5% per period).

    Newton-Raphson on NPV(rate) = 0. Sequences with several sign changes
    may have several roots or none; the solver does not bracket, so expect
    ConvergenceError or whichever root lies nearest the guess.

    Raises:
        InvalidInputError: fewer than two periods after expansion.
        ConvergenceError: no root found within the iteration budget.
    """
    dm = math or default_math()
    flat = expand_cash_flows(cash_flows)
    if len(flat) < 2:
        raise InvalidInputError(f"IRR needs at least 2 cash flow periods, got {len(flat)}")

    def residual(rate: Decimal) -> Decimal:
        return compute_npv(flat, rate, math=dm)

    start = settings.solver_initial_guess if guess is None else guess
    rate = newton_raphson(residual, start, math=dm, config=config)
    return dm.mul(rate, HUNDRED)
