"""Generic Newton-Raphson root finder shared by every iterative solve.

TVM rate, IRR and bond yield all go through newton_raphson() so they share
one iteration budget, tolerance and derivative estimate. No bracketing:
residuals with several roots (or none) may fail to converge, or converge to
whichever root is nearest the initial guess.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from fincalc.config import settings
from fincalc.engine.decimal_math import DecimalMath, default_math, to_decimal
from fincalc.engine.errors import ConvergenceError, DivisionByZeroError, DomainError

# Below this the Newton step is treated as undefined.
DERIVATIVE_FLOOR = Decimal("1E-18")

Residual = Callable[[Decimal], Decimal]


@dataclass(frozen=True)
class SolverConfig:
    max_iterations: int = 100
    tolerance: Decimal = Decimal("0.0000001")
    step: Decimal = Decimal("0.0001")  # central-difference half-width

    @classmethod
    def from_settings(cls) -> "SolverConfig":
        return cls(
            max_iterations=settings.solver_max_iterations,
            tolerance=settings.solver_tolerance,
            step=settings.solver_step,
        )


def _evaluate(residual: Residual, x: Decimal, iteration: int) -> Decimal:
    try:
        return residual(x)
    except (DomainError, DivisionByZeroError) as e:
        raise ConvergenceError(
            f"Iterate {x} left the residual's domain: {e}",
            iterations=iteration,
            estimate=x,
        ) from e


def newton_raphson(
    residual: Residual,
    guess,
    math: DecimalMath | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """Find x with residual(x) ~= 0.

    Converged when |residual(x)| < tolerance, or when a Newton step moves x
    by less than tolerance (the stepped value is returned). The derivative is
    a central difference (f(x+h) - f(x-h)) / 2h.

    Raises:
        ConvergenceError: budget exhausted, derivative ~ 0, or an iterate
            fell outside the residual's domain.
    """
    dm = math or default_math()
    cfg = config or SolverConfig.from_settings()
    x = to_decimal(guess)

    with dm.local():
        for iteration in range(1, cfg.max_iterations + 1):
            fx = _evaluate(residual, x, iteration)
            if abs(fx) < cfg.tolerance:
                return x

            f_hi = _evaluate(residual, x + cfg.step, iteration)
            f_lo = _evaluate(residual, x - cfg.step, iteration)
            derivative = dm.div(f_hi - f_lo, 2 * cfg.step)
            if abs(derivative) < DERIVATIVE_FLOOR:
                raise ConvergenceError(
                    f"Derivative vanished at {x}; Newton step undefined",
                    iterations=iteration,
                    estimate=x,
                )

            x_next = x - dm.div(fx, derivative)
            if abs(x_next - x) < cfg.tolerance:
                return x_next
            x = x_next

    raise ConvergenceError(
        f"No convergence within {cfg.max_iterations} iterations",
        iterations=cfg.max_iterations,
        estimate=x,
    )
