"""Typed failures raised by the calculation engine.

Engine functions never substitute a fallback number for a failed
computation; they raise one of these instead. All derive from ValueError so
callers that only care about "bad inputs" can catch the builtin.
"""

from decimal import Decimal


class FinancialError(ValueError):
    """Base class for every engine failure."""


class DivisionByZeroError(FinancialError):
    """A formula required dividing by a zero rate or denominator."""


class DomainError(FinancialError):
    """Operand outside a function's domain, or no real solution exists."""


class ConvergenceError(FinancialError):
    """Newton-Raphson ran out of iterations or its derivative vanished."""

    def __init__(self, message: str, iterations: int = 0, estimate: Decimal | None = None):
        super().__init__(message)
        self.iterations = iterations
        self.estimate = estimate


class InvalidInputError(FinancialError):
    """Out-of-range period index, too few cash flows, missing variable, etc."""
