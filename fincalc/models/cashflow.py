from dataclasses import dataclass
from decimal import Decimal

from fincalc.engine.errors import InvalidInputError


@dataclass(frozen=True)
class CashFlow:
    """One CFj entry: `amount` repeated for `count` consecutive periods (Nj)."""
    amount: Decimal
    count: int = 1

    def __post_init__(self):
        if self.count < 1:
            raise InvalidInputError(f"Cash flow repeat count must be >= 1, got {self.count}")
