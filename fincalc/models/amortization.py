from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    interest: Decimal
    principal: Decimal
    balance: Decimal  # After this period's payment
    cumulative_interest: Decimal  # Since period 1
    cumulative_principal: Decimal


@dataclass(frozen=True)
class AmortizationSummary:
    """Totals for an AMORT range, as the calculator reports them."""
    start_period: int
    end_period: int
    interest: Decimal
    principal: Decimal
    balance: Decimal
