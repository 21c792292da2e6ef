from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BreakEvenResult:
    units: Decimal
    sales: Decimal
    contribution_margin_ratio: Decimal
    margin_of_safety: Decimal  # Fraction of expected sales above break-even


@dataclass(frozen=True)
class CapitalYear:
    year: int
    investment_value: Decimal
    accumulated_capital: Decimal
    total_value: Decimal
    reinvestment_amount: Decimal
    safety_amount: Decimal  # Cash taken out this year
