from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class DepreciationMethod(Enum):
    STRAIGHT_LINE = "sl"
    DECLINING_BALANCE = "db"
    SUM_OF_YEARS_DIGITS = "soyd"


@dataclass(frozen=True)
class DepreciationResult:
    period_amount: Decimal
    accumulated: Decimal
    book_value: Decimal
