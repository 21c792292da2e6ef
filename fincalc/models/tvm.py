from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TVMVariable(Enum):
    N = "n"
    RATE = "rate"
    PV = "pv"
    PMT = "pmt"
    FV = "fv"


@dataclass(frozen=True)
class TVMParameters:
    """One TVM problem. The solve-for variable may be left as None.

    Sign convention: cash paid out is negative, cash received is positive.
    """
    n: Decimal | None = None
    rate: Decimal | None = None  # Periodic, as a fraction (0.005 = 0.5%/period)
    pv: Decimal | None = None
    pmt: Decimal | None = None
    fv: Decimal | None = None
    begin_mode: bool = False  # Payments at start of period (annuity due)

    def get(self, variable: TVMVariable) -> Decimal | None:
        return getattr(self, variable.value)
