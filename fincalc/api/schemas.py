"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from fincalc.models.depreciation import DepreciationMethod
from fincalc.models.tvm import TVMVariable


# ---- Request schemas ----

class TVMSolveRequest(BaseModel):
    """Solve one TVM variable. `rate` is periodic, as a fraction."""
    solve_for: TVMVariable
    n: Decimal | None = None
    rate: Decimal | None = None
    pv: Decimal | None = None
    pmt: Decimal | None = None
    fv: Decimal | None = None
    begin_mode: bool = False
    guess: Decimal | None = Field(None, description="Seed for the rate solve, periodic fraction")


class TVMAnnualRequest(BaseModel):
    """Calculator-style solve with I/YR (annual percent) and P/YR."""
    solve_for: TVMVariable
    n: Decimal | None = None
    i_yr: Decimal | None = Field(None, description="Annual nominal rate in percent")
    pv: Decimal | None = None
    pmt: Decimal | None = None
    fv: Decimal | None = None
    periods_per_year: int = Field(12, ge=1)
    begin_mode: bool = False


class CashFlowEntry(BaseModel):
    amount: Decimal
    count: int = Field(1, ge=1, description="Consecutive periods (Nj)")


class NPVRequest(BaseModel):
    cash_flows: list[CashFlowEntry]
    rate: Decimal = Field(..., description="Periodic discount rate as a fraction")


class IRRRequest(BaseModel):
    cash_flows: list[CashFlowEntry]
    guess: Decimal | None = Field(None, description="Initial rate guess as a fraction")


class AmortizationRequest(BaseModel):
    n: int = Field(..., ge=1)
    rate: Decimal
    principal: Decimal
    payment: Decimal
    start_period: int = 1
    end_period: int | None = None


class BondPriceRequest(BaseModel):
    settlement: date
    maturity: date
    coupon_rate: Decimal
    yield_rate: Decimal
    redemption: Decimal = Decimal("100")
    payments_per_year: int = Field(2, ge=1)


class BondYieldRequest(BaseModel):
    settlement: date
    maturity: date
    coupon_rate: Decimal
    price: Decimal
    redemption: Decimal = Decimal("100")
    payments_per_year: int = Field(2, ge=1)


class DepreciationRequest(BaseModel):
    method: DepreciationMethod
    cost: Decimal
    salvage: Decimal
    life: int
    period: int
    factor: Decimal = Decimal("2")


class InterestConversionRequest(BaseModel):
    rate: Decimal = Field(..., description="Rate to convert, as a fraction")
    periods_per_year: int = Field(..., ge=1)
    direction: Literal["nominal_to_effective", "effective_to_nominal"]


class BreakEvenRequest(BaseModel):
    fixed_cost: Decimal
    variable_cost: Decimal
    price: Decimal
    expected_sales: Decimal | None = None


class CapitalProjectionRequest(BaseModel):
    reinvestment_pct: Decimal
    safety_pct: Decimal
    total_investment: Decimal
    years: int = Field(10, ge=1)


# ---- Response schemas ----

class ValueResponse(BaseModel):
    value: Decimal
    display: str  # Rounded half-up to the configured display places


class TVMResponse(ValueResponse):
    solve_for: TVMVariable


class AmortizationRowResponse(BaseModel):
    period: int
    interest: Decimal
    principal: Decimal
    balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal


class AmortizationScheduleResponse(BaseModel):
    rows: list[AmortizationRowResponse]


class AmortizationSummaryResponse(BaseModel):
    start_period: int
    end_period: int
    interest: Decimal
    principal: Decimal
    balance: Decimal


class DepreciationResponse(BaseModel):
    method: DepreciationMethod
    period_amount: Decimal
    accumulated: Decimal
    book_value: Decimal


class BreakEvenResponse(BaseModel):
    units: Decimal
    sales: Decimal
    contribution_margin_ratio: Decimal
    margin_of_safety: Decimal


class CapitalYearResponse(BaseModel):
    year: int
    investment_value: Decimal
    accumulated_capital: Decimal
    total_value: Decimal
    reinvestment_amount: Decimal
    safety_amount: Decimal


class CapitalProjectionResponse(BaseModel):
    rows: list[CapitalYearResponse]
    irr: Decimal
    payback_period: Decimal | None = None
    roi: Decimal
    annualized_roi: Decimal


class ErrorResponse(BaseModel):
    error: str
    detail: str
