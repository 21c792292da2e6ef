"""Break-even analysis: units and sales needed to cover fixed cost."""

from decimal import Decimal

from fincalc.engine.decimal_math import DecimalMath, default_math, to_decimal
from fincalc.engine.errors import DivisionByZeroError
from fincalc.models.analysis import BreakEvenResult

# Expected sales assumed when the caller gives none: 1.5x break-even sales.
DEFAULT_SALES_MULTIPLE = Decimal("1.5")


def break_even(
    fixed_cost,
    variable_cost,
    price,
    expected_sales=None,
    math: DecimalMath | None = None,
) -> BreakEvenResult:
    """Break-even units/sales, contribution margin ratio and margin of safety.

    Args:
        fixed_cost: Total fixed cost for the period
        variable_cost: Variable cost per unit
        price: Selling price per unit
        expected_sales: Sales revenue to measure margin of safety against
    """
    dm = math or default_math()
    fixed_cost, variable_cost, price = (to_decimal(v) for v in (fixed_cost, variable_cost, price))

    with dm.local():
        contribution = price - variable_cost
        if contribution.is_zero():
            raise DivisionByZeroError("Contribution margin is zero; no break-even point")

        units = dm.div(fixed_cost, contribution)
        sales = units * price
        expected = sales * DEFAULT_SALES_MULTIPLE if expected_sales is None else to_decimal(expected_sales)

        return BreakEvenResult(
            units=units,
            sales=sales,
            contribution_margin_ratio=dm.div(contribution, price),
            margin_of_safety=dm.div(expected - sales, expected),
        )
