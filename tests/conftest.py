"""Canonical test fixtures used across engine and API tests.

Fixture: $200K 30-year mortgage at 6%/yr paid monthly (0.5% per period).
"""

import pytest
from decimal import Decimal

from fincalc.engine.decimal_math import DecimalMath
from fincalc.models.cashflow import CashFlow
from fincalc.models.tvm import TVMParameters


@pytest.fixture
def dm() -> DecimalMath:
    """20-digit substrate, independent of any .env override."""
    return DecimalMath(20)


@pytest.fixture
def mortgage() -> TVMParameters:
    """N=360, 0.5%/month, borrow 200K (paid out by lender = negative PV)."""
    return TVMParameters(
        n=Decimal("360"),
        rate=Decimal("0.005"),
        pv=Decimal("-200000"),
        fv=Decimal("0"),
        begin_mode=False,
    )


@pytest.fixture
def uneven_flows() -> list[CashFlow]:
    """-1000 outlay followed by rising inflows."""
    return [
        CashFlow(Decimal("-1000")),
        CashFlow(Decimal("300")),
        CashFlow(Decimal("400")),
        CashFlow(Decimal("500")),
        CashFlow(Decimal("600")),
    ]
