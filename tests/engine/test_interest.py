from decimal import Decimal

import pytest

from fincalc.engine.errors import InvalidInputError
from fincalc.engine.interest import (
    annual_rate_pct,
    effective_to_nominal,
    nominal_to_effective,
    periodic_rate,
)


class TestConversions:
    def test_monthly_compounding(self, dm):
        eff = nominal_to_effective(Decimal("0.12"), 12, math=dm)
        assert dm.round(eff, 6) == Decimal("0.126825")

    def test_effective_back_to_nominal(self, dm):
        eff = nominal_to_effective(Decimal("0.08"), 4, math=dm)
        nominal = effective_to_nominal(eff, 4, math=dm)
        assert abs(nominal - Decimal("0.08")) < Decimal("1E-15")

    def test_annual_compounding_is_identity(self, dm):
        assert nominal_to_effective(Decimal("0.07"), 1, math=dm) == Decimal("0.07")

    def test_periodic_rate(self, dm):
        assert periodic_rate(6, 12, math=dm) == Decimal("0.005")
        assert annual_rate_pct(Decimal("0.005"), 12, math=dm) == Decimal("6")

    def test_periods_per_year_floor(self, dm):
        with pytest.raises(InvalidInputError):
            nominal_to_effective(Decimal("0.1"), 0, math=dm)
