from decimal import Decimal

import pytest

from fincalc.engine.errors import DomainError, InvalidInputError
from fincalc.engine.tvm import (
    future_value,
    interest_rate,
    number_of_periods,
    payment,
    periods_from_years,
    present_value,
    solve_tvm,
    solve_tvm_annual,
)
from fincalc.models.tvm import TVMParameters, TVMVariable


class TestPayment:
    def test_mortgage_payment(self, dm, mortgage):
        pmt = solve_tvm(mortgage, TVMVariable.PMT, math=dm)
        assert dm.round(pmt, 2) == Decimal("1199.10")

    def test_zero_rate_is_linear(self, dm):
        pmt = payment(10, 0, Decimal("-1000"), 0, math=dm)
        assert pmt == Decimal("100")

    def test_begin_mode_discounts_one_period(self, dm):
        end = payment(360, Decimal("0.005"), Decimal("-200000"), 0, math=dm)
        begin = payment(360, Decimal("0.005"), Decimal("-200000"), 0, begin_mode=True, math=dm)
        assert abs(begin * Decimal("1.005") - end) < Decimal("1E-12")


class TestFutureAndPresentValue:
    def test_lump_sum_growth(self, dm):
        fv = future_value(10, Decimal("0.05"), 0, Decimal("-1000"), math=dm)
        assert dm.round(fv, 2) == Decimal("1628.89")

    def test_present_value_inverts_payment(self, dm):
        pmt = payment(360, Decimal("0.005"), Decimal("-200000"), 0, math=dm)
        pv = present_value(360, Decimal("0.005"), pmt, 0, math=dm)
        assert abs(pv + Decimal("200000")) < Decimal("1E-10")

    def test_present_value_then_future_value(self, dm):
        """Annuity due with a balloon: solving PV then FV returns the balloon."""
        rate, pmt, balloon = Decimal("0.007"), Decimal("-300"), Decimal("5000")
        pv = present_value(120, rate, pmt, balloon, begin_mode=True, math=dm)
        fv = future_value(120, rate, pmt, pv, begin_mode=True, math=dm)
        assert abs(fv - balloon) <= balloon * Decimal("1E-6")

    def test_zero_rate_present_value(self, dm):
        assert present_value(12, 0, Decimal("100"), Decimal("-50"), math=dm) == Decimal("-1150")

    def test_five_values_balance(self, dm):
        """PV*(1+i)^N + PMT*((1+i)^N - 1)/i + FV == 0."""
        fv = future_value(24, Decimal("0.01"), Decimal("-50"), Decimal("-1000"), math=dm)
        growth = Decimal("1.01") ** 24
        total = Decimal("-1000") * growth + Decimal("-50") * (growth - 1) / Decimal("0.01") + fv
        assert abs(total) < Decimal("1E-10")


class TestNumberOfPeriods:
    def test_mortgage_term(self, dm):
        pmt = payment(360, Decimal("0.005"), Decimal("-200000"), 0, math=dm)
        n = number_of_periods(Decimal("0.005"), pmt, Decimal("-200000"), 0, math=dm)
        assert abs(n - 360) < Decimal("1E-8")

    def test_zero_rate(self, dm):
        assert number_of_periods(0, Decimal("100"), Decimal("-1000"), 0, math=dm) == Decimal("10")

    def test_no_real_solution(self, dm):
        with pytest.raises(DomainError):
            number_of_periods(Decimal("0.01"), 0, Decimal("100"), Decimal("100"), math=dm)

    def test_pv_offsets_payments(self, dm):
        """PV + PMT/i == 0 zeroes the denominator of the N ratio."""
        with pytest.raises(DomainError):
            number_of_periods(Decimal("0.01"), Decimal("-1"), Decimal("100"), 0, math=dm)

    def test_rate_at_or_below_minus_one(self, dm):
        with pytest.raises(DomainError):
            number_of_periods(Decimal("-1"), Decimal("10"), Decimal("-100"), 0, math=dm)


class TestInterestRate:
    def test_short_annuity(self, dm):
        rate = interest_rate(5, Decimal("-250"), Decimal("1000"), 0, math=dm)
        assert abs(rate - Decimal("0.0793")) < Decimal("0.0001")
        # Re-deriving the payment from the solved rate closes the loop.
        pmt = payment(5, rate, Decimal("1000"), 0, math=dm)
        assert abs(pmt + Decimal("250")) < Decimal("1E-5")

    def test_mortgage_rate_with_close_guess(self, dm, mortgage):
        pmt = solve_tvm(mortgage, TVMVariable.PMT, math=dm)
        params = TVMParameters(n=Decimal("360"), pv=Decimal("-200000"), pmt=pmt, fv=Decimal("0"))
        rate = solve_tvm(params, TVMVariable.RATE, guess=Decimal("0.004"), math=dm)
        assert abs(rate - Decimal("0.005")) < Decimal("1E-9")


class TestSolveTVM:
    def test_dispatch_fv(self, dm):
        params = TVMParameters(n=Decimal("10"), rate=Decimal("0.05"), pv=Decimal("-1000"), pmt=Decimal("0"))
        assert dm.round(solve_tvm(params, TVMVariable.FV, math=dm), 2) == Decimal("1628.89")

    def test_missing_input(self, dm):
        params = TVMParameters(n=Decimal("10"), pv=Decimal("-1000"), fv=Decimal("0"))
        with pytest.raises(InvalidInputError, match="rate"):
            solve_tvm(params, TVMVariable.PMT, math=dm)

    def test_solve_for_may_be_filled(self, dm, mortgage):
        """A stale value in the solve-for slot is ignored."""
        params = TVMParameters(
            n=mortgage.n, rate=mortgage.rate, pv=mortgage.pv, pmt=Decimal("1"), fv=mortgage.fv
        )
        assert dm.round(solve_tvm(params, TVMVariable.PMT, math=dm), 2) == Decimal("1199.10")


class TestAnnualEntry:
    def test_payment_from_i_yr(self, dm):
        pmt = solve_tvm_annual(
            TVMVariable.PMT, n=360, i_yr=6, pv=-200000, fv=0, periods_per_year=12, math=dm
        )
        assert dm.round(pmt, 2) == Decimal("1199.10")

    def test_rate_comes_back_as_i_yr(self, dm):
        i_yr = solve_tvm_annual(
            TVMVariable.RATE, n=5, pv=1000, pmt=-250, fv=0, periods_per_year=1, math=dm
        )
        assert abs(i_yr - Decimal("7.93")) < Decimal("0.01")

    def test_periods_from_years(self, dm):
        assert periods_from_years(30, 12, math=dm) == Decimal("360")

    def test_periods_per_year_floor(self, dm):
        with pytest.raises(InvalidInputError):
            periods_from_years(30, 0, math=dm)
