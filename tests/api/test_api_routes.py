from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fincalc.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


def value_of(response) -> Decimal:
    return Decimal(str(response.json()["value"]))


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestTVMRoutes:
    def test_solve_payment(self, client):
        resp = client.post("/api/v1/tvm/solve", json={
            "solve_for": "pmt", "n": "360", "rate": "0.005", "pv": "-200000", "fv": "0",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["solve_for"] == "pmt"
        assert body["display"] == "1199.10"

    def test_solve_annual_rate(self, client):
        resp = client.post("/api/v1/tvm/solve-annual", json={
            "solve_for": "rate", "n": "5", "pv": "1000", "pmt": "-250", "fv": "0", "periods_per_year": 1,
        })
        assert resp.status_code == 200
        assert resp.json()["display"] == "7.93"

    def test_missing_input_is_422(self, client):
        resp = client.post("/api/v1/tvm/solve", json={"solve_for": "pmt", "n": "360", "pv": "-200000"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidInputError"

    def test_domain_error_is_422(self, client):
        resp = client.post("/api/v1/tvm/solve", json={
            "solve_for": "n", "rate": "0.01", "pv": "100", "pmt": "0", "fv": "100",
        })
        assert resp.status_code == 422
        assert resp.json()["error"] == "DomainError"


class TestCashFlowRoutes:
    FLOWS = [{"amount": "-1000"}, {"amount": "300"}, {"amount": "400"}, {"amount": "500"}, {"amount": "600"}]

    def test_npv(self, client):
        resp = client.post("/api/v1/cashflow/npv", json={"cash_flows": self.FLOWS, "rate": "0.1"})
        assert resp.json()["display"] == "388.77"

    def test_nfv(self, client):
        flows = [{"amount": "-100"}, {"amount": "50"}, {"amount": "60"}]
        resp = client.post("/api/v1/cashflow/nfv", json={"cash_flows": flows, "rate": "0.1"})
        assert resp.json()["display"] == "-6.00"

    def test_irr(self, client):
        resp = client.post("/api/v1/cashflow/irr", json={"cash_flows": self.FLOWS})
        assert Decimal("24.87") < value_of(resp) < Decimal("24.91")

    def test_irr_with_repeats(self, client):
        flows = [{"amount": "-100"}, {"amount": "60", "count": 2}]
        resp = client.post("/api/v1/cashflow/irr", json={"cash_flows": flows})
        assert resp.json()["display"] == "13.07"

    def test_irr_too_few_flows(self, client):
        resp = client.post("/api/v1/cashflow/irr", json={"cash_flows": [{"amount": "-100"}]})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidInputError"

    def test_irr_no_root(self, client):
        resp = client.post("/api/v1/cashflow/irr", json={"cash_flows": [{"amount": "100"}, {"amount": "100"}]})
        assert resp.status_code == 422
        assert resp.json()["error"] == "ConvergenceError"


class TestAmortizationRoutes:
    LOAN = {"n": 360, "rate": "0.005", "principal": "200000", "payment": "1199.10"}

    def test_schedule_window(self, client):
        resp = client.post("/api/v1/amortization/schedule", json={**self.LOAN, "start_period": 1, "end_period": 3})
        rows = resp.json()["rows"]
        assert [r["period"] for r in rows] == [1, 2, 3]
        assert Decimal(str(rows[0]["interest"])) == Decimal("1000")
        assert Decimal(str(rows[0]["balance"])) == Decimal("199800.90")

    def test_summary(self, client):
        resp = client.post("/api/v1/amortization/summary", json={**self.LOAN, "start_period": 1, "end_period": 12})
        body = resp.json()
        assert (body["start_period"], body["end_period"]) == (1, 12)
        total = Decimal(str(body["interest"])) + Decimal(str(body["principal"]))
        assert abs(total - Decimal("14389.20")) < Decimal("1E-10")

    def test_bad_range(self, client):
        resp = client.post("/api/v1/amortization/schedule", json={**self.LOAN, "start_period": 20, "end_period": 10})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidInputError"


class TestBondRoutes:
    def test_price(self, client):
        resp = client.post("/api/v1/bond/price", json={
            "settlement": "2025-03-01", "maturity": "2026-03-01", "coupon_rate": "0", "yield_rate": "0.06",
        })
        assert resp.json()["display"] == "94.26"

    def test_yield_display_in_percent(self, client):
        resp = client.post("/api/v1/bond/yield", json={
            "settlement": "2025-03-01", "maturity": "2026-03-01", "coupon_rate": "0.05", "price": "100",
        })
        assert resp.json()["display"] == "5.00"

    def test_settlement_after_maturity(self, client):
        resp = client.post("/api/v1/bond/price", json={
            "settlement": "2026-03-01", "maturity": "2025-03-01", "coupon_rate": "0.05", "yield_rate": "0.05",
        })
        assert resp.status_code == 422


class TestAnalysisRoutes:
    def test_depreciation(self, client):
        resp = client.post("/api/v1/depreciation", json={
            "method": "db", "cost": "10000", "salvage": "1000", "life": 5, "period": 2,
        })
        body = resp.json()
        assert body["method"] == "db"
        assert Decimal(str(body["book_value"])) == Decimal("3600")

    def test_interest_conversion(self, client):
        resp = client.post("/api/v1/interest/convert", json={
            "rate": "0.12", "periods_per_year": 12, "direction": "nominal_to_effective",
        })
        assert resp.json()["display"] == "12.68"

    def test_breakeven(self, client):
        resp = client.post("/api/v1/breakeven", json={"fixed_cost": "10000", "variable_cost": "6", "price": "10"})
        assert Decimal(str(resp.json()["units"])) == Decimal("2500")

    def test_breakeven_zero_margin(self, client):
        resp = client.post("/api/v1/breakeven", json={"fixed_cost": "10000", "variable_cost": "10", "price": "10"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "DivisionByZeroError"

    def test_capital_projection(self, client):
        resp = client.post("/api/v1/capital/projection", json={
            "reinvestment_pct": "0", "safety_pct": "50", "total_investment": "1000", "years": 3,
        })
        body = resp.json()
        assert len(body["rows"]) == 4
        assert Decimal(str(body["payback_period"])) == Decimal("2")
        assert abs(Decimal(str(body["irr"])) - 50) < Decimal("0.0001")
