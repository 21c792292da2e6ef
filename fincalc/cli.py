"""Command-line financial calculator.

Usage:
    python -m fincalc.cli tvm pmt --n 360 --i-yr 6 --pv -200000 --fv 0
    python -m fincalc.cli irr -1000 300 400 500 600
    python -m fincalc.cli npv --rate 0.1 -1000 500x3
    python -m fincalc.cli amort --n 360 --rate 0.005 --principal 200000 --payment 1199.10 --start 1 --end 12
    python -m fincalc.cli bond-price 2025-03-01 2035-03-01 --coupon 0.05 --yield 0.06
    python -m fincalc.cli depreciation db --cost 10000 --salvage 1000 --life 5 --period 2
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from fincalc.config import settings
from fincalc.engine.amortization import amortization_schedule, amortize_range
from fincalc.engine.bond import bond_price, bond_yield
from fincalc.engine.cashflow import compute_irr, compute_npv
from fincalc.engine.decimal_math import DecimalMath, default_math
from fincalc.engine.depreciation import depreciation
from fincalc.engine.errors import FinancialError
from fincalc.engine.tvm import solve_tvm_annual
from fincalc.models.cashflow import CashFlow
from fincalc.models.depreciation import DepreciationMethod
from fincalc.models.tvm import TVMVariable

logger = logging.getLogger(__name__)


def parse_amount(text: str) -> Decimal:
    """Command-line number. Commas are read as digit grouping: '1,000' -> 1000."""
    try:
        return Decimal(text.strip().replace(",", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None


def parse_cash_flow(text: str) -> CashFlow:
    """'500' -> one period of 500; '500x3' -> 500 for 3 periods."""
    amount, _, count = text.lower().partition("x")
    return CashFlow(amount=parse_amount(amount), count=int(count) if count else 1)


def print_amortization(args, dm: DecimalMath) -> None:
    places = args.places
    if args.summary:
        s = amortize_range(args.n, args.rate, args.principal, args.payment, args.start, args.end or args.n)
        print(f"  Periods {s.start_period}-{s.end_period}")
        print(f"  Interest:   {dm.format(s.interest, places):>16}")
        print(f"  Principal:  {dm.format(s.principal, places):>16}")
        print(f"  Balance:    {dm.format(s.balance, places):>16}")
        return

    rows = amortization_schedule(args.n, args.rate, args.principal, args.payment, args.start, args.end)
    print(f"  {'Period':>6}  {'Interest':>14}  {'Principal':>14}  {'Balance':>16}")
    for r in rows:
        print(
            f"  {r.period:>6}  {dm.format(r.interest, places):>14}"
            f"  {dm.format(r.principal, places):>14}  {dm.format(r.balance, places):>16}"
        )
    last = rows[-1]
    print(f"  Cumulative interest:  {dm.format(last.cumulative_interest, places)}")
    print(f"  Cumulative principal: {dm.format(last.cumulative_principal, places)}")


def run(args) -> None:
    dm = default_math()
    places = args.places

    if args.command == "tvm":
        value = solve_tvm_annual(
            TVMVariable(args.solve_for),
            n=args.n,
            i_yr=args.i_yr,
            pv=args.pv,
            pmt=args.pmt,
            fv=args.fv,
            periods_per_year=args.p_yr,
            begin_mode=args.begin,
        )
        print(f"{args.solve_for.upper()} = {dm.format(value, places)}")
    elif args.command == "npv":
        print(f"NPV = {dm.format(compute_npv(args.flows, args.rate), places)}")
    elif args.command == "irr":
        print(f"IRR = {dm.format(compute_irr(args.flows), places)}%")
    elif args.command == "amort":
        print_amortization(args, dm)
    elif args.command == "bond-price":
        value = bond_price(args.settlement, args.maturity, args.coupon, args.yield_rate, args.redemption, args.freq)
        print(f"PRICE = {dm.format(value, places)}")
    elif args.command == "bond-yield":
        value = bond_yield(args.settlement, args.maturity, args.coupon, args.price, args.redemption, args.freq)
        print(f"YIELD = {dm.format(dm.mul(value, 100), places)}%")
    elif args.command == "depreciation":
        result = depreciation(
            DepreciationMethod(args.method), args.cost, args.salvage, args.life, args.period, args.factor
        )
        print(f"  Depreciation: {dm.format(result.period_amount, places)}")
        print(f"  Accumulated:  {dm.format(result.accumulated, places)}")
        print(f"  Book value:   {dm.format(result.book_value, places)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Financial calculator")
    parser.add_argument(
        "--places", type=int, default=settings.display_places,
        help=f"Decimal places to display (default: {settings.display_places})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tvm", help="Solve a time-value-of-money problem")
    p.add_argument("solve_for", choices=[v.value for v in TVMVariable])
    p.add_argument("--n", type=parse_amount)
    p.add_argument("--i-yr", dest="i_yr", type=parse_amount, help="Annual rate in percent")
    p.add_argument("--pv", type=parse_amount)
    p.add_argument("--pmt", type=parse_amount)
    p.add_argument("--fv", type=parse_amount)
    p.add_argument("--p-yr", dest="p_yr", type=int, default=settings.periods_per_year)
    p.add_argument("--begin", action="store_true", help="Payments at start of period")

    p = sub.add_parser("npv", help="Net present value of cash flows")
    p.add_argument("--rate", type=parse_amount, required=True, help="Periodic rate as a fraction")
    p.add_argument("flows", nargs="+", type=parse_cash_flow, help="CF0 CF1 ... (AMOUNTxCOUNT repeats)")

    p = sub.add_parser("irr", help="Internal rate of return of cash flows")
    p.add_argument("flows", nargs="+", type=parse_cash_flow, help="CF0 CF1 ... (AMOUNTxCOUNT repeats)")

    p = sub.add_parser("amort", help="Amortization schedule")
    p.add_argument("--n", type=int, required=True)
    p.add_argument("--rate", type=parse_amount, required=True, help="Periodic rate as a fraction")
    p.add_argument("--principal", type=parse_amount, required=True)
    p.add_argument("--payment", type=parse_amount, required=True)
    p.add_argument("--start", type=int, default=1)
    p.add_argument("--end", type=int)
    p.add_argument("--summary", action="store_true", help="Only print totals for the range")

    for name, target in (("bond-price", "yield"), ("bond-yield", "price")):
        p = sub.add_parser(name, help=f"Bond {name.split('-')[1]}")
        p.add_argument("settlement", type=date.fromisoformat)
        p.add_argument("maturity", type=date.fromisoformat)
        p.add_argument("--coupon", type=parse_amount, required=True, help="Annual coupon rate as a fraction")
        if target == "yield":
            p.add_argument("--yield", dest="yield_rate", type=parse_amount, required=True)
        else:
            p.add_argument("--price", type=parse_amount, required=True)
        p.add_argument("--redemption", type=parse_amount, default=Decimal("100"))
        p.add_argument("--freq", type=int, default=2, help="Coupons per year (default: 2)")

    p = sub.add_parser("depreciation", help="Depreciation for one period")
    p.add_argument("method", choices=[m.value for m in DepreciationMethod])
    p.add_argument("--cost", type=parse_amount, required=True)
    p.add_argument("--salvage", type=parse_amount, default=Decimal("0"))
    p.add_argument("--life", type=int, required=True)
    p.add_argument("--period", type=int, required=True)
    p.add_argument("--factor", type=parse_amount, default=Decimal("2"), help="Declining balance factor")

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except FinancialError as e:
        logger.debug("Calculation failed", exc_info=True)
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
