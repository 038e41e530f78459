"""CLI client for the HouseHack API: posts a deal and prints the FHA breakdown.

Usage:
    househack-calc --price 200000 --rent 1200 --rent 1000 --rent 900 --taxes 2400 --insurance 1200
    househack-calc --property-id 1 --rate 7.25
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx

from househack.config import settings


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _signed_dollar(v) -> str:
    sign = "+" if float(v) >= 0 else "-"
    return f"{sign}${abs(float(v)):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_breakdown(data: dict) -> None:
    _header("Monthly Breakdown")
    print(f"  Loan Amount:              {_dollar(data['loan_amount'])}")
    print()
    print(f"  Principal & Interest:     {_dollar(data['monthly_principal_interest'])}")
    print(f"  Property Taxes:           {_dollar(data['monthly_taxes'])}")
    print(f"  Home Insurance:           {_dollar(data['monthly_insurance'])}")
    print(f"  Mortgage Insurance (MIP): {_dollar(data['monthly_mip'])}")
    print(f"  Total PITI:               {_dollar(data['total_piti'])}")
    print()
    print(f"  Gross Rent:               {_dollar(data['gross_rental_income'])}")
    print(f"  Gross Cash Flow:          {_signed_dollar(data['cash_flow'])}")


def print_self_sufficiency(data: dict) -> None:
    _header("FHA Self-Sufficiency")
    if not data["self_sufficiency_applies"]:
        print("  Exempt: fewer than 3 units, the test does not apply.")
        return
    verdict = "PASS" if data["self_sufficiency_pass"] else "FAIL"
    relation = "covers" if data["self_sufficiency_pass"] else "is less than"
    print(f"  Result:  {verdict}")
    print(
        f"  Net rental income (75% of gross: {_dollar(data['net_rental_income'])}) "
        f"{relation} total PITI ({_dollar(data['total_piti'])})."
    )


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the FHA calculator via the HouseHack API")
    parser.add_argument("--property-id", help="Calculate a saved property instead of an ad-hoc one")
    parser.add_argument("--price", type=Decimal, help="Purchase price")
    parser.add_argument("--taxes", type=Decimal, default=Decimal("0"), help="Yearly property taxes")
    parser.add_argument("--insurance", type=Decimal, default=Decimal("0"), help="Yearly insurance")
    parser.add_argument(
        "--rent", type=Decimal, action="append", default=[],
        help="Monthly rent for one unit (repeat per unit)",
    )
    parser.add_argument("--down", type=Decimal, default=Decimal("3.5"), help="Down payment %% (default: 3.5)")
    parser.add_argument("--rate", type=Decimal, default=Decimal("6.5"), help="Interest rate %% (default: 6.5)")
    parser.add_argument("--term", type=int, default=30, choices=[15, 30], help="Loan term in years")
    parser.add_argument("--mip", type=Decimal, default=Decimal("0.85"), help="Annual MIP %% (default: 0.85)")
    parser.add_argument("--api-url", default=settings.api_base_url, help="API base URL")
    return parser


def build_request(args: argparse.Namespace) -> tuple[str, dict]:
    """Return (path, JSON payload) for the parsed arguments."""
    scenario = {
        "down_payment_percent": str(args.down),
        "interest_rate": str(args.rate),
        "loan_term_years": args.term,
        "mip_rate": str(args.mip),
    }
    if args.property_id:
        return f"/api/v1/properties/{args.property_id}/calculate", scenario

    if args.price is None:
        raise SystemExit("Error: --price is required unless --property-id is given")
    payload = {
        "property": {
            "price": str(args.price),
            "taxes_yearly": str(args.taxes),
            "insurance_yearly": str(args.insurance),
            "units": [
                {"name": f"Unit {i + 1}", "estimated_rent": str(rent), "is_owner_occupied": i == 0}
                for i, rent in enumerate(args.rent)
            ],
        },
        "scenario": scenario,
    }
    return "/api/v1/calculate", payload


async def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    path, payload = build_request(args)

    async with httpx.AsyncClient(base_url=args.api_url, timeout=30) as client:
        try:
            resp = await client.post(path, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn househack.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_breakdown(data)
    print_self_sufficiency(data)
    print()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
