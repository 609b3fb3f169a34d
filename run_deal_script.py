import argparse
import json
import math
import sys

from deal_service.services.analysis import DealService
from deal_service.sources import CsvDealSource, DealSourceFactory
from deal_service.sources.preset import DEFAULT_DEAL_ID
from deal_service.utils.json import sanitize_for_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a small business acquisition deal.")
    parser.add_argument("deal_id", nargs="?", default=DEFAULT_DEAL_ID, help=f"Deal to evaluate (default: {DEFAULT_DEAL_ID})")
    parser.add_argument("--source", "-s", choices=["preset", "csv"], default="preset", help="Deal source")
    parser.add_argument("--sheet", type=str, default=None, help="CSV deal sheet (implies --source csv)")
    parser.add_argument("--all", action="store_true", help="Evaluate every deal in the source")
    parser.add_argument("--json", action="store_true", help="Print the full JSON payload")

    # Financing what-ifs, applied on top of the stored deal
    parser.add_argument("--down-payment", type=str, default=None, help="Down payment (%%)")
    parser.add_argument("--seller-note", type=str, default=None, help="Seller note (%%)")
    parser.add_argument("--interest-rate", type=str, default=None, help="Interest rate (%%)")
    parser.add_argument("--loan-term", type=str, default=None, help="Loan term (years)")
    return parser


def collect_overrides(args: argparse.Namespace) -> dict:
    overrides = {
        "downPayment": args.down_payment,
        "sellerNote": args.seller_note,
        "interestRate": args.interest_rate,
        "loanTerm": args.loan_term,
    }
    return {k: v for k, v in overrides.items() if v is not None}


def print_summary(result: dict) -> None:
    metrics = result["metrics"]
    analysis = result["analysis"]
    irr = metrics["internal_rate_of_return"]

    print(f"\nDeal: {result.get('deal_id', '-')}")
    print(f"Recommendation: {analysis['recommendation']} (score {analysis['score']:.0f})")
    print(f"EBITDA Multiple: {metrics['ebitda_multiple']:.2f}x")
    print(f"Revenue Multiple: {metrics['revenue_multiple']:.2f}x")
    dscr = metrics["debt_service_coverage_ratio"]
    print(f"DSCR: {dscr:.2f}x" if math.isfinite(dscr) else "DSCR: N/A (no debt service)")
    print(f"Annual Debt Service: ${metrics['total_debt_service']:,.0f}")
    print(f"NPV (15%): ${metrics['net_present_value']:,.0f}")
    print(f"IRR (approx.): {irr:.1f}%" if irr is not None else "IRR (approx.): N/A")
    print("Cash Flows: " + ", ".join(f"${cf:,.0f}" for cf in metrics["projected_cash_flows"]))

    for heading in ("strengths", "weaknesses", "opportunities", "threats"):
        if analysis[heading]:
            print(f"\n{heading.capitalize()}:")
            for finding in analysis[heading]:
                print(f"- {finding}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.sheet:
        source = CsvDealSource(args.sheet)
    else:
        source = DealSourceFactory.get_source(args.source)

    service = DealService(source)
    overrides = collect_overrides(args)
    try:
        deal_ids = source.list_deals() if args.all else [args.deal_id]
    except ValueError as e:
        print(f"Error evaluating deals: {e}", file=sys.stderr)
        return 1

    failures = 0
    for deal_id in deal_ids:
        try:
            result = service.analyze_deal(deal_id, overrides)
        except ValueError as e:
            print(f"Error evaluating deal {deal_id}: {e}", file=sys.stderr)
            failures += 1
            continue

        if args.json:
            print(json.dumps(sanitize_for_json(result), indent=2))
        else:
            print_summary(result)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
