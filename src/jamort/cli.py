"""Command-line interface for JAMORT.

Prints the payment table of a sinking-fund bond:

    jamort-sinking 2024-01-15 5Y annual 0.05 1000 --day-count 30360
"""

from __future__ import annotations

import argparse
import json
import sys

from jamort import __version__
from jamort.exceptions import JamortException
from jamort.instruments.bond import build_sinking_fund_bond
from jamort.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

_COLUMNS = ("date", "notional", "interest", "principal", "redemption_pct", "total")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jamort-sinking",
        description="Print the payment table of a sinking-fund bond.",
    )
    parser.add_argument("start", help="Accrual start date (YYYY-MM-DD)")
    parser.add_argument("tenor", help="Time to maturity, e.g. 5Y or 18M")
    parser.add_argument("frequency", help="Sinking frequency, e.g. annual, quarterly or 6M")
    parser.add_argument("coupon", type=float, help="Annual coupon rate (decimal, e.g. 0.05)")
    parser.add_argument("face", type=float, help="Face amount at issue")
    parser.add_argument("--day-count", default="30360", help="Day count convention (default: 30360)")
    parser.add_argument(
        "--calendar", default="NO_CALENDAR", help="Business day calendar (default: NO_CALENDAR)"
    )
    parser.add_argument(
        "--payment-convention",
        default="UNADJUSTED",
        help="Payment date adjustment (default: UNADJUSTED)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full bond as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _format_table(rows: list[dict]) -> str:
    lines = ["{:<12}{:>16}{:>14}{:>16}{:>10}{:>14}".format(*_COLUMNS)]
    for row in rows:
        lines.append(
            "{date:<12}{notional:>16.2f}{interest:>14.2f}"
            "{principal:>16.2f}{redemption_pct:>10.4f}{total:>14.2f}".format(**row)
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``jamort-sinking`` command.

    Returns:
        0 on success, 2 when the bond cannot be built
    """
    args = build_parser().parse_args(argv)

    try:
        if args.log_level:
            configure_logging(level=args.log_level)
        bond = build_sinking_fund_bond(
            settlement_days=0,
            calendar=args.calendar,
            face_amount=args.face,
            start_date=args.start,
            tenor=args.tenor,
            frequency=args.frequency,
            coupon=args.coupon,
            day_count=args.day_count,
            payment_convention=args.payment_convention,
        )
    except JamortException as exc:
        logger.debug("Sinking-fund bond construction failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(bond.to_dict(), indent=2))
    else:
        print(_format_table(bond.payment_table()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
