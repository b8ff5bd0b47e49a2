"""
Command-line interface for ccs-calc.

Usage:
    ccs-calc scenarios --p1-income 100000 --p2-income 80000 --child 3:centre-based:12.50:40
    ccs-calc scenarios --p1-income 90000 --child 2:family-day-care:13:30 --mode common
    ccs-calc rates --start 80000 --stop 400000 --step 20000
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from . import __version__
from .calculators.subsidy_rate import rate_table
from .config import DEFAULT_SCHEDULE, load_schedule
from .errors import InvalidInput
from .scenarios.analyzer import METRICS, METRIC_ALIASES, comparison_report
from .scenarios.generator import generate_common, generate_exhaustive
from .scenarios.models import Child, FamilyProfile
from .scenarios.periods import PERIOD_MULTIPLIERS


def parse_child(value: str) -> Child:
    """Parse AGE:CARE_TYPE:FEE:HOURS into a Child."""
    parts = value.split(":")
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(
            f"Expected AGE:CARE_TYPE:FEE:HOURS, got {value!r}"
        )
    age, care_type, fee, hours = parts
    try:
        return Child(
            age=float(age),
            care_type=care_type,
            provider_fee=float(fee),
            hours_per_week=float(hours),
        )
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number in child {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccs-calc",
        description="Estimate Child Care Subsidy and compare parental work arrangements",
    )
    parser.add_argument(
        "--schedule",
        type=Path,
        help="JSON rate schedule (default: built-in 2025-26 rates)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scenarios command
    scenarios_parser = subparsers.add_parser(
        "scenarios",
        help="Compare work-day scenarios for a family",
    )
    scenarios_parser.add_argument("--p1-income", type=float, required=True, help="Parent 1 full-time income")
    scenarios_parser.add_argument("--p1-hours", type=float, default=7.6, help="Parent 1 hours per day (default: 7.6)")
    scenarios_parser.add_argument("--p2-income", type=float, default=0, help="Parent 2 full-time income (default: 0)")
    scenarios_parser.add_argument("--p2-hours", type=float, default=7.6, help="Parent 2 hours per day (default: 7.6)")
    scenarios_parser.add_argument(
        "--child",
        type=parse_child,
        action="append",
        required=True,
        help="Child as AGE:CARE_TYPE:FEE:HOURS (repeatable)",
    )
    scenarios_parser.add_argument(
        "--mode",
        choices=["exhaustive", "common"],
        default="exhaustive",
        help="Every combination or a curated subset (default: exhaustive)",
    )
    scenarios_parser.add_argument(
        "--sort",
        choices=sorted(set(METRICS) | set(METRIC_ALIASES)),
        default="net_income",
        help="Metric to sort by (default: net_income)",
    )
    scenarios_parser.add_argument("--order", choices=["asc", "desc"], default="desc")
    scenarios_parser.add_argument(
        "--period",
        choices=list(PERIOD_MULTIPLIERS),
        default="annual",
        help="Period for subsidy and cost columns (default: annual)",
    )
    scenarios_parser.add_argument("--withholding", type=float, help="Withholding percentage (default: 5)")
    scenarios_parser.add_argument("--progress", action="store_true", help="Show a progress bar")

    # Rates command
    rates_parser = subparsers.add_parser(
        "rates",
        help="Print the standard and higher CCS rates over an income range",
    )
    rates_parser.add_argument("--start", type=float, default=0)
    rates_parser.add_argument("--stop", type=float, default=550000)
    rates_parser.add_argument("--step", type=float, default=25000)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        schedule = load_schedule(args.schedule) if args.schedule else DEFAULT_SCHEDULE

        if args.command == "scenarios":
            family = FamilyProfile(
                parent1_base_income=args.p1_income,
                parent1_hours_per_day=args.p1_hours,
                parent2_base_income=args.p2_income,
                parent2_hours_per_day=args.p2_hours if args.p2_income > 0 else 0,
            )
            generate = generate_exhaustive if args.mode == "exhaustive" else generate_common
            scenarios = generate(
                family,
                args.child,
                withholding_rate=args.withholding,
                show_progress=args.progress,
                schedule=schedule,
            )
            print(comparison_report(scenarios, args.sort, args.order, args.period))
            if not scenarios:
                sys.exit(1)

        elif args.command == "rates":
            if args.step <= 0:
                raise InvalidInput("Step must be a positive number")
            incomes = np.arange(args.start, args.stop + args.step, args.step)
            print(rate_table(incomes, schedule).to_string(index=False))

    except (InvalidInput, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
