"""Command-line interface for the on-call rota tool."""

import argparse
import logging
import sys
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import ConfigurationError, RotaConfig, week_start
from oncallrota.loaders.files import load_inputs, parse_date
from oncallrota.output.console import print_schedule
from oncallrota.output.csv_export import CSVExporter
from oncallrota.output.pdf_generator import PDFGenerator
from oncallrota.scheduling.rotation import make_shuffle
from oncallrota.scheduling.scheduler import RotaScheduler
from oncallrota.validation.validator import ScheduleValidator


def _prompt_value(
    question: str,
    default,
    parse: Callable,
    input_fn: Callable[[str], str],
):
    """Ask until the answer parses.

    An empty answer, or end of input, keeps the default.
    """
    while True:
        try:
            answer = input_fn(f"{question} [{default}]: ").strip()
        except EOFError:
            print()
            return default
        if not answer:
            return default
        try:
            return parse(answer)
        except ValueError:
            print(f"  Could not understand {answer!r}, please try again.")


def _week_count(text: str) -> int:
    """Parse a week count; zero is allowed and gives an empty rota."""
    value = int(text)
    if value < 0:
        raise ValueError(f"expected zero or more weeks, got {value}")
    return value


def prompt_for_config(
    config: RotaConfig,
    input_fn: Callable[[str], str] = input,
) -> RotaConfig:
    """Interactively fill in the start date and number of weeks."""
    config.start_date = _prompt_value(
        "Start date (YYYY-MM-DD)", config.start_date, parse_date, input_fn
    )
    config.num_weeks = _prompt_value(
        "Number of weeks", config.num_weeks, _week_count, input_fn
    )
    return config


def create_sample_calendar(start_date: date, members: list[str]) -> CalendarSet:
    """Create a sample calendar for the demo.

    Puts a holiday in weeks 3 and 8, patching every fourth week, and gives
    the first two members a week off each.
    """
    monday = week_start(start_date)
    holidays = {monday + timedelta(weeks=2), monday + timedelta(weeks=7, days=4)}
    patching = {monday + timedelta(weeks=w, days=1) for w in range(0, 12, 4)}
    unavailability = {}
    if members:
        unavailability[members[0]] = {monday + timedelta(weeks=1, days=d) for d in range(7)}
    if len(members) > 1:
        unavailability[members[1]] = {monday + timedelta(weeks=5, days=2)}
    return CalendarSet(holidays=holidays, patching=patching, unavailability=unavailability)


def run_demo(member_count: int = 5, weeks: int = 12, seed: Optional[int] = None) -> None:
    """Run a demo rota generation with synthetic inputs."""
    names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]
    members = [
        names[i % len(names)] if i < len(names) else f"{names[i % len(names)]}{i // len(names) + 1}"
        for i in range(member_count)
    ]
    print(f"Generating demo rota for {member_count} members over {weeks} weeks...")

    start = week_start(date.today())
    calendar = create_sample_calendar(start, members)

    scheduler = RotaScheduler(shuffle=make_shuffle(seed))
    schedule, stats = scheduler.generate_schedule_with_stats(members, start, weeks, calendar)

    print()
    print_schedule(schedule, stats)
    _report_validation(schedule, stats["roster"], calendar)


def run_generate(config: RotaConfig) -> int:
    """Load inputs, build the rota, validate it and export as requested."""
    config.validate()
    inputs = load_inputs(config)
    calendar = inputs.calendar()

    scheduler = RotaScheduler()
    schedule, stats = scheduler.generate_schedule_with_stats(
        inputs.roster, config.start_date, config.num_weeks, calendar
    )

    print_schedule(schedule, stats)
    is_valid = _report_validation(schedule, inputs.roster, calendar)

    if config.output_csv:
        CSVExporter().export(schedule, config.output_csv)
        print(f"\nCSV written to {config.output_csv}")
    if config.output_pdf:
        PDFGenerator().generate(schedule, config.output_pdf, stats=stats)
        print(f"PDF written to {config.output_pdf}")

    return 0 if is_valid else 1


def _report_validation(schedule, roster, calendar) -> bool:
    result = ScheduleValidator().validate(schedule, roster, calendar)
    if result.is_valid:
        print("\nValidation: PASSED")
    else:
        print(f"\nValidation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings[:3]:
            print(f"    - {warning}")
        if len(result.warnings) > 3:
            print(f"    ... and {len(result.warnings) - 3} more warnings")
    return result.is_valid


def _date_arg(text: str) -> date:
    try:
        return parse_date(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {text!r}, expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="On-call rota generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate                         Use team.txt etc. in the current directory
  %(prog)s generate --weeks 26 --csv rota.csv
  %(prog)s generate --interactive           Prompt for start date and weeks
  %(prog)s demo --count 6                   Demo rota with 6 synthetic members
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every candidate decision",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    defaults = RotaConfig()
    gen_parser = subparsers.add_parser("generate", help="Generate a rota from input files")
    gen_parser.add_argument("--team", type=Path, default=defaults.team_file,
                            help=f"Team file (default: {defaults.team_file})")
    gen_parser.add_argument("--holidays", type=Path, default=defaults.holidays_file,
                            help=f"Holiday dates file (default: {defaults.holidays_file})")
    gen_parser.add_argument("--patching", type=Path, default=defaults.patching_file,
                            help=f"Patching dates file (default: {defaults.patching_file})")
    gen_parser.add_argument("--unavailability", type=Path,
                            default=defaults.unavailability_file,
                            help=f"Unavailability file (default: {defaults.unavailability_file})")
    gen_parser.add_argument("--start", "-s", type=_date_arg, default=None,
                            help="Start date YYYY-MM-DD (default: today)")
    gen_parser.add_argument("--weeks", "-w", type=int, default=defaults.num_weeks,
                            help=f"Number of weeks (default: {defaults.num_weeks})")
    gen_parser.add_argument("--csv", type=Path, default=None, help="Write the rota to CSV")
    gen_parser.add_argument("--pdf", type=Path, default=None, help="Write the rota to PDF")
    gen_parser.add_argument("--seed", type=int, default=None,
                            help="Seed the roster shuffle for a reproducible order")
    gen_parser.add_argument("--interactive", "-i", action="store_true",
                            help="Prompt for start date and number of weeks")

    demo_parser = subparsers.add_parser("demo", help="Run a demo rota generation")
    demo_parser.add_argument("--count", "-c", type=int, default=5,
                             help="Number of members (default: 5)")
    demo_parser.add_argument("--weeks", "-w", type=int, default=12,
                             help="Number of weeks (default: 12)")
    demo_parser.add_argument("--seed", type=int, default=None,
                             help="Seed the roster shuffle")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            config = RotaConfig(
                team_file=args.team,
                holidays_file=args.holidays,
                patching_file=args.patching,
                unavailability_file=args.unavailability,
                num_weeks=args.weeks,
                output_csv=args.csv,
                output_pdf=args.pdf,
                seed=args.seed,
            )
            if args.start is not None:
                config.start_date = args.start
            if args.interactive:
                prompt_for_config(config)
            return run_generate(config)
        elif args.command == "demo":
            run_demo(args.count, args.weeks, args.seed)
            return 0
        else:
            parser.print_help()
            return 1
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
