# HabitTracker/cli.py

import argparse
import logging
import math
import sys

from dotenv import load_dotenv
load_dotenv()

from HabitTracker.config import Settings
from HabitTracker.storage import ActivityStore, StorageError
from HabitTracker.summary.aggregate import build_report, resolve_timezone
from HabitTracker.summary.dashboard import render_dashboard

logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
    level=logging.WARNING,
)
log = logging.getLogger("HabitTracker.cli")


def non_negative_hours(value: str) -> float:
    try:
        hours = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hours value: '{value}'")
    if hours < 0 or not math.isfinite(hours):
        raise argparse.ArgumentTypeError(f"hours must be a non-negative number, got '{value}'")
    return hours


def handle_log(args_ns, current_settings: Settings):
    store = ActivityStore.from_settings(current_settings)
    # Refuse to overwrite a file that failed to parse
    store.load(strict=True)
    description = " ".join(args_ns.description)
    store.append(args_ns.hours, description)
    print("Activity logged successfully!")


def handle_view(args_ns, current_settings: Settings):
    days = args_ns.days if args_ns.days is not None else current_settings.default_view_days
    store = ActivityStore.from_settings(current_settings)
    result = store.load()
    if result.recovered:
        print(
            f"Warning: {store.data_file} could not be parsed ({result.error}); showing no data.",
            file=sys.stderr,
        )
    report = build_report(
        store.activities,
        days=days,
        tz=resolve_timezone(current_settings.local_tz),
        chart_days=current_settings.chart_days,
        months_shown=current_settings.months_shown,
    )
    print(render_dashboard(report, current_settings))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habit-tracker",
        description="Track your daily improvements"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for all HabitTracker modules."
    )
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- Log Subcommand ---
    parser_log = subparsers.add_parser("log", help="Log hours spent on an activity.")
    parser_log.add_argument("hours", type=non_negative_hours, help="Hours spent")
    parser_log.add_argument("description", nargs="+", help="Activity description")
    parser_log.set_defaults(func=handle_log)

    # --- View Subcommand ---
    parser_view = subparsers.add_parser("view", help="Show the activity dashboard.")
    parser_view.add_argument(
        "days",
        type=int,
        nargs="?",
        default=None,
        help="Number of days to show (default: 365)."
    )
    parser_view.set_defaults(func=handle_view)

    return parser


def main(argv=None):
    settings = Settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger("HabitTracker").setLevel(logging.DEBUG)
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)
        log.debug("Debug logging enabled via CLI.")

    try:
        args.func(args, settings)
    except StorageError as e:
        log.debug(f"Command '{args.command}' failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
