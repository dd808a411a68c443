"""logkit demo: emit sample entries, then export them as JSON."""

import logging
import sys
from argparse import ArgumentParser

from logkit import (
    AllAvailable,
    CustomCategory,
    LastMinutes,
    LogContext,
    MainBundle,
    Severity,
    get_logger,
    save_export,
)

SEVERITIES = [s.value for s in Severity if s not in (Severity.UNDEFINED, Severity.UNKNOWN)]


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="logkit-demo",
        description="Emit sample log entries and export them as JSON.",
    )
    parser.add_argument(
        "--range-minutes",
        type=int,
        help="Only include entries from the last N minutes (default: all)",
    )
    parser.add_argument(
        "--severity",
        choices=SEVERITIES,
        help="Only include entries with exactly this severity",
    )
    parser.add_argument(
        "--category",
        help="Only include entries of this category (e.g. Development)",
    )
    parser.add_argument(
        "--export-dir",
        help="Write the export to a file in this directory instead of stdout",
    )
    return parser


def emit_samples(app_logger) -> int:
    """Write a few entries on the Development and Production handles.

    Returns the number of entries written (0 under a test harness).
    """
    development = app_logger.development()
    production = app_logger.production()
    if development is None or production is None:
        return 0

    development.debug("Loaded %d feature flags", 12)
    development.info("Cache warmed in %dms", 48)
    production.notice("User session started")
    production.error("Payment gateway returned %d", 502)
    production.fault("Ledger checksum mismatch")
    return 5


def run(args) -> int:
    app_logger = get_logger()
    written = emit_samples(app_logger)
    if written == 0:
        print("Test environment detected; no entries emitted.", file=sys.stderr)

    time_range = LastMinutes(args.range_minutes) if args.range_minutes is not None else AllAvailable()
    context = None
    if args.category:
        context = LogContext(bundle=MainBundle(), category=CustomCategory(args.category))

    data = app_logger.export(time_range, severity=args.severity, context=context)
    if data is None:
        print("No log entries to export.", file=sys.stderr)
        return 1

    if args.export_dir:
        path = save_export(data, args.export_dir)
        print(f"Exported to {path}")
    else:
        sys.stdout.write(data.decode("utf-8") + "\n")
    return 0


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [logkit-demo] %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except BrokenPipeError:
        sys.exit(0)
