#!/usr/bin/env python3
"""
CLI for parsing and summarizing load-balancer logs.

Parses access or connection logs (plain or gzip), applies optional
filters, and prints a summary, the matching records as JSON, or CSV.

Usage:
    # Summary of an access log
    python scripts/analyze_logs.py --schema access --input data/alb.log

    # Connection logs from stdin
    zcat data/conn.log.gz | python scripts/analyze_logs.py --schema connection

    # 5xx responses for POST requests, as CSV
    python scripts/analyze_logs.py --schema access --input data/alb.log.gz \\
        --filter method=POST --contains status_code=5 --format csv

    # Request counts per method and status
    python scripts/analyze_logs.py --schema access --input data/alb.log \\
        --group-by method --group-by status_code

    # List available schemas
    python scripts/analyze_logs.py --list-schemas
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from elb_log_analyzer.analysis import (
    apply_filters,
    compute_statistics,
    filter_timestamp_range,
    group_records,
    records_to_dataframe,
)
from elb_log_analyzer.analysis.filters import parse_timestamp
from elb_log_analyzer.config import get_settings
from elb_log_analyzer.parsing import LogParsingError, LogProcessor, list_schemas
from elb_log_analyzer.utils import setup_logging

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def parse_field_assignment(value: str) -> tuple[str, str]:
    """Parse a FIELD=VALUE argument."""
    field, sep, text = value.partition("=")
    if not sep or not field.strip():
        raise argparse.ArgumentTypeError(
            f"Invalid filter: {value!r}. Use FIELD=VALUE"
        )
    return field.strip(), text


def find_duplicate_fields(assignments: list[tuple[str, str]]) -> list[str]:
    """Return field names assigned more than once, in first-seen order."""
    seen = set()
    duplicates = []
    for field, _ in assignments:
        if field in seen and field not in duplicates:
            duplicates.append(field)
        seen.add(field)
    return duplicates


def parse_datetime(value: str) -> datetime:
    """Parse a datetime argument in ISO 8601 or YYYY-MM-DD format."""
    try:
        return parse_timestamp(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid datetime format: {value}. Use ISO 8601 (YYYY-MM-DDTHH:MM:SS) or YYYY-MM-DD"
        )


def positive_int(value: str) -> int:
    """Parse a positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Must be greater than 0, got {number}")
    return number


def print_summary(result, statistics, groups=None) -> None:
    """Print a human-readable summary to stdout."""
    print()
    print(f"📊 {result.schema.value.capitalize()} Log Summary")
    print("=" * 50)
    print(f"  Lines Read: {result.total_lines:,}")
    print(f"  Records Parsed: {result.parsed_lines:,}")
    if result.skipped_lines > 0:
        print(f"  Lines Skipped: {result.skipped_lines:,}")
    print(f"  Records Matched: {statistics.total:,}")

    if result.schema.value == "access":
        print()
        print("  Status Codes:")
        print(f"    2xx: {statistics.success:,}")
        print(f"    3xx: {statistics.redirection:,}")
        print(f"    4xx: {statistics.client_error:,}")
        print(f"    5xx: {statistics.server_error:,}")

    if statistics.top_client_ips:
        print()
        print("  Top Client IPs:")
        for ip, count in statistics.top_client_ips:
            print(f"    {ip}: {count:,}")

    if statistics.latency:
        latency = statistics.latency
        print()
        print(f"  Latency ({latency.count:,} samples):")
        print(f"    Mean: {latency.mean:.3f}s")
        print(f"    Median: {latency.median:.3f}s")
        for name, value in latency.percentiles.items():
            print(f"    {name}: {value:.3f}s")

    if groups is not None:
        print()
        print("  Groups:")
        if groups.empty:
            print("    (none)")
        else:
            for line in groups.to_string(index=False).splitlines():
                print(f"    {line}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Load-balancer log analysis CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summary of an access log
  python scripts/analyze_logs.py --schema access --input data/alb.log

  # Connection logs from stdin
  zcat data/conn.log.gz | python scripts/analyze_logs.py --schema connection

  # Matching records as JSON
  python scripts/analyze_logs.py --schema access --input data/alb.log --search bot --format json

  # Request counts per method and status
  python scripts/analyze_logs.py --schema access --input data/alb.log --group-by method --group-by status_code
        """,
    )

    parser.add_argument(
        "--schema",
        "-s",
        type=str,
        help="Log schema: access or connection",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        default=STDIN_MARKER,
        help="Input log file, plain or .gz (default: stdin)",
    )
    parser.add_argument(
        "--filter",
        dest="equals",
        type=parse_field_assignment,
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Keep records whose field equals VALUE (repeatable)",
    )
    parser.add_argument(
        "--contains",
        type=parse_field_assignment,
        action="append",
        default=[],
        metavar="FIELD=TEXT",
        help="Keep records whose field contains TEXT, case-insensitive (repeatable)",
    )
    parser.add_argument(
        "--search",
        type=str,
        help="Keep records where any field contains the text",
    )
    parser.add_argument(
        "--start-date",
        type=parse_datetime,
        help="Keep records at or after this time (ISO 8601 or YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end-date",
        type=parse_datetime,
        help="Keep records at or before this time (ISO 8601 or YYYY-MM-DD)",
    )
    parser.add_argument(
        "--group-by",
        action="append",
        default=[],
        metavar="FIELD",
        help="Group matching records by FIELD, outermost first (repeatable)",
    )
    parser.add_argument(
        "--top-n",
        type=positive_int,
        help="Number of top client IPs to report (default: from settings)",
    )
    parser.add_argument(
        "--format",
        choices=["summary", "json", "csv"],
        default="summary",
        help="Output format (default: summary)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first unparseable line instead of skipping it",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file (default: elb-log-analyzer.yaml if present)",
    )
    parser.add_argument(
        "--list-schemas",
        action="store_true",
        help="List all available schemas and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.config and not Path(args.config).exists():
        print(f"❌ Config file not found: {args.config}", file=sys.stderr)
        return 1

    settings = get_settings(args.config)
    setup_logging(level=logging.DEBUG if args.verbose else settings.log_level)
    for error in settings.validate():
        logger.warning(f"Invalid setting: {error}")

    # List schemas if requested
    if args.list_schemas:
        print("Available schemas:")
        for schema in list_schemas():
            print(f"  {schema}")
        return 0

    if not args.schema:
        parser.error("--schema is required (unless using --list-schemas)")

    for option, assignments in (("--filter", args.equals), ("--contains", args.contains)):
        duplicates = find_duplicate_fields(assignments)
        if duplicates:
            parser.error(f"{option} given more than once for: {', '.join(duplicates)}")

    if args.start_date and args.end_date and args.start_date > args.end_date:
        parser.error(
            f"Invalid time range: start_date ({args.start_date}) > end_date ({args.end_date})"
        )

    strict = args.strict or settings.strict_validation
    top_n = args.top_n or max(settings.top_client_ips, 1)

    try:
        processor = LogProcessor(args.schema, strict=strict)

        if args.input == STDIN_MARKER:
            logger.info(f"Reading {processor.schema.value} logs from stdin")
            result = processor.process(sys.stdin.read())
        else:
            result = processor.process_file(args.input, encoding=settings.encoding)

        records = apply_filters(
            result.records,
            equals=dict(args.equals),
            contains=dict(args.contains),
            search=args.search,
        )
        if args.start_date or args.end_date:
            records = filter_timestamp_range(
                records, start=args.start_date, end=args.end_date
            )

        groups = None
        if args.group_by:
            groups = group_records(records, args.group_by, processor.schema)

        statistics = compute_statistics(records, processor.schema, top_n=top_n)

        if args.format == "json":
            output = {
                "schema": result.schema.value,
                "total_lines": result.total_lines,
                "parsed_lines": result.parsed_lines,
                "skipped_lines": result.skipped_lines,
                "statistics": statistics.to_dict(),
                "records": [record.to_dict() for record in records],
            }
            if groups is not None:
                output["groups"] = json.loads(groups.to_json(orient="records"))
            print(json.dumps(output, indent=2, default=str))
        elif args.format == "csv":
            frame = (
                groups
                if groups is not None
                else records_to_dataframe(records, processor.schema)
            )
            frame.to_csv(sys.stdout, index=False)
        else:
            print_summary(result, statistics, groups)

        return 0

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        return 130
    except (LogParsingError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ Fatal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
