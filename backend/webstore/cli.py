"""
Run WebStore reports from the command line

Opens one database connection, runs the selected reports in order and
prints them to stdout. A failing report is logged and skipped; the exit
status is 1 if any report failed.

Usage:
    webstore-reports                      # all ten reports
    webstore-reports --report 3 --report 8
    webstore-reports --list
"""
import sys
import argparse
import logging
from typing import List, Optional

from dotenv import load_dotenv

# Load .env before settings are built
load_dotenv()

from webstore.core.config import settings
from webstore.core.database import db_connection
from webstore.services.report_generator import REPORTS, ReportGenerator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Print WebStore reports')
    parser.add_argument(
        '--report', '-r',
        type=int,
        action='append',
        choices=sorted(REPORTS),
        metavar='N',
        help='Report number to run (1-10, repeatable; default: all)'
    )
    parser.add_argument('--list', action='store_true', help='List available reports and exit')
    parser.add_argument('--date-format', help='strftime format for dates (default: REPORT_DATE_FORMAT)')
    parser.add_argument('--database-url', help='Database URL (default: DATABASE_URL)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def list_reports() -> None:
    for report in REPORTS.values():
        print(f"{report.number:2d}. {report.title}")


def run_reports(generator: ReportGenerator, conn, numbers: List[int]) -> int:
    """
    Run reports one at a time, continuing past failures

    Returns:
        Number of failed reports
    """
    failures = 0
    for index, number in enumerate(numbers):
        try:
            generator.run_report(number, separate=index > 0)
        except Exception as e:
            failures += 1
            logger.error(f"Report {number} ({REPORTS[number].title}) failed: {e}")
            # Clear the aborted transaction so the next report can query
            conn.rollback()
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list:
        list_reports()
        return 0

    numbers = args.report or sorted(REPORTS)

    try:
        with db_connection(args.database_url) as conn:
            generator = ReportGenerator(conn, date_format=args.date_format)
            failures = run_reports(generator, conn, numbers)
    except Exception as e:
        logger.error(f"Could not run reports: {e}")
        return 1

    if failures:
        logger.error(f"{failures} of {len(numbers)} reports failed")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
