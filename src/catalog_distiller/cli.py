"""Command-line interface for catalog-distiller."""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from catalog_distiller.clients import GeminiClient
from catalog_distiller.clients.gemini_client import DEFAULT_GEMINI_MODEL
from catalog_distiller.extractors import CSVExtractor
from catalog_distiller.matchers import CatalogSearch, select_daily_feature, sort_records
from schemas.issue_record import IssueRecord

DEFAULT_OUTPUT_PATH = Path("./workspace/catalog.json")
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"

RECORD_LIST = TypeAdapter(list[IssueRecord])


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def load_catalog(path: Path) -> list[IssueRecord]:
    """Load an exported catalog and return it in chronological order.

    Raises:
        pydantic.ValidationError: If the file is not a list of issue records
    """
    records = RECORD_LIST.validate_json(path.read_bytes())
    return sort_records(records)


def extract_catalog(args: argparse.Namespace) -> int:
    """Execute the extract command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    input_path = args.input.resolve()
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    try:
        result = CSVExtractor().extract_file(input_path)
    except OSError as e:
        logger.error(f"Failed to read input: {e}")
        return 1

    if not result.records:
        logger.error("No valid issues found. Ensure the CSV has Month/Year columns.")
        return 1

    output_path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(RECORD_LIST.dump_json(result.records, indent=2, by_alias=True))

    uncollected = sum(1 for r in result.records if r.is_uncollected)
    logger.info(f"Extracted catalog: {output_path}")
    logger.info(f"  Issues: {len(result.records)}")
    logger.info(f"  Uncollected: {uncollected}")
    logger.info(f"  Lines skipped: {result.lines_skipped}")

    return 0


def search_catalog(args: argparse.Namespace) -> int:
    """Execute the search command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    catalog_path = args.catalog.resolve()
    if not catalog_path.exists():
        logger.error(f"Catalog file not found: {catalog_path}")
        return 1

    try:
        records = load_catalog(catalog_path)
    except PydanticValidationError as e:
        logger.error(f"Invalid catalog file: {e}")
        return 1

    api_key = None if args.no_bridge else (args.api_key or os.environ.get(GEMINI_API_KEY_ENV))
    config = {"api_key": api_key, "model": args.model}

    with GeminiClient(config) as client:
        translator = client if client.is_configured else None
        results = CatalogSearch(translator).search(records, args.query)

    for record in results:
        print(record)

    if not results:
        logger.info(f"No issues match {args.query!r}")

    return 0


def show_featured(args: argparse.Namespace) -> int:
    """Execute the featured command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    catalog_path = args.catalog.resolve()
    if not catalog_path.exists():
        logger.error(f"Catalog file not found: {catalog_path}")
        return 1

    try:
        records = load_catalog(catalog_path)
    except PydanticValidationError as e:
        logger.error(f"Invalid catalog file: {e}")
        return 1

    today = args.date or date.today()
    feature = select_daily_feature(records, today)

    if feature.featured_year is None:
        logger.error("Catalog is empty")
        return 1

    print(f"{feature.month} {feature.featured_year}")
    for record in feature.issues:
        print(record)

    logger.info(f"  Featured issues: {len(feature.issues)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="catalog-distiller",
        description="Normalize and search chronological issue catalogs exported from spreadsheets",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract issue records from a CSV export",
        description="Scan a hand-maintained spreadsheet export for month/year anchors and write the recovered issues as JSON.",
    )
    extract_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the CSV export",
    )
    extract_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output path for the extracted catalog (default: {DEFAULT_OUTPUT_PATH})",
    )
    extract_parser.set_defaults(func=extract_catalog)

    search_parser = subparsers.add_parser(
        "search",
        help="Search an extracted catalog",
        description="Search by year (e.g. 1995) or free text. Free text is translated to a filter by Gemini when an API key is available, otherwise matched as a substring.",
    )
    search_parser.add_argument(
        "query",
        help="Year or free-text query",
    )
    search_parser.add_argument(
        "--catalog",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Path to the extracted catalog (default: {DEFAULT_OUTPUT_PATH})",
    )
    search_parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help=f"Gemini API key (default: ${GEMINI_API_KEY_ENV})",
    )
    search_parser.add_argument(
        "--model",
        type=str,
        default=DEFAULT_GEMINI_MODEL,
        help=f"Gemini model name (default: {DEFAULT_GEMINI_MODEL})",
    )
    search_parser.add_argument(
        "--no-bridge",
        action="store_true",
        help="Skip query translation and match free text as a substring",
    )
    search_parser.set_defaults(func=search_catalog)

    featured_parser = subparsers.add_parser(
        "featured",
        help="Show the featured year for a day",
        description="Rotate through the catalog's years by day of year and list the featured year's issues for the current month.",
    )
    featured_parser.add_argument(
        "--catalog",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Path to the extracted catalog (default: {DEFAULT_OUTPUT_PATH})",
    )
    featured_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Date to feature (ISO format: YYYY-MM-DD, default: today)",
    )
    featured_parser.set_defaults(func=show_featured)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
