"""Command line entry point for converting metric lines into canonical points."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from tsdb_ingest.core.config import Settings
from tsdb_ingest.core.errors import IngestError, error_handler
from tsdb_ingest.core.logging import get_logger, setup_logging
from tsdb_ingest.core.storage import MetricStore
from tsdb_ingest.models import MetricPoint
from tsdb_ingest.services import IngestService
from tsdb_ingest.transformers import TRANSFORMERS

logger = get_logger(__name__)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        description="Convert metric lines into canonical metric points (JSON on stdout)."
    )

    parser.add_argument(
        "input",
        type=str,
        help="Input metrics file or '-' for stdin"
    )

    parser.add_argument(
        "--format",
        type=str,
        choices=sorted(TRANSFORMERS),
        default=None,
        help="Input format (default: ingest.format setting)"
    )

    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="Store points in this DuckDB database"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: logging.level setting)"
    )

    return parser.parse_args(argv)

def read_input(source: str) -> str:
    """Read the whole metrics blob from a file or stdin."""
    if source == '-':
        return sys.stdin.read()
    return Path(source).read_text(encoding='utf-8')

@error_handler(reraise=True, exclude=(KeyboardInterrupt, SystemExit))
def run(args: argparse.Namespace) -> List[MetricPoint]:
    """Ingest the input named by ``args`` and return the points."""
    settings = Settings()
    setup_logging(
        args.log_level or settings.logging.level,
        enable_debug=settings.logging.enable_debug
    )

    store = MetricStore(args.db_path) if args.db_path else None
    try:
        service = IngestService(settings, store=store, fmt=args.format)
    except IngestError:
        if store is not None:
            store.close()
        raise

    try:
        return service.ingest(read_input(args.input))
    finally:
        service.close()

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tsdb-ingest command."""
    args = parse_args(argv)

    try:
        points = run(args)
    except (IngestError, OSError):
        return 1

    json.dump([point.model_dump() for point in points], sys.stdout)
    sys.stdout.write("\n")
    return 0

if __name__ == "__main__":
    sys.exit(main())
