"""Metric format transformers.

Each registered format maps raw text to a batch whose ``transform()`` yields
canonical metric points.
"""

from typing import Callable, Dict, List

from tsdb_ingest.core.constants import DEFAULT_FORMAT, OPENTSDB_FORMAT
from tsdb_ingest.core.errors import UnsupportedFormatError
from tsdb_ingest.models import MetricPoint
from .opentsdb import parse_opentsdb

TRANSFORMERS: Dict[str, Callable] = {
    OPENTSDB_FORMAT: parse_opentsdb,
}

def get_parser(fmt: str) -> Callable:
    """Look up the parser registered for a format name.

    Raises:
        UnsupportedFormatError: If no parser is registered for ``fmt``
    """
    try:
        return TRANSFORMERS[fmt.lower()]
    except KeyError:
        raise UnsupportedFormatError(
            f"unsupported metric format: {fmt}",
            details={"format": fmt, "supported": sorted(TRANSFORMERS)}
        )

def parse_metrics(output: str, fmt: str = DEFAULT_FORMAT) -> List[MetricPoint]:
    """Parse a blob in the given format and transform it to metric points."""
    return get_parser(fmt)(output).transform()

__all__ = [
    'TRANSFORMERS',
    'get_parser',
    'parse_metrics',
    'parse_opentsdb'
]
