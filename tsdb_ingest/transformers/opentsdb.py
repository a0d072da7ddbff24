"""Parser for the OpenTSDB put line protocol.

Each line carries one metric::

    <name> <timestamp> <value> <tag1>=<val1> [<tag2>=<val2> ...]

Tokens are separated by a single space. Timestamps with exactly 13 digits are
treated as milliseconds and truncated to seconds. Parsing is all-or-nothing:
the first malformed line aborts the whole blob.
"""

import math
import re
from typing import List

from tsdb_ingest.core.constants import (
    INT64_MAX,
    INT64_MIN,
    LINE_SEPARATOR,
    MILLISECOND_TIMESTAMP_DIGITS,
    MIN_METRIC_TOKENS,
    TAG_SEPARATOR,
    TOKEN_SEPARATOR
)
from tsdb_ingest.core.errors import (
    InvalidMetricError,
    InvalidTagError,
    InvalidTimestampError,
    InvalidValueError
)
from tsdb_ingest.core.logging import get_logger
from tsdb_ingest.models import MetricTag, OpenTSDBList, OpenTSDBMetric

logger = get_logger(__name__)

TIMESTAMP_RE = re.compile(r"^[+-]?([0-9]+)$")
VALUE_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

def parse_timestamp(token: str, line: str = "", line_number: int = 0) -> int:
    """Parse a timestamp token into second resolution.

    Args:
        token: Raw timestamp token
        line: Line the token came from, for error details
        line_number: 1-based line number, for error details

    Returns:
        Unix timestamp in seconds

    Raises:
        InvalidTimestampError: If the token is not a base-10 int64
    """
    match = TIMESTAMP_RE.match(token)
    if not match:
        raise InvalidTimestampError(
            f"invalid opentsdb metric timestamp, must be an integer: {token}",
            details={"token": token, "line": line, "line_number": line_number}
        )

    timestamp = int(token)
    if not INT64_MIN <= timestamp <= INT64_MAX:
        raise InvalidTimestampError(
            f"invalid opentsdb metric timestamp, out of range: {token}",
            details={"token": token, "line": line, "line_number": line_number}
        )

    if len(match.group(1)) == MILLISECOND_TIMESTAMP_DIGITS:
        # Truncate toward zero rather than flooring
        seconds = abs(timestamp) // 1000
        timestamp = seconds if timestamp >= 0 else -seconds
    return timestamp

def parse_value(token: str, line: str = "", line_number: int = 0) -> float:
    """Parse a metric value token.

    Raises:
        InvalidValueError: If the token is not a finite decimal number
    """
    if VALUE_RE.match(token):
        value = float(token)
        if math.isfinite(value):
            return value
    raise InvalidValueError(
        f"invalid opentsdb metric value, must be an integer or a floating point value: {token}",
        details={"token": token, "line": line, "line_number": line_number}
    )

def parse_tag(token: str, line: str = "", line_number: int = 0) -> MetricTag:
    """Parse a ``key=value`` tag token.

    Raises:
        InvalidTagError: If the token does not hold exactly one separator
            with a non-empty key and value
    """
    parts = token.split(TAG_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidTagError(
            f"invalid opentsdb metric tag: {token}",
            details={"token": token, "line": line, "line_number": line_number}
        )
    return MetricTag(name=parts[0], value=parts[1])

def parse_line(line: str, line_number: int = 0) -> OpenTSDBMetric:
    """Parse a single OpenTSDB put line.

    Args:
        line: Raw metric line
        line_number: 1-based line number, for error details

    Returns:
        Parsed OpenTSDBMetric

    Raises:
        ParsingError: If any part of the line is malformed
    """
    parts = line.split(TOKEN_SEPARATOR)

    # A metric needs a name, timestamp, value and at least one tag
    if len(parts) < MIN_METRIC_TOKENS or not parts[0]:
        raise InvalidMetricError(
            f"invalid opentsdb metric, at least {MIN_METRIC_TOKENS} arguments are required: {line}",
            details={"line": line, "line_number": line_number}
        )

    timestamp = parse_timestamp(parts[1], line, line_number)
    value = parse_value(parts[2], line, line_number)
    tags = [parse_tag(token, line, line_number) for token in parts[3:]]

    return OpenTSDBMetric(name=parts[0], value=value, timestamp=timestamp, tags=tags)

def parse_opentsdb(output: str) -> OpenTSDBList:
    """Parse a blob of OpenTSDB put lines.

    Surrounding whitespace is stripped and empty lines are skipped.

    Args:
        output: Newline separated metric lines

    Returns:
        OpenTSDBList in input line order; empty for blank input

    Raises:
        ParsingError: On the first malformed line; no partial batch is returned
    """
    metrics: List[OpenTSDBMetric] = []
    output = output.strip()
    if not output:
        return OpenTSDBList(metrics=metrics)

    for line_number, line in enumerate(output.split(LINE_SEPARATOR), start=1):
        if not line:
            continue
        metrics.append(parse_line(line, line_number))

    logger.debug("opentsdb_parsed", metrics=len(metrics))
    return OpenTSDBList(metrics=metrics)
