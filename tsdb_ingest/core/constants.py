"""Constants used throughout the core modules."""

# Line protocol
TOKEN_SEPARATOR = " "
LINE_SEPARATOR = "\n"
TAG_SEPARATOR = "="
MIN_METRIC_TOKENS = 4  # name, timestamp, value and at least one tag
MILLISECOND_TIMESTAMP_DIGITS = 13

# int64 bounds for timestamps
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Formats
OPENTSDB_FORMAT = "opentsdb"
DEFAULT_FORMAT = OPENTSDB_FORMAT

# Editions
CORE_EDITION = "core"
ENTERPRISE_EDITION = "enterprise"
EDITION_HEADER = "Sensu-Edition"

# Storage
DEFAULT_DB_PATH = ":memory:"

# Logging
DEFAULT_LOG_LEVEL = "INFO"
