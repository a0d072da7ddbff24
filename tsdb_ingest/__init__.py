"""Ingestion of OpenTSDB put lines into canonical metric points."""

from tsdb_ingest.models import MetricPoint, MetricTag
from tsdb_ingest.transformers import parse_metrics, parse_opentsdb

__version__ = "0.1.0"

__all__ = [
    'MetricPoint',
    'MetricTag',
    'parse_metrics',
    'parse_opentsdb'
]
