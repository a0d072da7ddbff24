"""Service layer for metric ingestion."""

from .ingest_service import IngestMetrics, IngestService

__all__ = ['IngestMetrics', 'IngestService']
