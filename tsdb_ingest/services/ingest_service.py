"""
Service layer for metric ingestion.
"""

from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional

from tsdb_ingest.core.config import Settings
from tsdb_ingest.core.errors import DatabaseError, ParsingError
from tsdb_ingest.core.logging import get_logger, log_duration
from tsdb_ingest.core.storage import MetricStore
from tsdb_ingest.models import MetricPoint
from tsdb_ingest.transformers import get_parser

logger = get_logger(__name__)

@dataclass
class IngestMetrics:
    """Running counters for an ingest service."""
    started_at: datetime = field(default_factory=datetime.now)
    batches_accepted: int = 0
    batches_rejected: int = 0
    points_ingested: int = 0
    last_error: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert counters to a dictionary."""
        return {
            'started_at': self.started_at.isoformat(),
            'batches_accepted': self.batches_accepted,
            'batches_rejected': self.batches_rejected,
            'points_ingested': self.points_ingested,
            'last_error': self.last_error
        }

class IngestService:
    """Parses metric blobs into canonical points and optionally stores them."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[MetricStore] = None,
        fmt: Optional[str] = None
    ):
        """Initialize the ingest service.

        Args:
            settings: Optional Settings instance for configuration
            store: Optional MetricStore; created from settings when storage
                is enabled and none is given
            fmt: Optional format name overriding ``ingest.format``
        """
        self.settings = settings or Settings()
        self.fmt = fmt or self.settings.ingest.format
        self.parser = get_parser(self.fmt)

        if store is None and self.settings.storage.enabled:
            store = MetricStore(self.settings.storage.db_path)
        self.store = store

        self.metrics = IngestMetrics()
        self._lock = Lock()

    @log_duration(logger)
    def ingest(self, output: str) -> List[MetricPoint]:
        """Parse and transform one blob of metric lines.

        Args:
            output: Raw newline separated metric text

        Returns:
            Canonical metric points in input order

        Raises:
            ParsingError: If any line is malformed; nothing is stored
            DatabaseError: If storing the points fails
        """
        try:
            points = self.parser(output).transform()
        except ParsingError as e:
            with self._lock:
                self.metrics.batches_rejected += 1
                self.metrics.last_error = str(e)
            logger.warning(
                "metrics_rejected",
                format=self.fmt,
                error_code=e.error_code,
                error=str(e),
                **e.details
            )
            raise

        if self.store is not None:
            try:
                self.store.store_points(points)
            except DatabaseError as e:
                with self._lock:
                    self.metrics.batches_rejected += 1
                    self.metrics.last_error = str(e)
                logger.warning(
                    "metrics_store_failed",
                    format=self.fmt,
                    error_code=e.error_code,
                    message=str(e),
                    details=e.details
                )
                raise

        with self._lock:
            self.metrics.batches_accepted += 1
            self.metrics.points_ingested += len(points)

        logger.info("metrics_parsed", format=self.fmt, points=len(points))
        return points

    def get_statistics(self) -> Dict:
        """Get ingestion statistics."""
        with self._lock:
            return self.metrics.to_dict()

    def close(self) -> None:
        """Release the metric store, if any."""
        if self.store is not None:
            self.store.close()
