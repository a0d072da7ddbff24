"""Module for storing canonical metric points using DuckDB."""

from typing import Dict, List, Optional, Generator
from contextlib import contextmanager
from threading import Lock
import duckdb

from tsdb_ingest.core.constants import DEFAULT_DB_PATH
from tsdb_ingest.core.errors import DatabaseError
from tsdb_ingest.core.logging import get_logger
from tsdb_ingest.models import MetricPoint, MetricTag

logger = get_logger(__name__)

class MetricStore:
    """Persists metric points and their tags, preserving arrival order."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Open the database and create the schema.

        Args:
            db_path: Path to the DuckDB file, or ``:memory:``

        Raises:
            DatabaseError: If the database cannot be opened or initialized
        """
        self.db_path = db_path
        self._conn_lock = Lock()
        self._conn: Optional[duckdb.DuckDBPyConnection] = None
        try:
            self._conn = duckdb.connect(db_path)
            self._initialize_schema()
        except duckdb.Error as e:
            self.close()
            raise DatabaseError(
                "Failed to initialize database",
                details={"db_path": db_path, "error": str(e)}
            )

    @contextmanager
    def get_connection(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """Yield the open connection while holding the store lock.

        Raises:
            DatabaseError: If the store has been closed
        """
        with self._conn_lock:
            if self._conn is None:
                raise DatabaseError("Metric store is closed", details={"db_path": self.db_path})
            yield self._conn

    def _initialize_schema(self) -> None:
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS metric_points (
                    point_id BIGINT PRIMARY KEY,
                    name TEXT NOT NULL,
                    value DOUBLE NOT NULL,
                    timestamp BIGINT NOT NULL,
                    ingested_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS metric_tags (
                    point_id BIGINT NOT NULL,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    value TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_metric_points_name ON metric_points(name)")

    def store_points(self, points: List[MetricPoint]) -> int:
        """Store a batch of points in a single transaction.

        Args:
            points: Canonical metric points

        Returns:
            Number of points stored

        Raises:
            DatabaseError: If the write fails; nothing from the batch is kept
        """
        if not points:
            return 0

        with self.get_connection() as conn:
            try:
                conn.begin()
                next_id = conn.execute(
                    "SELECT COALESCE(MAX(point_id), 0) + 1 FROM metric_points"
                ).fetchone()[0]

                point_rows = []
                tag_rows = []
                for offset, point in enumerate(points):
                    point_id = next_id + offset
                    point_rows.append([point_id, point.name, point.value, point.timestamp])
                    for position, tag in enumerate(point.tags):
                        tag_rows.append([point_id, position, tag.name, tag.value])

                conn.executemany(
                    "INSERT INTO metric_points (point_id, name, value, timestamp) VALUES (?, ?, ?, ?)",
                    point_rows
                )
                if tag_rows:
                    conn.executemany(
                        "INSERT INTO metric_tags (point_id, position, name, value) VALUES (?, ?, ?, ?)",
                        tag_rows
                    )
                conn.commit()
            except duckdb.Error as e:
                conn.rollback()
                raise DatabaseError(
                    "Failed to store metric points",
                    details={"points": len(points), "error": str(e)}
                )

        logger.debug("metric_points_stored", points=len(points), db_path=self.db_path)
        return len(points)

    def get_points(self, name: Optional[str] = None) -> List[MetricPoint]:
        """Read stored points back in insertion order.

        Args:
            name: Optional metric name filter

        Returns:
            List of MetricPoint objects
        """
        query = "SELECT point_id, name, value, timestamp FROM metric_points"
        params: list = []
        if name is not None:
            query += " WHERE name = ?"
            params.append(name)
        query += " ORDER BY point_id"

        try:
            with self.get_connection() as conn:
                rows = conn.execute(query, params).fetchall()
                tag_rows = conn.execute(
                    "SELECT point_id, name, value FROM metric_tags ORDER BY point_id, position"
                ).fetchall()
        except duckdb.Error as e:
            raise DatabaseError("Failed to read metric points", details={"error": str(e)})

        tags: Dict[int, List[MetricTag]] = {}
        for point_id, tag_name, tag_value in tag_rows:
            tags.setdefault(point_id, []).append(MetricTag(name=tag_name, value=tag_value))

        return [
            MetricPoint(name=row[1], value=row[2], timestamp=row[3], tags=tags.get(row[0], []))
            for row in rows
        ]

    def count_points(self) -> int:
        """Return the number of stored points."""
        with self.get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM metric_points").fetchone()[0]

    def close(self) -> None:
        """Close the database connection."""
        with self._conn_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
