"""Storage for analysis results: local SQLite and in-process memory backends."""

import itertools
import sqlite3
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
import logging

from seo_analyzer.config import settings
from seo_analyzer.models import AnalysisResult

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS seo_analyses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL,
    analysis_data TEXT NOT NULL,
    created_at TIMESTAMP NOT NULL,

    -- AMP pairing
    is_amp INTEGER NOT NULL DEFAULT 0,
    amp_url TEXT,
    regular_url TEXT,

    -- Score summary
    score INTEGER,
    issues INTEGER,
    warnings INTEGER,
    passed INTEGER
);
"""

CREATE_INDEX_SQL = "CREATE INDEX IF NOT EXISTS idx_seo_analyses_url ON seo_analyses (url);"


class AbstractDatabase(ABC):
    """Abstract base class defining the analysis store interface."""

    @abstractmethod
    def save(self, url: str, result: AnalysisResult) -> int:
        """Persist one analysis.

        Args:
            url: URL the analysis was requested for
            result: The analysis result

        Returns:
            Identifier of the stored record
        """
        pass

    @abstractmethod
    def get_by_id(self, analysis_id: int) -> Optional[AnalysisResult]:
        """Fetch one stored analysis, or None if unknown."""
        pass

    @abstractmethod
    def get_all_by_url(self, url: str) -> List[AnalysisResult]:
        """All analyses stored for a URL, oldest first."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class LocalSqliteDatabase(AbstractDatabase):
    """SQLite database implementation for local storage."""

    def __init__(self, db_url: Optional[str] = None):
        """Initialize local SQLite database.

        Args:
            db_url: Database URL (sqlite:///path/to/db.db). Defaults to settings.DATABASE_URL.
        """
        self.db_url = db_url or settings.DATABASE_URL
        self.db_path = self.db_url.replace("sqlite:///", "")
        self.conn: Optional[sqlite3.Connection] = None
        self.connect()
        self.create_schema()

    def connect(self) -> None:
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        logger.debug(f"Connected to local SQLite database: {self.db_path}")

    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Closed local SQLite connection")

    def create_schema(self) -> None:
        with self.conn:
            self.conn.execute(CREATE_TABLE_SQL)
            self.conn.execute(CREATE_INDEX_SQL)
        logger.debug("Schema verified/created for local SQLite")

    def save(self, url: str, result: AnalysisResult) -> int:
        insert_sql = (
            "INSERT INTO seo_analyses "
            "(url, analysis_data, created_at, is_amp, amp_url, regular_url, score, issues, warnings, passed) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"
        )
        values = (
            url,
            result.to_json(),
            datetime.now(timezone.utc).isoformat(),
            int(result.is_amp),
            result.amp_url,
            result.regular_url,
            result.overall_score,
            result.issues,
            result.warnings,
            result.passed,
        )
        with self.conn:
            cursor = self.conn.execute(insert_sql, values)
        analysis_id = cursor.lastrowid
        logger.debug(f"Saved analysis {analysis_id} for {url}")
        return analysis_id

    def get_by_id(self, analysis_id: int) -> Optional[AnalysisResult]:
        cursor = self.conn.execute(
            "SELECT analysis_data FROM seo_analyses WHERE id = ?", (analysis_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return AnalysisResult.from_json(row["analysis_data"])

    def get_all_by_url(self, url: str) -> List[AnalysisResult]:
        cursor = self.conn.execute(
            "SELECT analysis_data FROM seo_analyses WHERE url = ? ORDER BY id ASC", (url,)
        )
        return [AnalysisResult.from_json(row["analysis_data"]) for row in cursor.fetchall()]


class InMemoryDatabase(AbstractDatabase):
    """Process-local store; ids come from a monotonic counter."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: Dict[int, Tuple[str, dict]] = {}

    def save(self, url: str, result: AnalysisResult) -> int:
        # Stored as plain data so later mutation of result has no effect
        data = result.to_dict()
        with self._lock:
            analysis_id = next(self._ids)
            self._records[analysis_id] = (url, data)
        logger.debug(f"Saved analysis {analysis_id} for {url} in memory")
        return analysis_id

    def get_by_id(self, analysis_id: int) -> Optional[AnalysisResult]:
        with self._lock:
            record = self._records.get(analysis_id)
        if record is None:
            return None
        return AnalysisResult.from_dict(record[1])

    def get_all_by_url(self, url: str) -> List[AnalysisResult]:
        with self._lock:
            matches = [data for _, (stored_url, data) in sorted(self._records.items()) if stored_url == url]
        return [AnalysisResult.from_dict(data) for data in matches]

    def close(self) -> None:
        # Records live as long as the instance
        logger.debug("Closed in-memory database")


def get_db_client(
    backend: Optional[str] = None,
    **kwargs,
) -> AbstractDatabase:
    """Factory function to create the appropriate database client.

    Args:
        backend: Database backend ('local' or 'memory'). Defaults to settings.DB_BACKEND.
        **kwargs: Additional arguments passed to the database constructor.

    Returns:
        An instance of AbstractDatabase.

    Raises:
        ValueError: If an unknown backend is specified.
    """
    backend = backend or settings.DB_BACKEND

    if backend == "local":
        logger.info("Using local SQLite database backend")
        return LocalSqliteDatabase(**kwargs)
    elif backend == "memory":
        logger.info("Using in-memory database backend")
        return InMemoryDatabase()
    else:
        raise ValueError(
            f"Unknown database backend: '{backend}'. "
            "Supported backends: 'local', 'memory'"
        )
