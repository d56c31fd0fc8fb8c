"""
Route history persistence.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteHistoryEntry:
    """One computed route for a user."""
    user_id: str
    source_lat: float
    source_lng: float
    destination_lat: float
    destination_lng: float
    route_data: Dict[str, Any]


class BaseRouteHistoryStore(ABC):
    """
    Abstract base class for route history collaborators.
    """

    @abstractmethod
    def record(self, entry: RouteHistoryEntry) -> None:
        """
        Store a computed route.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class SQLiteRouteHistory(BaseRouteHistoryStore):
    """
    Route history kept in a local SQLite database.
    """

    def __init__(self, db_path: Union[str, Path]):
        """
        Initialize the history store.

        Args:
            db_path: SQLite database file (created if missing)
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_database()
        logger.info(f"SQLiteRouteHistory initialized at {self.db_path}")

    def _init_database(self):
        """Initialize the route_history table."""
        with self._get_db_connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS route_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    source_lat REAL NOT NULL,
                    source_lng REAL NOT NULL,
                    destination_lat REAL NOT NULL,
                    destination_lng REAL NOT NULL,
                    route_data TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            ''')
            conn.execute('''
                CREATE INDEX IF NOT EXISTS idx_route_history_user ON route_history(user_id)
            ''')
            conn.commit()

    @contextmanager
    def _get_db_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Enable column access by name
        try:
            yield conn
        finally:
            conn.close()

    def record(self, entry: RouteHistoryEntry) -> None:
        try:
            with self._get_db_connection() as conn:
                conn.execute('''
                    INSERT INTO route_history (
                        user_id, source_lat, source_lng,
                        destination_lat, destination_lng, route_data, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ''', (
                    entry.user_id,
                    entry.source_lat,
                    entry.source_lng,
                    entry.destination_lat,
                    entry.destination_lng,
                    json.dumps(entry.route_data),
                    datetime.now(timezone.utc).isoformat()
                ))
                conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise PersistenceError(f"Error storing route history: {e}") from e

        logger.debug(f"Stored route history for user {entry.user_id}")

    def get_history(self, user_id: str, limit: int = 20) -> List[Dict[str, Any]]:
        """
        Most recent routes for a user, newest first.

        Args:
            user_id: User to look up
            limit: Maximum number of entries

        Returns:
            List of history rows with route_data decoded
        """
        with self._get_db_connection() as conn:
            rows = conn.execute('''
                SELECT user_id, source_lat, source_lng, destination_lat,
                       destination_lng, route_data, created_at
                FROM route_history
                WHERE user_id = ?
                ORDER BY id DESC
                LIMIT ?
            ''', (user_id, limit)).fetchall()

        history = []
        for row in rows:
            item = dict(row)
            item['route_data'] = json.loads(item['route_data'])
            history.append(item)
        return history
