"""Snapshot store for all-time bucket totals using SQLite."""
import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from report.models import ReportSnapshot
from utils.logger import get_logger
from utils.exceptions import StorageError

logger = get_logger()


class SnapshotStore:
    """Keeps one row of totals per report run."""

    def __init__(self, db_path: str):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS snapshots (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        event_id TEXT NOT NULL,
                        created_at TEXT NOT NULL,
                        totals TEXT NOT NULL
                    )
                """)
                cursor.execute("CREATE INDEX IF NOT EXISTS idx_event ON snapshots(event_id, created_at)")
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open snapshot database {self.db_path}: {e}") from e

    def save_snapshot(self, snapshot: ReportSnapshot) -> int:
        """Insert a snapshot and return its row id."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO snapshots (event_id, created_at, totals) VALUES (?, ?, ?)",
                    (
                        snapshot.event_id,
                        snapshot.created_at.isoformat(),
                        json.dumps(snapshot.totals, ensure_ascii=False)
                    )
                )
                conn.commit()
                row_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save snapshot: {e}") from e

        logger.info(f"Saved snapshot #{row_id} with {len(snapshot.totals)} buckets")
        return row_id

    def list_snapshots(self, event_id: Optional[str] = None, limit: Optional[int] = None) -> List[ReportSnapshot]:
        """Snapshots newest first."""
        query = "SELECT event_id, created_at, totals FROM snapshots"
        params: list = []
        if event_id:
            query += " WHERE event_id = ?"
            params.append(event_id)
        query += " ORDER BY created_at DESC, id DESC"
        if limit:
            query += " LIMIT ?"
            params.append(int(limit))

        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(query, params)
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read snapshots: {e}") from e

        return [
            ReportSnapshot(
                event_id=row[0],
                created_at=datetime.fromisoformat(row[1]),
                totals=json.loads(row[2])
            )
            for row in rows
        ]

    def latest_snapshot(self, event_id: str) -> Optional[ReportSnapshot]:
        snapshots = self.list_snapshots(event_id, limit=1)
        return snapshots[0] if snapshots else None

    def clear(self, event_id: Optional[str] = None) -> int:
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                if event_id:
                    cursor.execute("DELETE FROM snapshots WHERE event_id = ?", (event_id,))
                else:
                    cursor.execute("DELETE FROM snapshots")
                conn.commit()
                return cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Failed to clear snapshots: {e}") from e
