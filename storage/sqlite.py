"""SQLite implementations of repository interfaces."""

import logging
import sqlite3
from pathlib import Path

from .base import BestScoreRepository, StorageError
from .connection import DEFAULT_DB_PATH, get_connection, init_schema

logger = logging.getLogger(__name__)


class SQLiteBestScoreRepository(BestScoreRepository):
    """SQLite implementation of BestScoreRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path
        try:
            init_schema(db_path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open best-score database {db_path}: {e}") from e

    def read(self, key: str) -> int:
        """Load the best score for a quiz, 0 when absent."""
        try:
            conn = get_connection(self.db_path)
            try:
                cursor = conn.execute(
                    "SELECT score FROM best_scores WHERE quiz_key = ?", (key,)
                )
                row = cursor.fetchone()
                return int(row["score"]) if row else 0
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read best score for {key!r}: {e}") from e

    def write(self, key: str, score: int) -> None:
        """Save/update the best score for a quiz."""
        try:
            conn = get_connection(self.db_path)
            try:
                # INSERT OR REPLACE for upsert behavior
                conn.execute(
                    """INSERT OR REPLACE INTO best_scores (quiz_key, score, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)""",
                    (key, score),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write best score for {key!r}: {e}") from e
        logger.info("Stored best score %d for %s", score, key)
