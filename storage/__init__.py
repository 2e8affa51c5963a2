"""Storage layer for the quiz application.

Provides the exercise sources (bundled JSON files or HTTP) and the
best-score repositories (SQLite or in-memory).
"""

import logging
from pathlib import Path

from .base import (
    BestScoreRepository,
    ExerciseSource,
    LoadError,
    StorageError,
    quiz_key,
)
from .sqlite import SQLiteBestScoreRepository
from .memory import InMemoryBestScoreRepository
from .sources import DEFAULT_DATA_DIR, HttpExerciseSource, JsonFileExerciseSource
from .connection import get_connection, init_schema, DEFAULT_DB_PATH

__all__ = [
    # Abstract interfaces
    "BestScoreRepository",
    "ExerciseSource",
    # Errors
    "LoadError",
    "StorageError",
    # Implementations
    "SQLiteBestScoreRepository",
    "InMemoryBestScoreRepository",
    "JsonFileExerciseSource",
    "HttpExerciseSource",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    "DEFAULT_DATA_DIR",
    # Helpers
    "quiz_key",
    # Factory functions
    "get_exercise_source",
    "get_best_score_repo",
]


logger = logging.getLogger(__name__)


def get_exercise_source(
    data_dir: Path = DEFAULT_DATA_DIR,
    source_url: str | None = None,
) -> ExerciseSource:
    """Get an ExerciseSource: HTTP when a URL is configured, files otherwise."""
    if source_url:
        return HttpExerciseSource(source_url)
    return JsonFileExerciseSource(data_dir)


def get_best_score_repo(
    db_path: Path = DEFAULT_DB_PATH,
    persist: bool = True,
) -> BestScoreRepository:
    """Get a BestScoreRepository instance.

    Falls back to an in-memory store when the database cannot be opened.
    """
    if not persist:
        return InMemoryBestScoreRepository()
    try:
        return SQLiteBestScoreRepository(db_path)
    except StorageError as e:
        logger.warning("Best scores will not be saved: %s", e)
        return InMemoryBestScoreRepository()
