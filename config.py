"""Runtime settings for the quiz.

Defaults come from environment variables and can be overridden on the
command line (see main.create_parser).
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from exercises.config import ExerciseGeneratorConfig
from storage import DEFAULT_DATA_DIR, DEFAULT_DB_PATH

DEFAULT_TOPIC = "grammatik"
DEFAULT_LEVEL = "a1"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(default_factory=lambda: os.getenv("DM_LOG_LEVEL", "WARNING"))
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Path | None = Field(
        default_factory=lambda: Path(p) if (p := os.getenv("DM_LOG_FILE")) else None
    )


class QuizSettings(BaseModel):
    """Everything needed to run one quiz."""

    topic: str = DEFAULT_TOPIC
    level: str = DEFAULT_LEVEL
    data_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("DM_DATA_DIR", str(DEFAULT_DATA_DIR)))
    )
    source_url: str | None = Field(default_factory=lambda: os.getenv("DM_SOURCE_URL"))
    db_path: Path = Field(
        default_factory=lambda: Path(os.getenv("DM_DB_PATH", str(DEFAULT_DB_PATH)))
    )
    persist_best_score: bool = True
    filters: dict[str, list[str]] = Field(default_factory=dict)
    seed: int | None = None
    generator: ExerciseGeneratorConfig = Field(default_factory=ExerciseGeneratorConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
