"""Abstract repository interfaces for the storage layer."""

from abc import ABC, abstractmethod
from typing import Any


class LoadError(Exception):
    """The exercise source is unreachable or its content is malformed."""


class StorageError(Exception):
    """The best-score store could not be read or written."""


def quiz_key(topic: str, level: str) -> str:
    """Composite key identifying one quiz, e.g. 'faelle_a1'."""
    return f"{topic.strip().lower()}_{level.strip().lower()}"


class ExerciseSource(ABC):
    """Abstract interface for loading raw exercise records."""

    @abstractmethod
    def load(self, topic: str, level: str) -> list[Any]:
        """Load the raw records for a topic and level.

        Args:
            topic: The quiz topic (e.g., 'artikel', 'faelle').
            level: The level within the topic (e.g., 'a1').

        Returns:
            The deserialized JSON array. Items are not validated here.

        Raises:
            LoadError: If the source cannot be read or is not a JSON array.
        """
        pass


class BestScoreRepository(ABC):
    """Abstract interface for persisted best scores."""

    @abstractmethod
    def read(self, key: str) -> int:
        """Load the best score for a quiz.

        Args:
            key: The quiz key (see quiz_key()).

        Returns:
            The stored best score, or 0 if none was stored yet.

        Raises:
            StorageError: If the store cannot be read.
        """
        pass

    @abstractmethod
    def write(self, key: str, score: int) -> None:
        """Store the best score for a quiz, replacing any previous value.

        Writing the same value twice has no further effect.

        Args:
            key: The quiz key.
            score: The new best score.

        Raises:
            StorageError: If the store cannot be written.
        """
        pass
