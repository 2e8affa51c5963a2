"""In-memory best-score store for throwaway sessions (--no-save)."""

from .base import BestScoreRepository


class InMemoryBestScoreRepository(BestScoreRepository):
    """Keeps best scores in a dict for the lifetime of the process."""

    def __init__(self, scores: dict[str, int] | None = None):
        self.scores: dict[str, int] = dict(scores or {})
        self.writes: list[tuple[str, int]] = []

    def read(self, key: str) -> int:
        return self.scores.get(key, 0)

    def write(self, key: str, score: int) -> None:
        self.scores[key] = score
        self.writes.append((key, score))
