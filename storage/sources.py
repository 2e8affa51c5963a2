"""Exercise sources: bundled JSON files and the same layout over HTTP."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .base import ExerciseSource, LoadError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"


def _require_array(payload: Any, origin: str) -> list[Any]:
    if not isinstance(payload, list):
        raise LoadError(
            f"{origin} must contain a JSON array, got {type(payload).__name__}"
        )
    return payload


class JsonFileExerciseSource(ExerciseSource):
    """Reads <data_dir>/<topic>/<level>.json."""

    def __init__(self, data_dir: Path = DEFAULT_DATA_DIR):
        self.data_dir = data_dir

    def path_for(self, topic: str, level: str) -> Path:
        return self.data_dir / topic.lower() / f"{level.lower()}.json"

    def available_topics(self) -> list[str]:
        """Topics with at least one level file, sorted by name."""
        if not self.data_dir.is_dir():
            return []
        return sorted(
            d.name for d in self.data_dir.iterdir() if d.is_dir() and any(d.glob("*.json"))
        )

    def load(self, topic: str, level: str) -> list[Any]:
        path = self.path_for(topic, level)
        if not path.exists():
            raise LoadError(f"No exercises for {topic}/{level}: {path} not found")

        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LoadError(f"Failed to load {path}: {e}") from e

        records = _require_array(payload, str(path))
        logger.info("Loaded %d records from %s", len(records), path)
        return records


class HttpExerciseSource(ExerciseSource):
    """Fetches <base_url>/<topic>/<level>.json."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def url_for(self, topic: str, level: str) -> str:
        return f"{self.base_url}/{topic.lower()}/{level.lower()}.json"

    def load(self, topic: str, level: str) -> list[Any]:
        url = self.url_for(topic, level)
        try:
            if self._client is not None:
                payload = self._fetch(self._client, url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    payload = self._fetch(client, url)
        except httpx.HTTPError as e:
            raise LoadError(f"Failed to load {url}: {e}") from e
        except ValueError as e:
            raise LoadError(f"{url} did not return valid JSON: {e}") from e

        records = _require_array(payload, url)
        logger.info("Loaded %d records from %s", len(records), url)
        return records

    @staticmethod
    def _fetch(client: httpx.Client, url: str) -> Any:
        resp = client.get(url, headers={"Cache-Control": "no-store"})
        resp.raise_for_status()
        return resp.json()
