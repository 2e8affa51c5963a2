"""Shared pytest fixtures for the Deutsch-Meister test suite."""

import json
import random
import pytest

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import DictionaryEntry, Exercise, ExerciseKind, Gender
from storage import InMemoryBestScoreRepository


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(42)


@pytest.fixture
def katze_raw() -> dict:
    """A raw word-list record for 'Katze'."""
    return {
        "lemma": "Katze",
        "pos": "noun",
        "gender": "feminin",
        "plural": "Katzen",
        "translations": ["cat"],
        "examples": [{"de": "Die Katze schläft.", "en": "The cat sleeps."}],
    }


@pytest.fixture
def katze_entry() -> DictionaryEntry:
    """The canonical entry for 'Katze'."""
    return DictionaryEntry(
        id="katze",
        lemma="Katze",
        gender=Gender.FEMININE,
        plural="Katzen",
        translations=("cat",),
        examples=("Die Katze schläft.",),
        part_of_speech="noun",
    )


@pytest.fixture
def sample_entries(katze_entry) -> list[DictionaryEntry]:
    """A small word list covering all three genders."""
    return [
        katze_entry,
        DictionaryEntry(
            id="hund",
            lemma="Hund",
            gender=Gender.MASCULINE,
            plural="Hunde",
            translations=("dog",),
            part_of_speech="noun",
        ),
        DictionaryEntry(
            id="haus",
            lemma="Haus",
            gender=Gender.NEUTER,
            plural="Häuser",
            translations=("house",),
            part_of_speech="noun",
        ),
    ]


@pytest.fixture
def sample_records() -> list[dict]:
    """Raw case exercises in the mixed schemas found in data files."""
    return [
        {
            "id": "f-001",
            "type": "multiple-choice",
            "prompt": "Ich gebe ___ Mann das Buch.",
            "options": ["der", "den", "dem", "des"],
            "answerIndex": 2,
            "tags": ["Dativ", "maskulin"],
        },
        {
            "id": "f-002",
            "prompt": "Ich sehe ___ Frau.",
            "choices": ["die", "der", "den"],
            "correctAnswer": "die",
            "tags": ["akkusativ", "feminin"],
        },
        {
            "id": "f-003",
            "type": "fill-in-the-blank",
            "question": "Das Auto ___ Lehrers ist rot.",
            "answer": "des",
            "tags": ["genitiv", "maskulin"],
        },
        {
            "id": "f-004",
            "type": "multiple-choice",
            "prompt": "Wir helfen ___ Kind.",
            "options": ["das", "dem", "den"],
            "answerIndex": 1,
            "tags": ["dativ", "neutral"],
        },
    ]


@pytest.fixture
def three_exercises() -> list[Exercise]:
    """Three fill-in-the-blank exercises with answers 'a', 'b' and 'c'."""
    return [
        Exercise(
            id=f"ex-{answer}",
            kind=ExerciseKind.FILL_IN_BLANK,
            prompt=f"Schreibe {answer}",
            expected_answer=answer,
        )
        for answer in ("a", "b", "c")
    ]


@pytest.fixture
def memory_store() -> InMemoryBestScoreRepository:
    """Best-score store that records every write."""
    return InMemoryBestScoreRepository()


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database path for testing."""
    return tmp_path / "test_quiz.db"


@pytest.fixture
def data_dir(tmp_path, sample_records, katze_raw) -> Path:
    """Data directory with one exercise file and one word-list file."""
    root = tmp_path / "data"
    (root / "faelle").mkdir(parents=True)
    (root / "faelle" / "a1.json").write_text(
        json.dumps(sample_records), encoding="utf-8"
    )
    (root / "wortschatz").mkdir(parents=True)
    (root / "wortschatz" / "a1.json").write_text(
        json.dumps([katze_raw]), encoding="utf-8"
    )
    return root
