"""Exercise normalization, generation and grading.

Architecture:
- The normalizer maps raw exercise records (several JSON schemas) onto the
  canonical Exercise model
- Entry parsing maps word-list records onto DictionaryEntry
- Generators build exercises from entries (article, plural, translation, cloze)
- The grader checks a submitted answer against an exercise

Configuration:
- ExerciseGeneratorConfig: Configure which exercises are generated
"""

from exercises.base import (
    build_distractor_pool,
    parse_letter_input,
    pick_distractors,
    shuffled,
)
from exercises.config import ExerciseGeneratorConfig, NounConfig, VocabularyConfig
from exercises.entries import is_dictionary_entry, parse_entry, parse_gender
from exercises.grader import grade
from exercises.normalizer import normalize, normalize_records

__all__ = [
    # Utilities
    "parse_letter_input",
    "pick_distractors",
    "build_distractor_pool",
    "shuffled",
    # Normalization
    "normalize",
    "normalize_records",
    "parse_entry",
    "parse_gender",
    "is_dictionary_entry",
    # Grading
    "grade",
    # Configuration
    "ExerciseGeneratorConfig",
    "NounConfig",
    "VocabularyConfig",
]
