"""Translation and cloze exercises generated from word-list entries.

Every entry with a translation can produce a "what does this mean?" multiple
choice question whose wrong options are the translations of other entries,
and entries with example sentences produce a cloze that blanks out the word.
"""

import random
import re
from typing import Sequence

from exercises.base import pick_distractors, shuffled
from exercises.config import VocabularyConfig
from models import ComparisonPolicy, DictionaryEntry, Exercise, ExerciseKind

BLANK = "___"


def build_translation_choice(
    entry: DictionaryEntry,
    pool: Sequence[str],
    count: int = 2,
    rng: random.Random | None = None,
    shuffle_options: bool = True,
) -> Exercise | None:
    """Ask for the meaning of a German word, with distractors from the pool.

    Returns None when the entry has no translation or the pool cannot supply
    a single wrong option.
    """
    answer = entry.primary_translation
    if not answer:
        return None

    distractors = pick_distractors(answer, pool, count, rng)
    if not distractors:
        return None

    options = [answer] + distractors
    if shuffle_options:
        options = shuffled(options, rng)

    return Exercise(
        id=f"{entry.id}-meaning",
        kind=ExerciseKind.MULTIPLE_CHOICE,
        prompt=f'Was bedeutet "{entry.lemma}"?',
        options=tuple(options),
        expected_answer=answer,
        comparison_policy=ComparisonPolicy.exact(),
        explanation=f'Die Bedeutung von "{entry.lemma}" ist "{answer}".',
        tags=frozenset({"bedeutung"}) | entry.tags,
        source_entry_id=entry.id,
    )


def build_translation_type_in(entry: DictionaryEntry) -> Exercise | None:
    """Ask for the German word given its primary translation."""
    translation = entry.primary_translation
    if not translation:
        return None

    return Exercise(
        id=f"{entry.id}-translation",
        kind=ExerciseKind.TRANSLATION,
        prompt=f'Wie heißt "{translation}" auf Deutsch?',
        expected_answer=entry.lemma,
        comparison_policy=ComparisonPolicy.diacritic_folding(),
        explanation=f"{translation} = {entry.lemma}",
        tags=frozenset({"übersetzung"}) | entry.tags,
        source_entry_id=entry.id,
    )


def build_cloze(entry: DictionaryEntry) -> Exercise | None:
    """Blank out the word in the first example sentence that contains it."""
    pattern = re.compile(rf"\b{re.escape(entry.lemma)}\b")
    for sentence in entry.examples:
        if pattern.search(sentence):
            return Exercise(
                id=f"{entry.id}-cloze",
                kind=ExerciseKind.CLOZE,
                prompt=pattern.sub(BLANK, sentence, count=1),
                expected_answer=entry.lemma,
                explanation=sentence,
                tags=frozenset({"lückentext"}) | entry.tags,
                source_entry_id=entry.id,
            )
    return None


def generate(
    entry: DictionaryEntry,
    pool: Sequence[str],
    config: VocabularyConfig | None = None,
    rng: random.Random | None = None,
) -> list[Exercise]:
    """Generate every enabled vocabulary exercise for one entry."""
    config = config or VocabularyConfig()
    candidates: list[Exercise | None] = []

    if config.translation_choice:
        candidates.append(
            build_translation_choice(
                entry, pool, config.distractor_count, rng, config.shuffle_options
            )
        )
    if config.translation_type_in:
        candidates.append(build_translation_type_in(entry))
    if config.cloze:
        candidates.append(build_cloze(entry))

    return [exercise for exercise in candidates if exercise is not None]
