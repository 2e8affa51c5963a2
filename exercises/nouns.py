"""Article and plural exercises generated from noun entries."""

import random

from exercises.base import shuffled
from exercises.config import NounConfig
from models import (
    ARTICLES,
    ComparisonPolicy,
    DictionaryEntry,
    Exercise,
    ExerciseKind,
    Gender,
)


def build_article_exercise(
    entry: DictionaryEntry,
    rng: random.Random | None = None,
    shuffle_options: bool = True,
) -> Exercise | None:
    """Ask for the article of a noun. None when the gender is unknown."""
    if entry.gender == Gender.UNKNOWN or entry.article is None:
        return None

    options = shuffled(ARTICLES, rng) if shuffle_options else list(ARTICLES)
    return Exercise(
        id=f"{entry.id}-article",
        kind=ExerciseKind.MULTIPLE_CHOICE,
        prompt=f'Welcher Artikel passt zu "{entry.lemma}"?',
        options=tuple(options),
        expected_answer=entry.article,
        comparison_policy=ComparisonPolicy.exact(),
        explanation=f"{entry.article} {entry.lemma}",
        tags=frozenset({"artikel", entry.gender.value}) | entry.tags,
        source_entry_id=entry.id,
    )


def build_plural_exercise(entry: DictionaryEntry) -> Exercise | None:
    """Ask for the plural form. Umlaut spellings like 'ae' are accepted."""
    if not entry.plural:
        return None

    return Exercise(
        id=f"{entry.id}-plural",
        kind=ExerciseKind.TYPE_IN,
        prompt=f'Was ist der Plural von "{entry.lemma}"?',
        expected_answer=entry.plural,
        comparison_policy=ComparisonPolicy.diacritic_folding(),
        explanation=f"{entry.lemma} → {entry.plural}",
        tags=frozenset({"plural"}) | entry.tags,
        source_entry_id=entry.id,
    )


def generate(
    entry: DictionaryEntry,
    config: NounConfig | None = None,
    rng: random.Random | None = None,
) -> list[Exercise]:
    """Generate the article and/or plural exercise for a noun entry.

    Returns:
        Zero, one or two exercises. Entries lacking both gender and plural
        yield an empty list.
    """
    config = config or NounConfig()
    exercises: list[Exercise] = []

    if config.article_choice:
        article = build_article_exercise(entry, rng, config.shuffle_options)
        if article is not None:
            exercises.append(article)

    if config.plural_type_in:
        plural = build_plural_exercise(entry)
        if plural is not None:
            exercises.append(plural)

    return exercises
