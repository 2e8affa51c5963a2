"""Session building and the quiz state machine.

SessionBuilder turns the raw records of one topic/level into a shuffled
Session. QuizEngine owns that Session and drives it through
not_started -> in_progress -> completed, one caller-triggered step at a time.
"""

import logging
import random
from typing import Any, Collection, Iterable, Mapping

from exercises import nouns, vocabulary
from exercises.base import build_distractor_pool, shuffled
from exercises.config import ExerciseGeneratorConfig
from exercises.entries import is_dictionary_entry, is_noun, parse_entry
from exercises.grader import grade
from exercises.normalizer import normalize_records
from models import (
    AnswerResult,
    CompletionSignal,
    DictionaryEntry,
    Exercise,
    ExerciseKind,
    QuestionView,
    Session,
    SessionStatus,
)
from storage import BestScoreRepository, StorageError

logger = logging.getLogger(__name__)

FilterValue = str | Collection[str] | None


class SessionStateError(Exception):
    """An operation was requested in a state that does not allow it."""


def _filter_values(value: FilterValue) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        value = [value]
    return {v.strip().lower() for v in value if v and v.strip()}


def matches_filters(exercise: Exercise, filters: Mapping[str, FilterValue] | None) -> bool:
    """Every constrained key must share at least one tag with the exercise."""
    if not filters:
        return True
    for value in filters.values():
        wanted = _filter_values(value)
        if wanted and not (wanted & exercise.tags):
            return False
    return True


class SessionBuilder:
    """Aggregates exercises from raw records into a shuffled Session."""

    def __init__(
        self,
        config: ExerciseGeneratorConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or ExerciseGeneratorConfig()
        self.rng = rng or random.Random()

    def collect(self, records: Iterable[Any]) -> list[Exercise]:
        """Normalize exercise records and generate exercises from entries.

        Returns the deduplicated candidate set, in source order.
        """
        entries: list[DictionaryEntry] = []
        exercise_records: list[Any] = []
        for raw in records:
            if is_dictionary_entry(raw):
                entry = parse_entry(raw)
                if entry is not None:
                    entries.append(entry)
            else:
                exercise_records.append(raw)

        exercises, _ = normalize_records(exercise_records)
        exercises.extend(self._generate(entries))
        return self._deduplicate(exercises)

    def build(
        self,
        records: Iterable[Any],
        filters: Mapping[str, FilterValue] | None = None,
        quiz_key: str = "",
    ) -> Session:
        """Build a Session from raw records.

        Args:
            records: Raw exercise records and/or word-list entries.
            filters: Optional tag constraints, e.g. {"case": "dativ"}.
            quiz_key: Identity of the quiz for best-score persistence.

        Returns:
            A not-yet-started Session. It is empty (not an error) when no
            exercise survives filtering.
        """
        candidates = self.collect(records)
        selected = [ex for ex in candidates if matches_filters(ex, filters)]
        logger.info(
            "Built session %r: %d of %d exercises after filtering",
            quiz_key,
            len(selected),
            len(candidates),
        )
        return Session(quiz_key=quiz_key, exercises=tuple(shuffled(selected, self.rng)))

    def _generate(self, entries: list[DictionaryEntry]) -> list[Exercise]:
        pool = build_distractor_pool(entries)
        generated: list[Exercise] = []
        for entry in entries:
            generated.extend(
                vocabulary.generate(entry, pool, self.config.vocabulary, self.rng)
            )
            if is_noun(entry):
                generated.extend(nouns.generate(entry, self.config.nouns, self.rng))
        logger.debug("Generated %d exercises from %d entries", len(generated), len(entries))
        return generated

    @staticmethod
    def _deduplicate(exercises: list[Exercise]) -> list[Exercise]:
        seen_ids: set[str] = set()
        seen_content: set[tuple[ExerciseKind, str, str]] = set()
        unique: list[Exercise] = []
        for exercise in exercises:
            content = (exercise.kind, exercise.prompt, exercise.expected_answer)
            if exercise.id in seen_ids or content in seen_content:
                logger.debug("Dropping duplicate exercise %s", exercise.id)
                continue
            seen_ids.add(exercise.id)
            seen_content.add(content)
            unique.append(exercise)
        return unique


class QuizEngine:
    """State machine for one quiz: question, answer, feedback, next.

    Answer submission and advancing are separate steps so the learner sees
    feedback before moving on. The best score is read on start and written
    back on completion only when it was beaten.
    """

    def __init__(
        self,
        session: Session,
        store: BestScoreRepository,
        rng: random.Random | None = None,
    ):
        self.session = session
        self.store = store
        self.rng = rng or random.Random()

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    def start(self) -> QuestionView | None:
        """Enter in_progress with cursor and score at 0.

        Returns:
            The first question, or None when there is nothing to practice
            (the session status is then EMPTY).
        """
        if self.session.status != SessionStatus.NOT_STARTED:
            raise SessionStateError(f"Cannot start a {self.session.status.value} session")

        self.session.best_score = self._read_best_score()
        self.session.current_index = 0
        self.session.score = 0
        self.session.answered = False

        if not self.session.exercises:
            self.session.status = SessionStatus.EMPTY
            logger.info("Session %r has no exercises", self.session.quiz_key)
            return None

        self.session.status = SessionStatus.IN_PROGRESS
        return self.current_question()

    def current_question(self) -> QuestionView:
        self._require(SessionStatus.IN_PROGRESS)
        exercise = self.session.current_exercise
        return QuestionView(
            prompt=exercise.prompt,
            kind=exercise.kind,
            options=None if exercise.kind.is_free_text else list(exercise.options),
            number=self.session.current_index + 1,
            total=self.session.total,
        )

    def submit(self, answer: str) -> AnswerResult:
        """Grade the answer to the current question and update the score."""
        self._require(SessionStatus.IN_PROGRESS)
        if self.session.answered:
            raise SessionStateError("The current question was already answered")

        exercise = self.session.current_exercise
        correct = grade(exercise, answer)
        if correct:
            self.session.score += 1
        self.session.answered = True

        logger.debug(
            "Exercise %s answered %s (score %d)",
            exercise.id,
            "correctly" if correct else "incorrectly",
            self.session.score,
        )
        return AnswerResult(
            correct=correct,
            expected_answer=exercise.expected_answer,
            explanation=exercise.explanation,
        )

    def advance(self) -> QuestionView | CompletionSignal:
        """Move to the next question, or complete the session after the last."""
        self._require(SessionStatus.IN_PROGRESS)
        if not self.session.answered:
            raise SessionStateError("Answer the current question before advancing")

        if self.session.is_last:
            return self._complete()

        self.session.current_index += 1
        self.session.answered = False
        return self.current_question()

    def restart(self) -> QuestionView | None:
        """Start over with the same exercises in a freshly shuffled order."""
        self.session = Session(
            quiz_key=self.session.quiz_key,
            exercises=tuple(shuffled(self.session.exercises, self.rng)),
        )
        return self.start()

    def _complete(self) -> CompletionSignal:
        session = self.session
        session.status = SessionStatus.COMPLETED

        is_new_best = session.score > session.best_score
        if is_new_best:
            self._write_best_score(session.score)
            session.best_score = session.score

        logger.info(
            "Session %r completed: %d/%d (new best: %s)",
            session.quiz_key,
            session.score,
            session.total,
            is_new_best,
        )
        return CompletionSignal(final_score=session.score, is_new_best_score=is_new_best)

    def _read_best_score(self) -> int:
        try:
            return self.store.read(self.session.quiz_key)
        except StorageError as e:
            logger.warning("Best score unavailable, starting from 0: %s", e)
            return 0

    def _write_best_score(self, score: int) -> None:
        try:
            self.store.write(self.session.quiz_key, score)
        except StorageError as e:
            logger.warning("Best score not saved: %s", e)

    def _require(self, status: SessionStatus) -> None:
        if self.session.status != status:
            raise SessionStateError(
                f"Session is {self.session.status.value}, expected {status.value}"
            )
