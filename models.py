from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExerciseKind(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_IN_BLANK = "fill_in_blank"
    TYPE_IN = "type_in"
    TRANSLATION = "translation"
    CLOZE = "cloze"

    @property
    def is_free_text(self) -> bool:
        return self is not ExerciseKind.MULTIPLE_CHOICE


# ============================================================================
# Comparison Policies
# ============================================================================


class ComparisonMode(str, Enum):
    """How a submitted answer is compared to the expected answer."""

    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    DIACRITIC_FOLDING = "diacritic_folding"
    CUSTOM = "custom"


class ComparisonPolicy(BaseModel):
    """Tagged comparison policy.

    The CUSTOM mode carries a predicate that receives the raw submitted
    string and overrides every other comparison rule.
    """

    model_config = ConfigDict(frozen=True)

    mode: ComparisonMode
    predicate: Callable[[str], bool] | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _check_predicate(self) -> "ComparisonPolicy":
        if self.mode == ComparisonMode.CUSTOM and self.predicate is None:
            raise ValueError("custom comparison policy requires a predicate")
        if self.mode != ComparisonMode.CUSTOM and self.predicate is not None:
            raise ValueError(f"{self.mode.value} policy does not take a predicate")
        return self

    @classmethod
    def exact(cls) -> "ComparisonPolicy":
        return cls(mode=ComparisonMode.EXACT)

    @classmethod
    def case_insensitive(cls) -> "ComparisonPolicy":
        return cls(mode=ComparisonMode.CASE_INSENSITIVE)

    @classmethod
    def diacritic_folding(cls) -> "ComparisonPolicy":
        return cls(mode=ComparisonMode.DIACRITIC_FOLDING)

    @classmethod
    def custom(cls, predicate: Callable[[str], bool]) -> "ComparisonPolicy":
        return cls(mode=ComparisonMode.CUSTOM, predicate=predicate)


def default_policy(kind: ExerciseKind) -> ComparisonPolicy:
    """Exact membership for multiple choice, case-insensitive otherwise."""
    if kind == ExerciseKind.MULTIPLE_CHOICE:
        return ComparisonPolicy.exact()
    return ComparisonPolicy.case_insensitive()


# ============================================================================
# Exercises
# ============================================================================


class Exercise(BaseModel):
    """Canonical exercise every raw record and dictionary entry converges to."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ExerciseKind
    prompt: str
    options: tuple[str, ...] = ()
    expected_answer: str
    comparison_policy: ComparisonPolicy | None = None
    explanation: str | None = None
    tags: frozenset[str] = frozenset()
    source_entry_id: str | None = None  # lineage only

    @model_validator(mode="before")
    @classmethod
    def _fill_default_policy(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("comparison_policy") is None:
            kind = data.get("kind")
            if kind is not None:
                data = {**data, "comparison_policy": default_policy(ExerciseKind(kind))}
        return data

    @model_validator(mode="after")
    def _check_invariants(self) -> "Exercise":
        if not self.prompt.strip():
            raise ValueError("exercise prompt must not be empty")
        if not self.expected_answer.strip():
            raise ValueError("exercise expected answer must not be empty")

        if self.kind == ExerciseKind.MULTIPLE_CHOICE:
            if len(self.options) < 2:
                raise ValueError("multiple choice needs at least two options")
            if len(set(self.options)) != len(self.options):
                raise ValueError("multiple choice options must be unique")
            if self.expected_answer not in self.options:
                raise ValueError(
                    f"expected answer {self.expected_answer!r} is not an option"
                )
        elif self.options:
            raise ValueError(f"{self.kind.value} exercises take no options")
        return self

    @property
    def policy(self) -> ComparisonPolicy:
        assert self.comparison_policy is not None
        return self.comparison_policy


class RejectionReason(str, Enum):
    NOT_A_RECORD = "not_a_record"
    MISSING_PROMPT = "missing_prompt"
    MISSING_OPTIONS = "missing_options"
    MISSING_ANSWER = "missing_answer"
    INVALID_ANSWER = "invalid_answer"
    ANSWER_NOT_IN_OPTIONS = "answer_not_in_options"
    TOO_FEW_OPTIONS = "too_few_options"
    UNKNOWN_KIND = "unknown_kind"


class Rejected(BaseModel):
    """A raw record that could not be normalized. Never fatal."""

    reason: RejectionReason
    detail: str = ""
    record: Any = None


# ============================================================================
# Dictionary Entries
# ============================================================================


class Gender(str, Enum):
    MASCULINE = "maskulin"
    FEMININE = "feminin"
    NEUTER = "neutral"
    UNKNOWN = "unknown"


GENDER_TO_ARTICLE: dict[Gender, str] = {
    Gender.MASCULINE: "der",
    Gender.FEMININE: "die",
    Gender.NEUTER: "das",
}
ARTICLE_TO_GENDER: dict[str, Gender] = {a: g for g, a in GENDER_TO_ARTICLE.items()}
ARTICLES: tuple[str, ...] = ("der", "die", "das")


class DictionaryEntry(BaseModel):
    """A word-list entry that exercises can be generated from."""

    model_config = ConfigDict(frozen=True)

    id: str
    lemma: str = Field(min_length=1)
    gender: Gender = Gender.UNKNOWN
    article: str | None = None
    plural: str | None = None
    translations: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    part_of_speech: str | None = None
    level: str | None = None
    tags: frozenset[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _derive_gender_or_article(cls, data: Any) -> Any:
        """Fill in whichever of gender/article is missing."""
        if not isinstance(data, dict):
            return data
        gender = Gender(data.get("gender") or Gender.UNKNOWN)
        article = data.get("article")
        if article is None and gender != Gender.UNKNOWN:
            return {**data, "gender": gender, "article": GENDER_TO_ARTICLE[gender]}
        if article in ARTICLE_TO_GENDER and gender == Gender.UNKNOWN:
            return {**data, "gender": ARTICLE_TO_GENDER[article]}
        return data

    @model_validator(mode="after")
    def _check_gender_matches_article(self) -> "DictionaryEntry":
        if self.article is None:
            return self
        if self.article not in ARTICLE_TO_GENDER:
            raise ValueError(f"unknown article: {self.article!r}")
        if ARTICLE_TO_GENDER[self.article] != self.gender:
            raise ValueError(
                f"gender {self.gender.value!r} does not match article {self.article!r}"
            )
        return self

    @property
    def primary_translation(self) -> str | None:
        return self.translations[0] if self.translations else None


# ============================================================================
# Session State
# ============================================================================


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EMPTY = "empty"  # nothing to practice


class Session(BaseModel):
    """One ordered playthrough of exercises with its score state."""

    quiz_key: str = ""
    exercises: tuple[Exercise, ...] = ()
    current_index: int = 0
    score: int = 0
    best_score: int = 0
    status: SessionStatus = SessionStatus.NOT_STARTED
    answered: bool = False

    @property
    def total(self) -> int:
        return len(self.exercises)

    @property
    def current_exercise(self) -> Exercise:
        return self.exercises[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.exercises) - 1


# ============================================================================
# Presentation Payloads
# ============================================================================


class QuestionView(BaseModel):
    """What the presentation layer needs to render one question."""

    prompt: str
    kind: ExerciseKind
    options: list[str] | None = None
    number: int = 1  # 1-indexed
    total: int = 1


class AnswerResult(BaseModel):
    correct: bool
    expected_answer: str
    explanation: str | None = None


class CompletionSignal(BaseModel):
    completed: bool = True
    final_score: int
    is_new_best_score: bool
