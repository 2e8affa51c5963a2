"""Normalization of raw exercise records into canonical exercises.

Exercise files come in several shapes: some use ``question`` and
``answerIndex``, others ``prompt``, ``choices`` and ``correctAnswer``. The
alias tables below map every known field name to its canonical field, and
``normalize`` applies them once at ingestion.
"""

import logging
import uuid
from typing import Any, Iterable, Mapping

from models import Exercise, ExerciseKind, Rejected, RejectionReason

logger = logging.getLogger(__name__)


# Canonical field -> accepted aliases, in order of preference
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "kind": ("type", "kind"),
    "prompt": ("prompt", "question"),
    "answer": ("answer", "correctAnswer", "correct_answer"),
    "answer_index": ("answerIndex", "answer_index"),
    "options": ("options", "choices"),
    "explanation": ("explanation", "explain"),
    "tags": ("tags",),
}

KIND_ALIASES: dict[str, ExerciseKind] = {
    "multiple-choice": ExerciseKind.MULTIPLE_CHOICE,
    "multiple_choice": ExerciseKind.MULTIPLE_CHOICE,
    "multiplechoice": ExerciseKind.MULTIPLE_CHOICE,
    "mcq": ExerciseKind.MULTIPLE_CHOICE,
    "choice": ExerciseKind.MULTIPLE_CHOICE,
    "fill-in-the-blank": ExerciseKind.FILL_IN_BLANK,
    "fill-in-blank": ExerciseKind.FILL_IN_BLANK,
    "fill_in_blank": ExerciseKind.FILL_IN_BLANK,
    "fill": ExerciseKind.FILL_IN_BLANK,
    "type-in": ExerciseKind.TYPE_IN,
    "type_in": ExerciseKind.TYPE_IN,
    "typein": ExerciseKind.TYPE_IN,
    "translation": ExerciseKind.TRANSLATION,
    "cloze": ExerciseKind.CLOZE,
}


def resolve_field(raw: Mapping[str, Any], field: str) -> Any:
    """Return the first non-blank value among the aliases of a canonical field."""
    for alias in FIELD_ALIASES[field]:
        value = raw.get(alias)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def resolve_kind(raw_kind: Any, has_options: bool) -> ExerciseKind | None:
    """Map an explicit kind alias, or infer the kind from the options.

    Returns None for an explicit kind that is not recognized.
    """
    if raw_kind is None or raw_kind == "":
        return ExerciseKind.MULTIPLE_CHOICE if has_options else ExerciseKind.FILL_IN_BLANK
    if not isinstance(raw_kind, str):
        return None
    return KIND_ALIASES.get(raw_kind.strip().lower())


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _resolve_answer(raw: Mapping[str, Any], raw_options: list[Any] | None) -> Any:
    """Prefer an explicit answer, fall back to indexing the options.

    The index refers to the options as written in the record, before
    blanks and duplicates are dropped.
    """
    answer = resolve_field(raw, "answer")
    if answer is not None:
        return answer

    index = resolve_field(raw, "answer_index")
    # bool is an int subclass; True is not a valid index
    if isinstance(index, int) and not isinstance(index, bool) and raw_options:
        if 0 <= index < len(raw_options) and not _is_blank(raw_options[index]):
            return str(raw_options[index])
    return None


def _raw_options(raw: Mapping[str, Any]) -> list[Any] | None:
    options = resolve_field(raw, "options")
    if not isinstance(options, (list, tuple)):
        return None
    return list(options)


def _clean_options(raw_options: list[Any]) -> list[str]:
    """Drop blank entries and repeated options, keeping first occurrences."""
    return list(dict.fromkeys(str(opt) for opt in raw_options if not _is_blank(opt)))


def _resolve_tags(raw: Mapping[str, Any]) -> frozenset[str]:
    tags = resolve_field(raw, "tags")
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(str(t).strip().lower() for t in tags if str(t).strip())


def normalize(raw: Any, fallback_id: str | None = None) -> Exercise | Rejected:
    """Convert one raw exercise record into a canonical Exercise.

    Args:
        raw: A record of unknown shape, usually a dict parsed from JSON.
        fallback_id: Id to use when the record carries none. A random id is
            generated when this is also missing.

    Returns:
        The normalized Exercise, or a Rejected value describing why the
        record cannot be used. Never raises for malformed input.
    """
    if not isinstance(raw, Mapping):
        return Rejected(
            reason=RejectionReason.NOT_A_RECORD,
            detail=f"expected an object, got {type(raw).__name__}",
            record=raw,
        )

    prompt = resolve_field(raw, "prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        return Rejected(reason=RejectionReason.MISSING_PROMPT, record=raw)

    raw_options = _raw_options(raw)
    options = _clean_options(raw_options) if raw_options is not None else None
    kind = resolve_kind(resolve_field(raw, "kind"), raw_options is not None)
    if kind is None:
        return Rejected(
            reason=RejectionReason.UNKNOWN_KIND,
            detail=f"unknown exercise type {resolve_field(raw, 'kind')!r}",
            record=raw,
        )

    if kind == ExerciseKind.MULTIPLE_CHOICE and not options:
        return Rejected(reason=RejectionReason.MISSING_OPTIONS, record=raw)

    answer = _resolve_answer(raw, raw_options)
    if answer is None:
        return Rejected(reason=RejectionReason.MISSING_ANSWER, record=raw)
    if not isinstance(answer, str):
        return Rejected(
            reason=RejectionReason.INVALID_ANSWER,
            detail=f"answer must be a string, got {type(answer).__name__}",
            record=raw,
        )
    if not answer.strip():
        return Rejected(reason=RejectionReason.MISSING_ANSWER, record=raw)

    if kind == ExerciseKind.MULTIPLE_CHOICE:
        assert options is not None
        if answer not in options:
            return Rejected(
                reason=RejectionReason.ANSWER_NOT_IN_OPTIONS,
                detail=f"{answer!r} not in {options!r}",
                record=raw,
            )
        if len(options) < 2:
            return Rejected(reason=RejectionReason.TOO_FEW_OPTIONS, record=raw)
    else:
        options = []

    raw_id = resolve_field(raw, "id")
    exercise_id = str(raw_id) if raw_id is not None else fallback_id or str(uuid.uuid4())

    explanation = resolve_field(raw, "explanation")

    return Exercise(
        id=exercise_id,
        kind=kind,
        prompt=prompt.strip(),
        options=tuple(options),
        expected_answer=answer,
        explanation=str(explanation) if explanation else None,
        tags=_resolve_tags(raw),
    )


def normalize_records(
    raws: Iterable[Any],
    id_prefix: str = "item",
) -> tuple[list[Exercise], list[Rejected]]:
    """Normalize a batch of records, isolating per-record defects.

    Returns:
        Tuple of (accepted exercises, rejected records).
    """
    exercises: list[Exercise] = []
    rejected: list[Rejected] = []

    for position, raw in enumerate(raws):
        result = normalize(raw, fallback_id=f"{id_prefix}-{position}")
        if isinstance(result, Rejected):
            logger.debug(
                "Skipping record %d: %s %s", position, result.reason.value, result.detail
            )
            rejected.append(result)
        else:
            exercises.append(result)

    if rejected:
        logger.info(
            "Normalized %d records, rejected %d", len(exercises), len(rejected)
        )
    return exercises, rejected
