"""Answer checking for canonical exercises."""

from models import ComparisonMode, Exercise, ExerciseKind
from text_utils import fold_case, fold_diacritics


def grade(exercise: Exercise, submitted: str | None) -> bool:
    """Check a submitted answer against the exercise's expected answer.

    A custom predicate, when present, decides alone and sees the raw input.
    Multiple choice compares the option text exactly. Free-text exercises
    use their comparison policy.
    """
    if submitted is None:
        return False

    policy = exercise.policy
    if policy.mode == ComparisonMode.CUSTOM:
        assert policy.predicate is not None
        return bool(policy.predicate(submitted))

    expected = exercise.expected_answer
    if exercise.kind == ExerciseKind.MULTIPLE_CHOICE:
        return submitted == expected

    if policy.mode == ComparisonMode.DIACRITIC_FOLDING:
        return fold_diacritics(submitted) == fold_diacritics(expected)
    if policy.mode == ComparisonMode.CASE_INSENSITIVE:
        return fold_case(submitted) == fold_case(expected)
    return submitted.strip() == expected.strip()
