"""Tests for raw exercise record normalization."""

from models import (
    ComparisonMode,
    Exercise,
    ExerciseKind,
    Rejected,
    RejectionReason,
)
from exercises.normalizer import normalize, normalize_records, resolve_kind


class TestNormalizeMultipleChoice:
    """Tests for normalizing multiple choice records."""

    def test_answer_index_resolves_to_option(self):
        """answerIndex should be turned into the option text."""
        result = normalize(
            {
                "type": "multiple-choice",
                "question": "Ich gebe ___ Mann das Buch.",
                "options": ["der", "den", "dem", "des"],
                "answerIndex": 2,
            }
        )
        assert isinstance(result, Exercise)
        assert result.kind == ExerciseKind.MULTIPLE_CHOICE
        assert result.expected_answer == "dem"
        assert result.options == ("der", "den", "dem", "des")

    def test_choices_and_correct_answer_aliases(self):
        """The prompt/choices/correctAnswer schema should normalize the same way."""
        result = normalize(
            {"prompt": "___ Tisch", "choices": ["Der", "Die", "Das"], "correctAnswer": "Der"}
        )
        assert isinstance(result, Exercise)
        assert result.kind == ExerciseKind.MULTIPLE_CHOICE
        assert result.expected_answer == "Der"

    def test_explicit_answer_wins_over_index(self):
        result = normalize(
            {"prompt": "p", "options": ["a", "b"], "answer": "b", "answerIndex": 0}
        )
        assert result.expected_answer == "b"

    def test_out_of_range_index_rejected(self):
        """An answerIndex past the options should reject, not crash."""
        result = normalize(
            {"type": "mcq", "prompt": "p", "options": ["a", "b"], "answerIndex": 5}
        )
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_ANSWER

    def test_boolean_index_rejected(self):
        result = normalize({"prompt": "p", "options": ["a", "b"], "answerIndex": True})
        assert isinstance(result, Rejected)

    def test_answer_not_in_options_rejected(self):
        result = normalize({"prompt": "p", "options": ["a", "b"], "answer": "c"})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.ANSWER_NOT_IN_OPTIONS

    def test_duplicate_options_collapsed(self):
        result = normalize({"prompt": "p", "options": ["a", "b", "a"], "answer": "a"})
        assert isinstance(result, Exercise)
        assert result.options == ("a", "b")

    def test_answer_index_counts_blank_options(self):
        """answerIndex should point into the options as written, blanks included."""
        result = normalize(
            {"prompt": "Ich sehe ___ Hund.", "options": ["", "den", "dem"], "answerIndex": 1}
        )
        assert isinstance(result, Exercise)
        assert result.expected_answer == "den"
        assert result.options == ("den", "dem")

    def test_answer_index_counts_none_and_duplicate_options(self):
        result = normalize(
            {"prompt": "p", "options": ["der", None, "der", "dem"], "answerIndex": 3}
        )
        assert result.expected_answer == "dem"
        assert result.options == ("der", "dem")

    def test_answer_index_on_blank_option_rejected(self):
        result = normalize({"prompt": "p", "options": ["", "den", "dem"], "answerIndex": 0})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_ANSWER

    def test_single_option_rejected(self):
        result = normalize({"prompt": "p", "options": ["a", "a"], "answer": "a"})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.TOO_FEW_OPTIONS

    def test_explicit_multiple_choice_without_options_rejected(self):
        result = normalize({"type": "multiple-choice", "prompt": "p", "answer": "a"})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_OPTIONS

    def test_default_policy_is_exact(self):
        result = normalize({"prompt": "p", "options": ["a", "b"], "answer": "a"})
        assert result.policy.mode == ComparisonMode.EXACT


class TestNormalizeFreeText:
    """Tests for normalizing free-text records."""

    def test_missing_kind_without_options_is_fill_in_blank(self):
        result = normalize({"question": "Du ___ Deutsch.", "answer": "sprichst"})
        assert isinstance(result, Exercise)
        assert result.kind == ExerciseKind.FILL_IN_BLANK
        assert result.options == ()
        assert result.policy.mode == ComparisonMode.CASE_INSENSITIVE

    def test_options_dropped_for_free_text_kinds(self):
        result = normalize(
            {"type": "type-in", "prompt": "p", "options": ["x", "y"], "answer": "x"}
        )
        assert isinstance(result, Exercise)
        assert result.kind == ExerciseKind.TYPE_IN
        assert result.options == ()

    def test_non_string_answer_rejected(self):
        result = normalize({"prompt": "p", "answer": 42})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.INVALID_ANSWER

    def test_blank_answer_rejected(self):
        result = normalize({"prompt": "p", "answer": "   "})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_ANSWER


class TestNormalizeRecordShape:
    """Tests for ids, tags and malformed records."""

    def test_non_mapping_rejected(self):
        result = normalize(["not", "a", "record"])
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.NOT_A_RECORD

    def test_missing_prompt_rejected(self):
        result = normalize({"answer": "a"})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_PROMPT

    def test_blank_prompt_falls_through_to_question(self):
        """An empty prompt should not hide a filled-in question alias."""
        result = normalize({"prompt": "", "question": "Wie ___ du?", "answer": "heißt"})
        assert isinstance(result, Exercise)
        assert result.prompt == "Wie ___ du?"

    def test_blank_answer_falls_through_to_index(self):
        result = normalize({"prompt": "p", "answer": " ", "options": ["a", "b"], "answerIndex": 1})
        assert result.expected_answer == "b"

    def test_unknown_kind_rejected(self):
        result = normalize({"type": "matching", "prompt": "p", "answer": "a"})
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.UNKNOWN_KIND

    def test_id_kept_from_record(self):
        result = normalize({"id": 7, "prompt": "p", "answer": "a"}, fallback_id="item-0")
        assert result.id == "7"

    def test_fallback_id_used_when_missing(self):
        result = normalize({"prompt": "p", "answer": "a"}, fallback_id="item-3")
        assert result.id == "item-3"

    def test_generated_id_when_no_fallback(self):
        first = normalize({"prompt": "p", "answer": "a"})
        second = normalize({"prompt": "p", "answer": "a"})
        assert first.id and second.id
        assert first.id != second.id

    def test_tags_lowercased(self):
        result = normalize({"prompt": "p", "answer": "a", "tags": ["Dativ", " Maskulin "]})
        assert result.tags == frozenset({"dativ", "maskulin"})

    def test_explanation_alias(self):
        result = normalize({"prompt": "p", "answer": "a", "explain": "weil"})
        assert result.explanation == "weil"


class TestResolveKind:
    def test_aliases_case_insensitive(self):
        assert resolve_kind("Multiple-Choice", True) == ExerciseKind.MULTIPLE_CHOICE
        assert resolve_kind("CLOZE", False) == ExerciseKind.CLOZE

    def test_inferred_from_options(self):
        assert resolve_kind(None, True) == ExerciseKind.MULTIPLE_CHOICE
        assert resolve_kind("", False) == ExerciseKind.FILL_IN_BLANK

    def test_non_string_kind_unknown(self):
        assert resolve_kind(3, False) is None


class TestNormalizeRecords:
    """Tests for batch normalization."""

    def test_bad_records_do_not_stop_the_batch(self, sample_records):
        """One malformed record should be rejected while the rest survive."""
        records = sample_records + [{"question": "kaputt"}, "garbage"]
        exercises, rejected = normalize_records(records)

        assert [ex.id for ex in exercises] == ["f-001", "f-002", "f-003", "f-004"]
        assert len(rejected) == 2

    def test_positional_fallback_ids(self):
        exercises, _ = normalize_records(
            [{"prompt": "a", "answer": "x"}, {"prompt": "b", "answer": "y"}],
            id_prefix="grammatik",
        )
        assert [ex.id for ex in exercises] == ["grammatik-0", "grammatik-1"]

    def test_empty_input(self):
        assert normalize_records([]) == ([], [])
