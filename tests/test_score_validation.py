"""Tests for WOD score-type validation."""

import pytest

from wodlog.core.enums import ScoreType
from wodlog.core.exceptions import InputRejected, ScoreTypeMismatch
from wodlog.services.score_validation import (
    ScoreFields,
    ViolationKind,
    ensure_valid_score,
    validate_score,
)


class TestValidateScore:
    def test_time_ok(self):
        assert validate_score(ScoreType.TIME, ScoreFields(time_seconds=245)) is None

    def test_time_missing(self):
        violation = validate_score(ScoreType.TIME, ScoreFields())
        assert violation.kind is ViolationKind.MISSING_REQUIRED
        assert violation.missing == ("time_seconds",)
        assert violation.issue == "Missing time_seconds for Time-based WOD"

    def test_time_with_rounds(self):
        violation = validate_score("Time (HH:MM:SS)", ScoreFields(time_seconds=300, rounds=5))
        assert violation.kind is ViolationKind.FORBIDDEN_FIELDS
        assert violation.extra == ("rounds",)
        assert violation.expected_score_type == "Time (HH:MM:SS)"

    def test_rounds_reps_allows_reps(self):
        assert validate_score(ScoreType.ROUNDS_REPS, ScoreFields(rounds=20, reps=7)) is None

    def test_rounds_reps_rejects_weight(self):
        violation = validate_score(ScoreType.ROUNDS_REPS, ScoreFields(rounds=20, weight=50))
        assert violation.extra == ("weight",)
        assert violation.offending_fields == ("weight",)

    def test_missing_reported_before_extras(self):
        violation = validate_score(ScoreType.ROUNDS_REPS, ScoreFields(time_seconds=600))
        assert violation.kind is ViolationKind.MISSING_REQUIRED
        assert violation.missing == ("rounds",)

    def test_max_weight(self):
        assert validate_score(ScoreType.MAX_WEIGHT, ScoreFields(weight=500)) is None
        violation = validate_score(ScoreType.MAX_WEIGHT, ScoreFields(weight=500, reps=3))
        assert violation.extra == ("reps",)

    @pytest.mark.parametrize("score_type", [None, "", "Points", "Calories"])
    def test_unknown_score_types_pass(self, score_type):
        assert validate_score(score_type, ScoreFields(time_seconds=1, rounds=2, reps=3, weight=4)) is None


class TestEnsureValidScore:
    def test_raises_input_rejected(self):
        with pytest.raises(ScoreTypeMismatch) as exc_info:
            ensure_valid_score("Fran", ScoreType.TIME, ScoreFields(rounds=5))
        exc = exc_info.value
        assert isinstance(exc, InputRejected)
        assert exc.expected_score_type == "Time (HH:MM:SS)"
        assert exc.missing == ("time_seconds",)
        assert "Fran" in exc.message

    def test_forbidden_fields_named(self):
        with pytest.raises(ScoreTypeMismatch) as exc_info:
            ensure_valid_score("Fran", ScoreType.TIME, ScoreFields(time_seconds=200, weight=95))
        assert exc_info.value.extra == ("weight",)
        assert "weight" in exc_info.value.message

    def test_valid_passes(self):
        ensure_valid_score("Cindy", ScoreType.ROUNDS_REPS, ScoreFields(rounds=18))
