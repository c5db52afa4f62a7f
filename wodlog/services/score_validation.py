"""Score-type validation for WOD performances.

Exactly one score group may be populated, and it must be the one the WOD declares:

    Time (HH:MM:SS)  requires time_seconds; forbids rounds, reps, weight
    Rounds+Reps      requires rounds;       forbids time_seconds, weight (reps allowed)
    Max Weight       requires weight;       forbids time_seconds, rounds, reps

Any other score type is free-form and passes. A missing required field is reported
before forbidden extras.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from wodlog.core.enums import ScoreType
from wodlog.core.exceptions import ScoreTypeMismatch

# score type -> (required field, forbidden fields, short label used in issue text)
SCORE_RULES: dict[str, tuple[str, tuple[str, ...], str]] = {
    ScoreType.TIME.value: ("time_seconds", ("rounds", "reps", "weight"), "Time-based"),
    ScoreType.ROUNDS_REPS.value: ("rounds", ("time_seconds", "weight"), "Rounds+Reps"),
    ScoreType.MAX_WEIGHT.value: ("weight", ("time_seconds", "rounds", "reps"), "Max Weight"),
}


class ViolationKind(str, Enum):
    MISSING_REQUIRED = "missing_required"
    FORBIDDEN_FIELDS = "forbidden_fields"


@dataclass(frozen=True)
class ScoreFields:
    """Candidate score values for one WOD performance."""

    time_seconds: int | None = None
    rounds: int | None = None
    reps: int | None = None
    weight: float | None = None

    @classmethod
    def from_obj(cls, obj: Any) -> "ScoreFields":
        """Build from any object (ORM row, schema) exposing the four attributes."""
        return cls(
            time_seconds=getattr(obj, "time_seconds", None),
            rounds=getattr(obj, "rounds", None),
            reps=getattr(obj, "reps", None),
            weight=getattr(obj, "weight", None),
        )

    def present(self) -> set[str]:
        return {
            name
            for name in ("time_seconds", "rounds", "reps", "weight")
            if getattr(self, name) is not None
        }


@dataclass(frozen=True)
class ScoreViolation:
    kind: ViolationKind
    expected_score_type: str
    issue: str
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()

    @property
    def offending_fields(self) -> tuple[str, ...]:
        return self.missing + self.extra


def _score_type_value(score_type: ScoreType | str | None) -> str | None:
    if isinstance(score_type, ScoreType):
        return score_type.value
    return score_type


def validate_score(score_type: ScoreType | str | None, fields: ScoreFields) -> ScoreViolation | None:
    """Return None when ``fields`` conform to ``score_type``, else the violation."""
    key = _score_type_value(score_type)
    rule = SCORE_RULES.get(key) if key else None
    if rule is None:
        return None
    required, forbidden, label = rule
    present = fields.present()

    if required not in present:
        return ScoreViolation(
            kind=ViolationKind.MISSING_REQUIRED,
            expected_score_type=key,
            issue=f"Missing {required} for {label} WOD",
            missing=(required,),
        )
    extra = tuple(name for name in forbidden if name in present)
    if extra:
        return ScoreViolation(
            kind=ViolationKind.FORBIDDEN_FIELDS,
            expected_score_type=key,
            issue=f"Has invalid fields ({'/'.join(forbidden)}) for {label} WOD",
            extra=extra,
        )
    return None


def ensure_valid_score(wod_name: str, score_type: ScoreType | str | None, fields: ScoreFields) -> None:
    """Raise ScoreTypeMismatch for a write that does not match the WOD's score type."""
    violation = validate_score(score_type, fields)
    if violation is None:
        return
    if violation.kind is ViolationKind.MISSING_REQUIRED:
        detail = f"{', '.join(violation.missing)} is missing"
    else:
        detail = f"contains invalid fields ({', '.join(violation.extra)})"
    raise ScoreTypeMismatch(
        f"WOD '{wod_name}' has score_type '{violation.expected_score_type}' but {detail}",
        expected_score_type=violation.expected_score_type,
        missing=violation.missing,
        extra=violation.extra,
    )
