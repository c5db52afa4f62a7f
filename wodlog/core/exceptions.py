"""Domain error categories.

Services raise these; the API layer maps each category to a status code
(see ``wodlog.main``). Nothing below knows about HTTP.
"""

from __future__ import annotations


class WodLogError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputRejected(WodLogError):
    """Invalid or missing fields; never silently corrected."""


class ScoreTypeMismatch(InputRejected):
    """WOD performance fields do not match the WOD's declared score type."""

    def __init__(
        self,
        message: str,
        *,
        expected_score_type: str,
        missing: tuple[str, ...] = (),
        extra: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.expected_score_type = expected_score_type
        self.missing = missing
        self.extra = extra


class NotFound(WodLogError):
    """Referenced movement, WOD, template or performance row does not exist."""


class Unauthorized(WodLogError):
    """Record is owned by someone else or is a read-only standard record."""


class Conflict(WodLogError):
    """Duplicate log / duplicate name."""


class PersistenceError(WodLogError):
    """The database call itself failed (already rolled back)."""
