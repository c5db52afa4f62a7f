"""Audit and repair of WOD performances whose scores don't match their WOD's score type.

``detect_mismatches`` is read-only. ``repair_mismatches`` deletes every offending row,
one at a time, so a single failed delete is logged and skipped rather than aborting
the whole repair. ``update_wod_record`` fixes one row in place instead.
"""

import logging
from dataclasses import dataclass
from datetime import date

from wodlog.core.exceptions import NotFound, WodLogError
from wodlog.db.repositories import PerformanceRepository
from wodlog.models.workout import WODPerformance
from wodlog.services.score_validation import ScoreFields, ensure_valid_score, validate_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WODMismatch:
    id: int
    wod_id: int
    wod_name: str
    user_id: int
    workout_date: date
    expected_score_type: str
    issue: str
    time_seconds: int | None
    rounds: int | None
    reps: int | None
    weight: float | None
    violating_fields: tuple[str, ...]


@dataclass(frozen=True)
class RepairResult:
    total_found: int
    deleted_count: int


async def detect_mismatches(repo: PerformanceRepository) -> list[WODMismatch]:
    """Every WOD performance (all users) that violates its WOD's score type, newest first."""
    mismatches = []
    for item in await repo.list_wod_performances_with_score_type():
        row = item.performance
        violation = validate_score(item.score_type, ScoreFields.from_obj(row))
        if violation is None:
            continue
        mismatches.append(
            WODMismatch(
                id=row.id,
                wod_id=row.wod_id,
                wod_name=item.wod_name,
                user_id=item.user_id,
                workout_date=item.workout_date,
                expected_score_type=violation.expected_score_type,
                issue=violation.issue,
                time_seconds=row.time_seconds,
                rounds=row.rounds,
                reps=row.reps,
                weight=row.weight,
                violating_fields=violation.offending_fields,
            )
        )
    return mismatches


async def repair_mismatches(repo: PerformanceRepository) -> RepairResult:
    """Delete every mismatched row. Per-row failures are logged and skipped."""
    mismatches = await detect_mismatches(repo)
    deleted = 0
    for m in mismatches:
        try:
            await repo.delete_wod_performance(m.id)
        except WodLogError:
            logger.exception("Failed to delete mismatched WOD performance %s (%s)", m.id, m.wod_name)
            continue
        deleted += 1
    logger.info("WOD mismatch repair: %d found, %d deleted", len(mismatches), deleted)
    return RepairResult(total_found=len(mismatches), deleted_count=deleted)


async def update_wod_record(
    repo: PerformanceRepository,
    record_id: int,
    fields: ScoreFields,
    notes: str | None = None,
) -> WODPerformance:
    """Replace one row's score fields after validating them against the WOD's score type.

    The whole score group is replaced (fields left as None are cleared); is_pr and
    order_index are kept.
    """
    row = await repo.get_wod_performance(record_id)
    if row is None:
        raise NotFound(f"WOD performance {record_id} not found")
    ensure_valid_score(row.wod.name, row.wod.score_type, fields)
    return await repo.update_wod_performance(
        row,
        {
            "time_seconds": fields.time_seconds,
            "rounds": fields.rounds,
            "reps": fields.reps,
            "weight": fields.weight,
            "notes": notes,
        },
    )
