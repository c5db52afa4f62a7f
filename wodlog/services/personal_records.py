"""PR reporting: PR lists with estimated 1RM, per-movement summaries, history."""

from dataclasses import dataclass, field
from datetime import date

from wodlog.db.repositories import PerformanceRepository
from wodlog.schemas.pr import (
    MovementHistoryItem,
    MovementPRRead,
    MovementPRSummary,
    PersonalRecordsRead,
    WODHistoryItem,
    WODPRRead,
)
from wodlog.services.one_rm import estimate_1rm, percent_improvement


@dataclass
class _SummaryAcc:
    movement_id: int
    movement_name: str
    pr_count: int = 0
    best_weight: float | None = None
    best_reps: int | None = None
    best_1rm: float = 0.0
    formula: str = ""
    last_pr_date: date | None = None
    recent_weights: list[float] = field(default_factory=list)  # newest first, at most two


async def list_personal_records(
    repo: PerformanceRepository, user_id: int, limit: int
) -> PersonalRecordsRead:
    """Movement PRs (with calculated 1RM) and WOD PRs, newest first."""
    movement_rows = await repo.list_pr_movements(user_id, limit=limit)
    wod_rows = await repo.list_pr_wods(user_id, limit=limit)

    movements = []
    for row in movement_rows:
        one_rm = estimate_1rm(row.weight, row.reps)
        movements.append(
            MovementPRRead(
                id=row.id,
                logged_workout_id=row.logged_workout_id,
                movement_id=row.movement_id,
                movement_name=row.movement.name,
                movement_type=row.movement.type.value,
                workout_date=row.logged_workout.workout_date,
                sets=row.sets,
                reps=row.reps,
                weight=row.weight,
                calculated_1rm=round(one_rm.estimate, 2),
                formula=one_rm.formula.value,
                notes=row.notes,
            )
        )
    wods = [
        WODPRRead(
            id=row.id,
            logged_workout_id=row.logged_workout_id,
            wod_id=row.wod_id,
            wod_name=row.wod.name,
            score_type=row.wod.score_type,
            workout_date=row.logged_workout.workout_date,
            time_seconds=row.time_seconds,
            rounds=row.rounds,
            reps=row.reps,
            weight=row.weight,
            notes=row.notes,
        )
        for row in wod_rows
    ]
    return PersonalRecordsRead(movements=movements, wods=wods)


def _improvement(recent_weights: list[float]) -> float | None:
    if len(recent_weights) < 2:
        return None
    latest, previous = recent_weights
    return round(percent_improvement(latest, previous), 2)


async def pr_movement_summaries(
    repo: PerformanceRepository, user_id: int, limit: int
) -> list[MovementPRSummary]:
    """One line per movement with PRs: count, heaviest PR, best estimated 1RM, latest date.

    Ordered by most recent PR first.
    """
    by_movement: dict[int, _SummaryAcc] = {}
    for row in await repo.list_pr_movements(user_id):
        acc = by_movement.get(row.movement_id)
        if acc is None:
            acc = by_movement[row.movement_id] = _SummaryAcc(row.movement_id, row.movement.name)
        acc.pr_count += 1
        if row.weight is not None and (acc.best_weight is None or row.weight > acc.best_weight):
            acc.best_weight = row.weight
            acc.best_reps = row.reps
        one_rm = estimate_1rm(row.weight, row.reps)
        if one_rm.estimate > acc.best_1rm:
            acc.best_1rm = one_rm.estimate
            acc.formula = one_rm.formula.value
        if row.weight is not None and len(acc.recent_weights) < 2:
            acc.recent_weights.append(row.weight)
        workout_date = row.logged_workout.workout_date
        if acc.last_pr_date is None or workout_date > acc.last_pr_date:
            acc.last_pr_date = workout_date

    ordered = sorted(by_movement.values(), key=lambda a: (a.last_pr_date, a.movement_id), reverse=True)
    return [
        MovementPRSummary(
            movement_id=a.movement_id,
            movement_name=a.movement_name,
            pr_count=a.pr_count,
            best_weight=a.best_weight,
            best_reps=a.best_reps,
            best_1rm=round(a.best_1rm, 2),
            formula=a.formula,
            last_pr_date=a.last_pr_date,
            improvement_percent=_improvement(a.recent_weights),
        )
        for a in ordered[:limit]
    ]


async def movement_history(
    repo: PerformanceRepository, user_id: int, movement_id: int, limit: int
) -> list[MovementHistoryItem]:
    items = []
    for row in await repo.movement_history(user_id, movement_id, limit):
        one_rm = estimate_1rm(row.weight, row.reps)
        items.append(
            MovementHistoryItem(
                id=row.id,
                logged_workout_id=row.logged_workout_id,
                workout_date=row.logged_workout.workout_date,
                sets=row.sets,
                reps=row.reps,
                weight=row.weight,
                time_seconds=row.time_seconds,
                distance=row.distance,
                is_pr=row.is_pr,
                calculated_1rm=round(one_rm.estimate, 2),
                formula=one_rm.formula.value,
                notes=row.notes,
            )
        )
    return items


async def wod_history(
    repo: PerformanceRepository, user_id: int, wod_id: int, limit: int
) -> list[WODHistoryItem]:
    return [
        WODHistoryItem(
            id=row.id,
            logged_workout_id=row.logged_workout_id,
            workout_date=row.logged_workout.workout_date,
            time_seconds=row.time_seconds,
            rounds=row.rounds,
            reps=row.reps,
            weight=row.weight,
            is_pr=row.is_pr,
            notes=row.notes,
        )
        for row in await repo.wod_history(user_id, wod_id, limit)
    ]
