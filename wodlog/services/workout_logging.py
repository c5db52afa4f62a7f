"""Logging workouts: create, read, edit and delete logged workouts and their rows.

Every write runs inside the request's session transaction. Validation (ownership,
referenced ids, WOD score types) happens before anything is written, so a rejected
request leaves the stored rows as they were.
"""

import calendar
import logging
from collections.abc import Sequence
from datetime import date

from wodlog.core.exceptions import Conflict, InputRejected, NotFound, Unauthorized
from wodlog.db.repositories import LoggedWorkoutFilter, Repositories
from wodlog.models.workout import LoggedWorkout, MovementPerformance, WODPerformance
from wodlog.schemas.workout import (
    LoggedWorkoutCreate,
    LoggedWorkoutUpdate,
    MovementPerformanceCreate,
    MovementPerformanceUpdate,
    WODPerformanceCreate,
    WODScore,
)
from wodlog.services.mismatch_audit import update_wod_record
from wodlog.services.pr_detection import detect_movement_pr, flag_movement_prs
from wodlog.services.score_validation import ScoreFields, ensure_valid_score

logger = logging.getLogger(__name__)


def _check_owner(workout: LoggedWorkout, user_id: int) -> None:
    if workout.user_id != user_id:
        raise Unauthorized("Cannot access another user's workout")


async def _build_movement_rows(
    repos: Repositories, items: Sequence[MovementPerformanceCreate]
) -> list[MovementPerformance]:
    wanted = {m.movement_id for m in items}
    missing = wanted - await repos.movements.existing_ids(wanted)
    if missing:
        raise NotFound(f"Movement(s) not found: {', '.join(str(i) for i in sorted(missing))}")
    return [MovementPerformance(**m.model_dump(), is_pr=False) for m in items]


async def _build_wod_rows(repos: Repositories, items: Sequence[WODPerformanceCreate]) -> list[WODPerformance]:
    wods = await repos.wods.get_many(w.wod_id for w in items)
    rows = []
    for item in items:
        wod = wods.get(item.wod_id)
        if wod is None:
            raise NotFound(f"WOD {item.wod_id} not found")
        ensure_valid_score(wod.name, wod.score_type, ScoreFields.from_obj(item))
        rows.append(WODPerformance(**item.model_dump(), is_pr=False))
    return rows


async def log_workout(repos: Repositories, user_id: int, payload: LoggedWorkoutCreate) -> LoggedWorkout:
    """Record a dated workout with all of its movement and WOD rows, PRs flagged."""
    if payload.template_id is not None:
        template = await repos.templates.get(payload.template_id)
        if template is None:
            raise NotFound(f"Template {payload.template_id} not found")
        if template.created_by is not None and template.created_by != user_id:
            raise Unauthorized("Cannot log another user's template")
        existing = await repos.performances.find_logged_workout(
            user_id, payload.template_id, payload.workout_date
        )
        if existing is not None:
            raise Conflict(
                f"Template {payload.template_id} already logged on {payload.workout_date.isoformat()}"
            )

    movements = await _build_movement_rows(repos, payload.movements)
    wods = await _build_wod_rows(repos, payload.wods)
    pr_count = await flag_movement_prs(repos.performances, user_id, movements)

    workout = LoggedWorkout(
        user_id=user_id,
        template_id=payload.template_id,
        workout_name=payload.workout_name,
        workout_date=payload.workout_date,
        workout_type=payload.workout_type.value if payload.workout_type else None,
        total_time=payload.total_time,
        notes=payload.notes,
    )
    workout = await repos.performances.create_performance_batch(workout, movements, wods)
    logger.info(
        "Logged workout %s for user %s: %d movements (%d PRs), %d WODs",
        workout.id,
        user_id,
        len(movements),
        pr_count,
        len(wods),
    )
    return workout


async def get_logged_workout(repos: Repositories, user_id: int, logged_workout_id: int) -> LoggedWorkout:
    workout = await repos.performances.get_logged_workout_with_details(logged_workout_id)
    if workout is None:
        raise NotFound(f"Logged workout {logged_workout_id} not found")
    _check_owner(workout, user_id)
    return workout


async def list_logged_workouts(
    repos: Repositories, user_id: int, filters: LoggedWorkoutFilter
) -> list[LoggedWorkout]:
    return await repos.performances.list_logged_workouts(user_id, filters)


async def update_logged_workout(
    repos: Repositories, user_id: int, logged_workout_id: int, payload: LoggedWorkoutUpdate
) -> LoggedWorkout:
    """Edit workout-level fields. workout_name can only be set on ad-hoc sessions."""
    workout = await get_logged_workout(repos, user_id, logged_workout_id)
    changes = payload.model_dump(exclude_unset=True)
    if "workout_name" in changes and workout.template_id is not None:
        raise InputRejected("workout_name can only be set on workouts without a template")
    if changes.get("workout_type") is not None:
        changes["workout_type"] = payload.workout_type.value
    for k, v in changes.items():
        setattr(workout, k, v)
    await repos.performances.save_logged_workout(workout)
    return await get_logged_workout(repos, user_id, logged_workout_id)


async def delete_logged_workout(repos: Repositories, user_id: int, logged_workout_id: int) -> None:
    """Delete a logged workout and (by cascade) all of its performance rows."""
    workout = await repos.performances.get_logged_workout(logged_workout_id)
    if workout is None:
        raise NotFound(f"Logged workout {logged_workout_id} not found")
    _check_owner(workout, user_id)
    await repos.performances.delete_logged_workout(workout)
    logger.info("Deleted logged workout %s for user %s", logged_workout_id, user_id)


async def replace_movements(
    repos: Repositories,
    user_id: int,
    logged_workout_id: int,
    items: Sequence[MovementPerformanceCreate],
) -> LoggedWorkout:
    """Swap all movement rows of a workout. PRs are judged without the rows being replaced."""
    workout = await get_logged_workout(repos, user_id, logged_workout_id)
    rows = await _build_movement_rows(repos, items)
    await flag_movement_prs(repos.performances, user_id, rows, exclude_logged_workout_id=workout.id)
    await repos.performances.replace_movements(workout, rows)
    return await get_logged_workout(repos, user_id, logged_workout_id)


async def replace_wods(
    repos: Repositories,
    user_id: int,
    logged_workout_id: int,
    items: Sequence[WODPerformanceCreate],
) -> LoggedWorkout:
    """Swap all WOD rows of a workout. Nothing changes if any replacement is invalid."""
    workout = await get_logged_workout(repos, user_id, logged_workout_id)
    rows = await _build_wod_rows(repos, items)
    await repos.performances.replace_wods(workout, rows)
    return await get_logged_workout(repos, user_id, logged_workout_id)


async def update_movement_performance(
    repos: Repositories, user_id: int, row_id: int, payload: MovementPerformanceUpdate
) -> MovementPerformance:
    """Edit one movement row in place and re-judge its PR flag against everything else."""
    row = await repos.performances.get_movement_performance(row_id)
    if row is None:
        raise NotFound(f"Movement performance {row_id} not found")
    _check_owner(row.logged_workout, user_id)
    changes = payload.model_dump(exclude_unset=True)
    weight = changes.get("weight", row.weight)
    changes["is_pr"] = await detect_movement_pr(
        repos.performances, user_id, row.movement_id, weight, exclude_id=row.id
    )
    return await repos.performances.update_movement_performance(row, changes)


async def update_wod_performance(
    repos: Repositories, user_id: int, row_id: int, payload: WODScore
) -> WODPerformance:
    row = await repos.performances.get_wod_performance(row_id)
    if row is None:
        raise NotFound(f"WOD performance {row_id} not found")
    _check_owner(row.logged_workout, user_id)
    return await update_wod_record(repos.performances, row_id, ScoreFields.from_obj(payload), payload.notes)


async def monthly_workout_count(repos: Repositories, user_id: int, year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise InputRejected(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return await repos.performances.count_logged_workouts(
        user_id, date(year, month, 1), date(year, month, last_day)
    )
