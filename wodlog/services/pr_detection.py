"""PR detection: a movement set is a PR if its weight beats the user's all-time best.

Ties are not PRs. A set with no (or non-positive) weight is never a PR. WOD PRs are
never inferred: they only change through an explicit toggle.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from wodlog.core.exceptions import NotFound, Unauthorized
from wodlog.db.repositories import PerformanceRepository
from wodlog.models.workout import MovementPerformance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetroactiveResult:
    movement_pr_count: int
    wod_pr_count: int


def _beats(weight: float | None, best: float | None) -> bool:
    if weight is None or weight <= 0:
        return False
    return best is None or weight > best


async def detect_movement_pr(
    repo: PerformanceRepository,
    user_id: int,
    movement_id: int,
    weight: float | None,
    exclude_id: int | None = None,
) -> bool:
    """
    Compare ``weight`` to the user's historical max for the movement.
    (The row being judged is either not saved yet or excluded via ``exclude_id``.)
    """
    if weight is None or weight <= 0:
        return False
    best = await repo.get_max_weight_for_movement(
        user_id, movement_id, exclude_ids=[exclude_id] if exclude_id is not None else ()
    )
    return _beats(weight, best)


async def flag_movement_prs(
    repo: PerformanceRepository,
    user_id: int,
    rows: Iterable[MovementPerformance],
    exclude_logged_workout_id: int | None = None,
) -> int:
    """
    Set ``is_pr`` on unsaved rows of one workout. Returns how many were flagged.

    Rows are judged in order_index order against a running max per movement,
    seeded from history, so a second heavier set in the same workout is also a PR.
    """
    running_max: dict[int, float | None] = {}
    flagged = 0
    for row in sorted(rows, key=lambda r: r.order_index or 0):
        if row.movement_id not in running_max:
            running_max[row.movement_id] = await repo.get_max_weight_for_movement(
                user_id, row.movement_id, exclude_logged_workout_id=exclude_logged_workout_id
            )
        best = running_max[row.movement_id]
        row.is_pr = _beats(row.weight, best)
        if row.is_pr:
            running_max[row.movement_id] = row.weight
            flagged += 1
    return flagged


async def toggle_movement_pr(repo: PerformanceRepository, user_id: int, row_id: int) -> bool:
    """Manually flip a movement row's PR flag. Returns the new value."""
    row = await repo.get_movement_performance(row_id)
    if row is None:
        raise NotFound(f"Movement performance {row_id} not found")
    if row.logged_workout.user_id != user_id:
        raise Unauthorized("Cannot modify another user's performance")
    new_value = not row.is_pr
    await repo.set_movement_pr_flag(row_id, new_value)
    return new_value


async def toggle_wod_pr(repo: PerformanceRepository, user_id: int, row_id: int) -> bool:
    """Manually flip a WOD row's PR flag. Returns the new value."""
    row = await repo.get_wod_performance(row_id)
    if row is None:
        raise NotFound(f"WOD performance {row_id} not found")
    if row.logged_workout.user_id != user_id:
        raise Unauthorized("Cannot modify another user's performance")
    new_value = not row.is_pr
    await repo.set_wod_pr_flag(row_id, new_value)
    return new_value


async def retroactively_flag_prs(repo: PerformanceRepository, user_id: int) -> RetroactiveResult:
    """
    Recompute movement PR flags over the user's whole history.

    Rows are walked oldest first; a row is a PR iff its weight beats every earlier
    weight for the same movement. Flags that no longer hold are cleared. WOD flags
    are manual and left alone.
    """
    history = await repo.list_performance_history(user_id)
    running_max: dict[int, float] = {}
    newly_flagged = 0
    cleared = 0
    for row, _workout_date in history:
        should_flag = _beats(row.weight, running_max.get(row.movement_id))
        if should_flag:
            running_max[row.movement_id] = row.weight
        if should_flag == row.is_pr:
            continue
        await repo.set_movement_pr_flag(row.id, should_flag)
        if should_flag:
            newly_flagged += 1
        else:
            cleared += 1

    logger.info(
        "Retroactive PR pass for user %s: %d rows scanned, %d flagged, %d cleared",
        user_id,
        len(history),
        newly_flagged,
        cleared,
    )
    return RetroactiveResult(movement_pr_count=newly_flagged, wod_pr_count=0)
