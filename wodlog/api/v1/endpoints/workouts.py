"""Logged workout endpoints: log, browse, edit and delete workouts and their rows."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Body, Depends, Query, Response

from wodlog.api.deps import clamp_page_size, get_current_user_id, get_repositories
from wodlog.core.enums import WorkoutType
from wodlog.db.repositories import LoggedWorkoutFilter, Repositories
from wodlog.schemas.workout import (
    LoggedWorkoutCreate,
    LoggedWorkoutRead,
    LoggedWorkoutUpdate,
    MonthlyWorkoutCount,
    MovementPerformanceCreate,
    MovementPerformanceRead,
    MovementPerformanceUpdate,
    WODPerformanceCreate,
    WODPerformanceRead,
    WODScore,
)
from wodlog.services import workout_logging

router = APIRouter()


@router.get("", response_model=list[LoggedWorkoutRead])
async def list_workouts(
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
    start_date: date | None = None,
    end_date: date | None = None,
    template_id: int | None = None,
    workout_type: WorkoutType | None = None,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """The caller's logged workouts, newest first, optionally filtered by date range/template/type."""
    filters = LoggedWorkoutFilter(
        start_date=start_date,
        end_date=end_date,
        template_id=template_id,
        workout_type=workout_type.value if workout_type else None,
        limit=clamp_page_size(limit),
        offset=skip,
    )
    return await workout_logging.list_logged_workouts(repos, user_id, filters)


@router.post("", response_model=LoggedWorkoutRead, status_code=201)
async def log_workout(
    payload: LoggedWorkoutCreate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """
    Log a workout with its movement and WOD rows in one go.
    Movement PRs are detected automatically; WOD scores must match each WOD's score type.
    """
    return await workout_logging.log_workout(repos, user_id, payload)


@router.get("/monthly-count", response_model=MonthlyWorkoutCount)
async def monthly_count(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    count = await workout_logging.monthly_workout_count(repos, user_id, year, month)
    return MonthlyWorkoutCount(year=year, month=month, count=count)


@router.patch("/movement-performances/{row_id}", response_model=MovementPerformanceRead)
async def update_movement_performance(
    row_id: int,
    payload: MovementPerformanceUpdate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Edit one movement row; its PR flag is re-evaluated."""
    return await workout_logging.update_movement_performance(repos, user_id, row_id, payload)


@router.patch("/wod-performances/{row_id}", response_model=WODPerformanceRead)
async def update_wod_performance(
    row_id: int,
    payload: WODScore,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Replace one WOD row's score (validated against the WOD's score type)."""
    return await workout_logging.update_wod_performance(repos, user_id, row_id, payload)


@router.get("/{logged_workout_id}", response_model=LoggedWorkoutRead)
async def get_workout(
    logged_workout_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Get a logged workout with all movement and WOD rows."""
    return await workout_logging.get_logged_workout(repos, user_id, logged_workout_id)


@router.patch("/{logged_workout_id}", response_model=LoggedWorkoutRead)
async def update_workout(
    logged_workout_id: int,
    payload: LoggedWorkoutUpdate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    return await workout_logging.update_logged_workout(repos, user_id, logged_workout_id, payload)


@router.delete("/{logged_workout_id}", status_code=204)
async def delete_workout(
    logged_workout_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Delete a logged workout and all of its rows."""
    await workout_logging.delete_logged_workout(repos, user_id, logged_workout_id)
    return Response(status_code=204)


@router.put("/{logged_workout_id}/movements", response_model=LoggedWorkoutRead)
async def replace_movements(
    logged_workout_id: int,
    payload: list[MovementPerformanceCreate] = Body(...),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Replace all movement rows of a workout (PRs re-detected)."""
    return await workout_logging.replace_movements(repos, user_id, logged_workout_id, payload)


@router.put("/{logged_workout_id}/wods", response_model=LoggedWorkoutRead)
async def replace_wods(
    logged_workout_id: int,
    payload: list[WODPerformanceCreate] = Body(...),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Replace all WOD rows of a workout. Rejected as a whole if any score is invalid."""
    return await workout_logging.replace_wods(repos, user_id, logged_workout_id, payload)
