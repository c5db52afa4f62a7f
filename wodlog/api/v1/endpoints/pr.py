"""Personal records: PR lists, per-movement summaries, manual toggles, retroactive pass."""

from fastapi import APIRouter, Depends, Query

from wodlog.api.deps import get_current_user_id, get_repositories
from wodlog.core.constants import (
    PR_LIST_DEFAULT_LIMIT,
    PR_LIST_MAX_LIMIT,
    PR_SUMMARY_DEFAULT_LIMIT,
    PR_SUMMARY_MAX_LIMIT,
)
from wodlog.db.repositories import Repositories
from wodlog.schemas.pr import MovementPRSummary, PersonalRecordsRead, PRToggleRead, RetroactivePRRead
from wodlog.services import personal_records, pr_detection

router = APIRouter()


@router.get("", response_model=PersonalRecordsRead)
async def list_personal_records(
    limit: int = Query(PR_LIST_DEFAULT_LIMIT, ge=1, le=PR_LIST_MAX_LIMIT),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """
    Movement PRs (with calculated 1RM and the formula used) and WOD PRs,
    newest workout first.
    """
    return await personal_records.list_personal_records(repos.performances, user_id, limit)


@router.get("/movements", response_model=list[MovementPRSummary])
async def pr_movements(
    limit: int = Query(PR_SUMMARY_DEFAULT_LIMIT, ge=1, le=PR_SUMMARY_MAX_LIMIT),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """One summary per movement with PRs: count, best weight, best estimated 1RM, last PR date."""
    return await personal_records.pr_movement_summaries(repos.performances, user_id, limit)


@router.post("/movement-performances/{row_id}/toggle", response_model=PRToggleRead)
async def toggle_movement_pr(
    row_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Manually flip the PR flag on one of the caller's movement rows."""
    is_pr = await pr_detection.toggle_movement_pr(repos.performances, user_id, row_id)
    return PRToggleRead(id=row_id, is_pr=is_pr)


@router.post("/wod-performances/{row_id}/toggle", response_model=PRToggleRead)
async def toggle_wod_pr(
    row_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """WOD PRs are never detected automatically; this is the only way to set one."""
    is_pr = await pr_detection.toggle_wod_pr(repos.performances, user_id, row_id)
    return PRToggleRead(id=row_id, is_pr=is_pr)


@router.post("/retroactive", response_model=RetroactivePRRead)
async def retroactive_prs(
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Recompute the caller's movement PR flags over their whole history."""
    return await pr_detection.retroactively_flag_prs(repos.performances, user_id)
