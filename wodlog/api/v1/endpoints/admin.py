"""Admin maintenance: audit and repair WOD scores that don't match their WOD's score type.

These routes act on every user's rows. The caller must identify itself with
X-User-Id like any other route; admin gating is the upstream gateway's job.
"""

import logging

from fastapi import APIRouter, Depends

from wodlog.api.deps import get_current_user_id, get_repositories
from wodlog.db.repositories import Repositories
from wodlog.schemas.admin import RepairResultRead, WODMismatchRead, WODMismatchReport
from wodlog.schemas.workout import WODPerformanceRead, WODScore
from wodlog.services import mismatch_audit
from wodlog.services.score_validation import ScoreFields

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/wod-mismatches", response_model=WODMismatchReport)
async def detect_wod_mismatches(
    admin_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """List every WOD performance (all users) whose populated fields violate its WOD's score type."""
    mismatches = await mismatch_audit.detect_mismatches(repos.performances)
    return WODMismatchReport(
        count=len(mismatches),
        mismatches=[WODMismatchRead.model_validate(m) for m in mismatches],
    )


@router.post("/wod-mismatches/repair", response_model=RepairResultRead)
async def repair_wod_mismatches(
    admin_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Delete all mismatched WOD performances. Reports how many were found vs deleted."""
    logger.info("WOD mismatch repair requested by user %s", admin_id)
    return await mismatch_audit.repair_mismatches(repos.performances)


@router.patch("/wod-mismatches/{record_id}", response_model=WODPerformanceRead)
async def update_wod_record(
    record_id: int,
    payload: WODScore,
    admin_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Fix one WOD performance in place; the new score must match the WOD's score type."""
    logger.info("WOD performance %s rewritten by user %s", record_id, admin_id)
    return await mismatch_audit.update_wod_record(
        repos.performances, record_id, ScoreFields.from_obj(payload), payload.notes
    )
