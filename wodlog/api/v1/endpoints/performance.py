"""Performance history per movement / WOD, and a combined movement + WOD search."""

import logging

from fastapi import APIRouter, Depends, Query

from wodlog.api.deps import get_current_user_id, get_repositories
from wodlog.core.constants import PERFORMANCE_HISTORY_LIMIT, SEARCH_DEFAULT_LIMIT
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.schemas.pr import MovementHistoryItem, WODHistoryItem
from wodlog.services import catalog, personal_records

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search")
async def unified_search(
    q: str = Query(..., min_length=1),
    limit: int = Query(SEARCH_DEFAULT_LIMIT, ge=1, le=50),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """
    Search movements and WODs by name in one call.
    Returns { results: [{ type: "movement" | "wod", id, name }], count }.
    """
    filters = CatalogFilter(search=q, limit=limit)
    movements = await catalog.list_movements(repos, filters)
    wods = await catalog.list_wods(repos, filters)
    logger.debug("Search %r by user %s: %d movements, %d WODs", q, user_id, len(movements), len(wods))
    results = [{"type": "movement", "id": m.id, "name": m.name} for m in movements]
    results += [{"type": "wod", "id": w.id, "name": w.name} for w in wods]
    return {"results": results, "count": len(results)}


@router.get("/movements/{movement_id}", response_model=list[MovementHistoryItem])
async def movement_performance(
    movement_id: int,
    limit: int = Query(PERFORMANCE_HISTORY_LIMIT, ge=1, le=PERFORMANCE_HISTORY_LIMIT),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Every time the caller performed this movement, newest first (with estimated 1RM)."""
    await catalog.get_movement(repos, movement_id)
    return await personal_records.movement_history(repos.performances, user_id, movement_id, limit)


@router.get("/wods/{wod_id}", response_model=list[WODHistoryItem])
async def wod_performance(
    wod_id: int,
    limit: int = Query(PERFORMANCE_HISTORY_LIMIT, ge=1, le=PERFORMANCE_HISTORY_LIMIT),
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Every time the caller performed this WOD, newest first."""
    await catalog.get_wod(repos, wod_id)
    return await personal_records.wod_history(repos.performances, user_id, wod_id, limit)
