"""WOD catalog endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from wodlog.api.deps import clamp_page_size, get_current_user_id, get_repositories
from wodlog.core.constants import SEARCH_DEFAULT_LIMIT
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.schemas.wod import WODCreate, WODRead, WODUpdate
from wodlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[WODRead])
async def list_wods(
    repos: Repositories = Depends(get_repositories),
    standard_only: bool = False,
    owner_id: int | None = None,
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """List WODs, optionally filtered to standard ones, one owner, or a name search."""
    filters = CatalogFilter(
        standard_only=standard_only,
        owner_id=owner_id,
        search=search,
        limit=clamp_page_size(limit),
        offset=skip,
    )
    return await catalog.list_wods(repos, filters)


@router.get("/search", response_model=list[WODRead])
async def search_wods(
    q: str = Query(..., min_length=1),
    limit: int = Query(SEARCH_DEFAULT_LIMIT, ge=1, le=50),
    repos: Repositories = Depends(get_repositories),
):
    return await catalog.list_wods(repos, CatalogFilter(search=q, limit=limit))


@router.post("", response_model=WODRead, status_code=201)
async def create_wod(
    payload: WODCreate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Create a custom WOD. score_type must be one of the three known score types."""
    return await catalog.create_wod(repos, user_id, payload)


@router.get("/{wod_id}", response_model=WODRead)
async def get_wod(
    wod_id: int,
    repos: Repositories = Depends(get_repositories),
):
    return await catalog.get_wod(repos, wod_id)


@router.patch("/{wod_id}", response_model=WODRead)
async def update_wod(
    wod_id: int,
    payload: WODUpdate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    return await catalog.update_wod(repos, user_id, wod_id, payload)


@router.delete("/{wod_id}", status_code=204)
async def delete_wod(
    wod_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    await catalog.delete_wod(repos, user_id, wod_id)
    return Response(status_code=204)
