"""Movement catalog endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from wodlog.api.deps import clamp_page_size, get_current_user_id, get_repositories
from wodlog.core.constants import SEARCH_DEFAULT_LIMIT
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.schemas.movement import MovementCreate, MovementRead, MovementUpdate
from wodlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[MovementRead])
async def list_movements(
    repos: Repositories = Depends(get_repositories),
    standard_only: bool = False,
    owner_id: int | None = None,
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """List movements (standard and custom), optionally filtered."""
    filters = CatalogFilter(
        standard_only=standard_only,
        owner_id=owner_id,
        search=search,
        limit=clamp_page_size(limit),
        offset=skip,
    )
    return await catalog.list_movements(repos, filters)


@router.get("/search", response_model=list[MovementRead])
async def search_movements(
    q: str = Query(..., min_length=1),
    limit: int = Query(SEARCH_DEFAULT_LIMIT, ge=1, le=50),
    repos: Repositories = Depends(get_repositories),
):
    """Case-insensitive name search (for autocomplete)."""
    return await catalog.list_movements(repos, CatalogFilter(search=q, limit=limit))


@router.post("", response_model=MovementRead, status_code=201)
async def create_movement(
    payload: MovementCreate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Create a custom movement owned by the caller."""
    return await catalog.create_movement(repos, user_id, payload)


@router.get("/{movement_id}", response_model=MovementRead)
async def get_movement(
    movement_id: int,
    repos: Repositories = Depends(get_repositories),
):
    return await catalog.get_movement(repos, movement_id)


@router.patch("/{movement_id}", response_model=MovementRead)
async def update_movement(
    movement_id: int,
    payload: MovementUpdate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Update one of the caller's custom movements. Standard movements are read-only."""
    return await catalog.update_movement(repos, user_id, movement_id, payload)


@router.delete("/{movement_id}", status_code=204)
async def delete_movement(
    movement_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Delete a custom movement (and every performance recorded against it)."""
    await catalog.delete_movement(repos, user_id, movement_id)
    return Response(status_code=204)
