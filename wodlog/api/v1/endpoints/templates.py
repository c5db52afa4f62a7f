"""Workout templates - reusable workout definitions (standard and user-created)."""

from fastapi import APIRouter, Depends, Query, Response

from wodlog.api.deps import clamp_page_size, get_current_user_id, get_repositories
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.schemas.template import (
    TemplateUsageStats,
    WorkoutTemplateCreate,
    WorkoutTemplateRead,
    WorkoutTemplateUpdate,
)
from wodlog.services import templates as template_service

router = APIRouter()


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
    standard_only: bool = False,
    mine_only: bool = False,
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """Standard templates plus the caller's own (narrow with standard_only / mine_only)."""
    filters = CatalogFilter(
        standard_only=standard_only,
        owner_id=user_id if mine_only else None,
        search=search,
        limit=clamp_page_size(limit),
        offset=skip,
    )
    return await template_service.list_templates(repos, user_id, filters)


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Create a template with ordered movements and WODs."""
    return await template_service.create_template(repos, user_id, payload)


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    return await template_service.get_template(repos, user_id, template_id)


@router.patch("/{template_id}", response_model=WorkoutTemplateRead)
async def update_template(
    template_id: int,
    payload: WorkoutTemplateUpdate,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """Rename / re-note a template; movements or wods, when given, replace the existing list."""
    return await template_service.update_template(repos, user_id, template_id, payload)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    await template_service.delete_template(repos, user_id, template_id)
    return Response(status_code=204)


@router.get("/{template_id}/stats", response_model=TemplateUsageStats)
async def template_stats(
    template_id: int,
    user_id: int = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repositories),
):
    """How often the caller has logged this template, and when last."""
    times_logged, last_logged = await template_service.template_usage(repos, user_id, template_id)
    return TemplateUsageStats(template_id=template_id, times_logged=times_logged, last_logged=last_logged)
