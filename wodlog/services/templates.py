"""Workout templates: reusable prescriptions of movements and WODs."""

import logging
from collections.abc import Sequence
from datetime import date

from wodlog.core.exceptions import NotFound, Unauthorized
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.models.template import TemplateMovement, TemplateWOD, WorkoutTemplate
from wodlog.schemas.template import (
    TemplateMovementCreate,
    TemplateWODCreate,
    WorkoutTemplateCreate,
    WorkoutTemplateUpdate,
)

logger = logging.getLogger(__name__)


async def _build_children(
    repos: Repositories,
    movements: Sequence[TemplateMovementCreate],
    wods: Sequence[TemplateWODCreate],
) -> tuple[list[TemplateMovement], list[TemplateWOD]]:
    """Check every referenced movement/WOD exists, then build unsaved child rows."""
    wanted = {m.movement_id for m in movements}
    missing = wanted - await repos.movements.existing_ids(wanted)
    if missing:
        raise NotFound(f"Movement(s) not found: {', '.join(str(i) for i in sorted(missing))}")
    found = await repos.wods.get_many(w.wod_id for w in wods)
    for w in wods:
        if w.wod_id not in found:
            raise NotFound(f"WOD {w.wod_id} not found")
    return (
        [TemplateMovement(**m.model_dump()) for m in movements],
        [TemplateWOD(**w.model_dump()) for w in wods],
    )


async def _get_editable(repos: Repositories, user_id: int, template_id: int) -> WorkoutTemplate:
    template = await repos.templates.get(template_id)
    if template is None:
        raise NotFound(f"Template {template_id} not found")
    if template.is_standard:
        raise Unauthorized("Standard templates cannot be modified")
    if template.created_by != user_id:
        raise Unauthorized("Cannot modify another user's template")
    return template


async def create_template(repos: Repositories, user_id: int, payload: WorkoutTemplateCreate) -> WorkoutTemplate:
    movements, wods = await _build_children(repos, payload.movements, payload.wods)
    template = WorkoutTemplate(name=payload.name, notes=payload.notes, created_by=user_id)
    template = await repos.templates.add(template, movements, wods)
    logger.info("User %s created template %s (%s)", user_id, template.id, template.name)
    return template


async def get_template(repos: Repositories, user_id: int, template_id: int) -> WorkoutTemplate:
    """A standard template or one of the user's own."""
    template = await repos.templates.get_with_details(template_id)
    if template is None:
        raise NotFound(f"Template {template_id} not found")
    if not template.is_standard and template.created_by != user_id:
        raise Unauthorized("Cannot access another user's template")
    return template


async def list_templates(repos: Repositories, user_id: int, filters: CatalogFilter) -> list[WorkoutTemplate]:
    """Standard templates plus the user's own (or only one group, per ``filters``)."""
    if not filters.standard_only and filters.owner_id is None:
        filters = CatalogFilter(
            visible_to=user_id, search=filters.search, limit=filters.limit, offset=filters.offset
        )
    elif filters.owner_id is not None and filters.owner_id != user_id:
        raise Unauthorized("Cannot list another user's templates")
    return await repos.templates.list(filters)


async def update_template(
    repos: Repositories, user_id: int, template_id: int, payload: WorkoutTemplateUpdate
) -> WorkoutTemplate:
    """Edit name/notes; replace movements and/or WODs wholesale when given."""
    template = await _get_editable(repos, user_id, template_id)
    if payload.name is not None:
        template.name = payload.name
    if "notes" in payload.model_fields_set:
        template.notes = payload.notes
    await repos.templates.save(template)

    if payload.movements is None and payload.wods is None:
        return await repos.templates.get_with_details(template_id)

    current = await repos.templates.get_with_details(template_id)
    movement_items = payload.movements
    if movement_items is None:
        movement_items = [TemplateMovementCreate.model_validate(m, from_attributes=True) for m in current.movements]
    wod_items = payload.wods
    if wod_items is None:
        wod_items = [TemplateWODCreate.model_validate(w, from_attributes=True) for w in current.wods]
    movements, wods = await _build_children(repos, movement_items, wod_items)
    return await repos.templates.replace_children(current, movements, wods)


async def delete_template(repos: Repositories, user_id: int, template_id: int) -> None:
    """Delete a template. Logged workouts keep their history (template_id is cleared)."""
    template = await _get_editable(repos, user_id, template_id)
    await repos.templates.delete(template)
    logger.info("User %s deleted template %s", user_id, template_id)


async def template_usage(
    repos: Repositories, user_id: int, template_id: int
) -> tuple[int, date | None]:
    """(times logged, last logged date) for the user's logs of this template."""
    await get_template(repos, user_id, template_id)
    return await repos.templates.usage_stats(template_id, user_id=user_id)
