"""Movements and WODs: standard (seeded, read-only) plus user-created ones."""

import logging

from wodlog.core.exceptions import Conflict, NotFound, Unauthorized
from wodlog.db.repositories import CatalogFilter, Repositories
from wodlog.models.movement import Movement
from wodlog.models.wod import WOD
from wodlog.schemas.movement import MovementCreate, MovementUpdate
from wodlog.schemas.wod import WODCreate, WODUpdate

logger = logging.getLogger(__name__)


def _check_editable(record: Movement | WOD, user_id: int, kind: str) -> None:
    if record.is_standard or record.created_by is None:
        raise Unauthorized(f"Standard {kind}s cannot be modified")
    if record.created_by != user_id:
        raise Unauthorized(f"Cannot modify another user's {kind}")


# ---- Movements ----


async def create_movement(repos: Repositories, user_id: int, payload: MovementCreate) -> Movement:
    if await repos.movements.get_by_name(payload.name) is not None:
        raise Conflict(f"Movement '{payload.name}' already exists")
    movement = Movement(
        name=payload.name.strip(),
        description=payload.description,
        type=payload.type,
        is_standard=False,
        created_by=user_id,
    )
    movement = await repos.movements.add(movement)
    logger.info("User %s created movement %s (%s)", user_id, movement.id, movement.name)
    return movement


async def get_movement(repos: Repositories, movement_id: int) -> Movement:
    movement = await repos.movements.get(movement_id)
    if movement is None:
        raise NotFound(f"Movement {movement_id} not found")
    return movement


async def list_movements(repos: Repositories, filters: CatalogFilter) -> list[Movement]:
    return await repos.movements.list(filters)


async def update_movement(
    repos: Repositories, user_id: int, movement_id: int, payload: MovementUpdate
) -> Movement:
    movement = await get_movement(repos, movement_id)
    _check_editable(movement, user_id, "movement")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        other = await repos.movements.get_by_name(changes["name"])
        if other is not None and other.id != movement.id:
            raise Conflict(f"Movement '{changes['name']}' already exists")
    for k, v in changes.items():
        setattr(movement, k, v)
    return await repos.movements.save(movement)


async def delete_movement(repos: Repositories, user_id: int, movement_id: int) -> None:
    movement = await get_movement(repos, movement_id)
    _check_editable(movement, user_id, "movement")
    if await repos.movements.has_performances(movement_id):
        raise Conflict(f"Movement {movement_id} is used by logged workouts and cannot be deleted")
    await repos.movements.delete(movement)
    logger.info("User %s deleted movement %s", user_id, movement_id)


# ---- WODs ----


async def create_wod(repos: Repositories, user_id: int, payload: WODCreate) -> WOD:
    if await repos.wods.get_by_name(payload.name) is not None:
        raise Conflict(f"WOD '{payload.name}' already exists")
    wod = WOD(
        name=payload.name.strip(),
        source=payload.source.value,
        type=payload.type.value,
        regime=payload.regime.value if payload.regime else None,
        score_type=payload.score_type.value,
        description=payload.description,
        url=payload.url,
        notes=payload.notes,
        is_standard=False,
        created_by=user_id,
    )
    wod = await repos.wods.add(wod)
    logger.info("User %s created WOD %s (%s)", user_id, wod.id, wod.name)
    return wod


async def get_wod(repos: Repositories, wod_id: int) -> WOD:
    wod = await repos.wods.get(wod_id)
    if wod is None:
        raise NotFound(f"WOD {wod_id} not found")
    return wod


async def list_wods(repos: Repositories, filters: CatalogFilter) -> list[WOD]:
    return await repos.wods.list(filters)


async def update_wod(repos: Repositories, user_id: int, wod_id: int, payload: WODUpdate) -> WOD:
    """Edit a custom WOD. Changing score_type does not touch already logged scores."""
    wod = await get_wod(repos, wod_id)
    _check_editable(wod, user_id, "WOD")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if "name" in changes:
        other = await repos.wods.get_by_name(changes["name"])
        if other is not None and other.id != wod.id:
            raise Conflict(f"WOD '{changes['name']}' already exists")
    for k, v in changes.items():
        setattr(wod, k, v)
    return await repos.wods.save(wod)


async def delete_wod(repos: Repositories, user_id: int, wod_id: int) -> None:
    wod = await get_wod(repos, wod_id)
    _check_editable(wod, user_id, "WOD")
    if await repos.wods.has_performances(wod_id):
        raise Conflict(f"WOD {wod_id} is used by logged workouts and cannot be deleted")
    await repos.wods.delete(wod)
    logger.info("User %s deleted WOD %s", user_id, wod_id)
