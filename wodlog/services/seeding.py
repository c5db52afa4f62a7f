"""Load the standard catalog (movements, WODs, templates). Safe to run repeatedly."""

import logging
from dataclasses import dataclass

from wodlog.core.seed_data import STANDARD_MOVEMENTS, STANDARD_TEMPLATES, STANDARD_WODS
from wodlog.db.repositories import Repositories
from wodlog.models.movement import Movement
from wodlog.models.template import TemplateMovement, TemplateWOD, WorkoutTemplate
from wodlog.models.wod import WOD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    movements_created: int
    wods_created: int
    templates_created: int


async def seed_standard_catalog(repos: Repositories) -> SeedResult:
    """Insert any standard movement, WOD or template that doesn't exist yet (matched by name)."""
    movements_by_name: dict[str, Movement] = {}
    movements_created = 0
    for name, description, movement_type in STANDARD_MOVEMENTS:
        movement = await repos.movements.get_by_name(name)
        if movement is None:
            movement = await repos.movements.add(
                Movement(name=name, description=description, type=movement_type, is_standard=True)
            )
            movements_created += 1
        movements_by_name[name] = movement

    wods_by_name: dict[str, WOD] = {}
    wods_created = 0
    for name, (source, wod_type, regime, score_type, description, url) in STANDARD_WODS.items():
        wod = await repos.wods.get_by_name(name)
        if wod is None:
            wod = await repos.wods.add(
                WOD(
                    name=name,
                    source=source.value,
                    type=wod_type.value,
                    regime=regime.value if regime else None,
                    score_type=score_type.value,
                    description=description,
                    url=url,
                    is_standard=True,
                )
            )
            wods_created += 1
        wods_by_name[name] = wod

    templates_created = 0
    for name, (notes, movement_specs, wod_names) in STANDARD_TEMPLATES.items():
        if await repos.templates.get_standard_by_name(name) is not None:
            continue
        movements = [
            TemplateMovement(
                movement_id=movements_by_name[movement_name].id,
                weight=weight,
                sets=sets,
                reps=reps,
                order_index=i,
            )
            for i, (movement_name, weight, sets, reps) in enumerate(movement_specs)
        ]
        wods = [
            TemplateWOD(wod_id=wods_by_name[wod_name].id, order_index=i)
            for i, wod_name in enumerate(wod_names)
        ]
        await repos.templates.add(WorkoutTemplate(name=name, notes=notes), movements, wods)
        templates_created += 1

    logger.info(
        "Seeded standard catalog: %d movements, %d WODs, %d templates created",
        movements_created,
        wods_created,
        templates_created,
    )
    return SeedResult(movements_created, wods_created, templates_created)
