"""Tests for movements/WODs, templates, seeding and PR reporting."""

from datetime import date

import pytest

from conftest import OTHER_USER_ID, USER_ID, store_workout
from wodlog.core.enums import MovementType, ScoreType, WODSource, WODType
from wodlog.core.exceptions import Conflict, NotFound, Unauthorized
from wodlog.core.seed_data import STANDARD_MOVEMENTS, STANDARD_TEMPLATES, STANDARD_WODS
from wodlog.db.repositories import CatalogFilter
from wodlog.models.workout import MovementPerformance
from wodlog.schemas.movement import MovementCreate, MovementUpdate
from wodlog.schemas.template import (
    TemplateMovementCreate,
    TemplateWODCreate,
    WorkoutTemplateCreate,
    WorkoutTemplateUpdate,
)
from wodlog.schemas.wod import WODCreate, WODUpdate
from wodlog.schemas.workout import LoggedWorkoutCreate, MovementPerformanceCreate, WODPerformanceCreate
from wodlog.services import catalog, personal_records, templates, workout_logging
from wodlog.services.seeding import seed_standard_catalog

pytestmark = pytest.mark.asyncio


class TestMovements:
    async def test_create_and_filter(self, repos, back_squat):
        custom = await catalog.create_movement(
            repos, USER_ID, MovementCreate(name="Sandbag Carry", type=MovementType.BODYWEIGHT)
        )
        assert custom.created_by == USER_ID
        assert custom.is_standard is False

        standard = await catalog.list_movements(repos, CatalogFilter(standard_only=True))
        assert [m.name for m in standard] == ["Back Squat"]
        mine = await catalog.list_movements(repos, CatalogFilter(owner_id=USER_ID))
        assert [m.name for m in mine] == ["Sandbag Carry"]
        found = await catalog.list_movements(repos, CatalogFilter(search="squat"))
        assert [m.name for m in found] == ["Back Squat"]

    async def test_duplicate_name_conflicts(self, repos, back_squat):
        with pytest.raises(Conflict):
            await catalog.create_movement(
                repos, USER_ID, MovementCreate(name="back squat", type=MovementType.WEIGHTLIFTING)
            )

    async def test_standard_movement_is_read_only(self, repos, back_squat):
        with pytest.raises(Unauthorized):
            await catalog.update_movement(repos, USER_ID, back_squat.id, MovementUpdate(name="Squat"))
        with pytest.raises(Unauthorized):
            await catalog.delete_movement(repos, USER_ID, back_squat.id)

    async def test_only_owner_edits(self, repos):
        custom = await catalog.create_movement(
            repos, USER_ID, MovementCreate(name="Sled Push", type=MovementType.CARDIO)
        )
        with pytest.raises(Unauthorized):
            await catalog.update_movement(repos, OTHER_USER_ID, custom.id, MovementUpdate(description="x"))
        updated = await catalog.update_movement(repos, USER_ID, custom.id, MovementUpdate(description="heavy"))
        assert updated.description == "heavy"
        await catalog.delete_movement(repos, USER_ID, custom.id)
        with pytest.raises(NotFound):
            await catalog.get_movement(repos, custom.id)

    async def test_delete_refused_while_logged_by_anyone(self, repos):
        zercher = await catalog.create_movement(
            repos, USER_ID, MovementCreate(name="Zercher Squat", type=MovementType.WEIGHTLIFTING)
        )
        logged = await workout_logging.log_workout(
            repos,
            OTHER_USER_ID,
            LoggedWorkoutCreate(
                workout_name="Odd lifts",
                workout_date=date(2026, 3, 1),
                movements=[MovementPerformanceCreate(movement_id=zercher.id, weight=200, reps=3)],
            ),
        )

        with pytest.raises(Conflict):
            await catalog.delete_movement(repos, USER_ID, zercher.id)

        kept = await workout_logging.get_logged_workout(repos, OTHER_USER_ID, logged.id)
        assert [(m.movement_id, m.weight) for m in kept.movements] == [(zercher.id, 200)]
        assert (await catalog.get_movement(repos, zercher.id)).name == "Zercher Squat"

    async def test_database_refuses_deleting_logged_movement(self, repos, back_squat):
        await store_workout(
            repos, USER_ID, date(2026, 3, 1), [MovementPerformance(movement_id=back_squat.id, weight=100)]
        )
        with pytest.raises(Conflict):
            await repos.movements.delete(back_squat)


class TestWODs:
    async def test_create_custom_wod(self, repos):
        wod = await catalog.create_wod(
            repos,
            USER_ID,
            WODCreate(
                name="Backyard Burner",
                source=WODSource.SELF_RECORDED,
                type=WODType.SELF_CREATED,
                score_type=ScoreType.ROUNDS_REPS,
            ),
        )
        assert (wod.score_type, wod.created_by) == ("Rounds+Reps", USER_ID)

        updated = await catalog.update_wod(repos, USER_ID, wod.id, WODUpdate(score_type=ScoreType.TIME))
        assert updated.score_type == "Time (HH:MM:SS)"

    async def test_standard_wod_is_read_only(self, repos, fran):
        with pytest.raises(Unauthorized):
            await catalog.update_wod(repos, USER_ID, fran.id, WODUpdate(notes="mine now"))

    async def test_delete_refused_while_logged(self, repos):
        wod = await catalog.create_wod(
            repos,
            USER_ID,
            WODCreate(
                name="Garage Grind",
                source=WODSource.SELF_RECORDED,
                type=WODType.SELF_CREATED,
                score_type=ScoreType.TIME,
            ),
        )
        logged = await workout_logging.log_workout(
            repos,
            OTHER_USER_ID,
            LoggedWorkoutCreate(
                workout_name="Borrowed WOD",
                workout_date=date(2026, 3, 2),
                wods=[WODPerformanceCreate(wod_id=wod.id, time_seconds=610)],
            ),
        )

        with pytest.raises(Conflict):
            await catalog.delete_wod(repos, USER_ID, wod.id)

        kept = await workout_logging.get_logged_workout(repos, OTHER_USER_ID, logged.id)
        assert [w.time_seconds for w in kept.wods] == [610]

    async def test_unused_custom_wod_can_be_deleted(self, repos):
        wod = await catalog.create_wod(
            repos,
            USER_ID,
            WODCreate(
                name="Scratch WOD",
                source=WODSource.SELF_RECORDED,
                type=WODType.SELF_CREATED,
                score_type=ScoreType.MAX_WEIGHT,
            ),
        )
        await catalog.delete_wod(repos, USER_ID, wod.id)
        with pytest.raises(NotFound):
            await catalog.get_wod(repos, wod.id)


class TestTemplates:
    async def test_create_get_and_usage(self, repos, back_squat, fran):
        payload = WorkoutTemplateCreate(
            name="Squat + Fran",
            movements=[TemplateMovementCreate(movement_id=back_squat.id, weight=185, sets=3, reps=5)],
            wods=[TemplateWODCreate(wod_id=fran.id)],
        )
        template = await templates.create_template(repos, USER_ID, payload)
        assert [m.movement.name for m in template.movements] == ["Back Squat"]
        assert [w.wod.name for w in template.wods] == ["Fran"]

        with pytest.raises(Unauthorized):
            await templates.get_template(repos, OTHER_USER_ID, template.id)

        assert await templates.template_usage(repos, USER_ID, template.id) == (0, None)
        for day in (3, 10):
            await workout_logging.log_workout(
                repos, USER_ID, LoggedWorkoutCreate(template_id=template.id, workout_date=date(2026, 3, day))
            )
        assert await templates.template_usage(repos, USER_ID, template.id) == (2, date(2026, 3, 10))

    async def test_unknown_references_rejected(self, repos):
        payload = WorkoutTemplateCreate(name="Broken", wods=[TemplateWODCreate(wod_id=77)])
        with pytest.raises(NotFound):
            await templates.create_template(repos, USER_ID, payload)

    async def test_update_replaces_children(self, repos, back_squat, deadlift):
        template = await templates.create_template(
            repos,
            USER_ID,
            WorkoutTemplateCreate(
                name="Pull", movements=[TemplateMovementCreate(movement_id=back_squat.id)]
            ),
        )
        updated = await templates.update_template(
            repos,
            USER_ID,
            template.id,
            WorkoutTemplateUpdate(
                name="Pull Day",
                movements=[TemplateMovementCreate(movement_id=deadlift.id, sets=5, reps=3)],
            ),
        )
        assert updated.name == "Pull Day"
        assert [m.movement_id for m in updated.movements] == [deadlift.id]

    async def test_list_shows_standard_and_own(self, repos):
        await seed_standard_catalog(repos)
        await templates.create_template(repos, USER_ID, WorkoutTemplateCreate(name="Mine"))
        await templates.create_template(repos, OTHER_USER_ID, WorkoutTemplateCreate(name="Theirs"))

        visible = await templates.list_templates(repos, USER_ID, CatalogFilter(limit=100))
        names = {t.name for t in visible}
        assert "Mine" in names
        assert "Theirs" not in names
        assert set(STANDARD_TEMPLATES) <= names

    async def test_standard_template_is_read_only(self, repos):
        await seed_standard_catalog(repos)
        standard = (await templates.list_templates(repos, USER_ID, CatalogFilter(standard_only=True)))[0]
        with pytest.raises(Unauthorized):
            await templates.delete_template(repos, USER_ID, standard.id)


class TestSeeding:
    async def test_seed_is_idempotent(self, repos):
        first = await seed_standard_catalog(repos)
        assert first.movements_created == len(STANDARD_MOVEMENTS)
        assert first.wods_created == len(STANDARD_WODS)
        assert first.templates_created == len(STANDARD_TEMPLATES)

        second = await seed_standard_catalog(repos)
        assert (second.movements_created, second.wods_created, second.templates_created) == (0, 0, 0)

        fran = await repos.wods.get_by_name("Fran")
        assert fran.is_standard is True
        assert fran.score_type == ScoreType.TIME.value


class TestPersonalRecords:
    async def _log(self, repos, movement_id, day, weight, reps):
        return await workout_logging.log_workout(
            repos,
            USER_ID,
            LoggedWorkoutCreate(
                workout_name="Lift",
                workout_date=date(2026, 4, day),
                movements=[MovementPerformanceCreate(movement_id=movement_id, weight=weight, reps=reps)],
            ),
        )

    async def test_pr_list_and_summary(self, repos, back_squat):
        await self._log(repos, back_squat.id, 1, 225, 5)
        await self._log(repos, back_squat.id, 8, 200, 5)  # not a PR
        await self._log(repos, back_squat.id, 15, 245, 1)

        records = await personal_records.list_personal_records(repos.performances, USER_ID, limit=50)
        assert [(r.weight, r.formula) for r in records.movements] == [(245, "Actual 1RM"), (225, "Epley (2-10 reps)")]
        assert records.movements[1].calculated_1rm == pytest.approx(262.5)
        assert records.wods == []

        [summary] = await personal_records.pr_movement_summaries(repos.performances, USER_ID, limit=20)
        assert summary.pr_count == 2
        assert (summary.best_weight, summary.best_reps) == (245, 1)
        assert summary.best_1rm == pytest.approx(262.5)
        assert summary.last_pr_date == date(2026, 4, 15)
        assert summary.improvement_percent == pytest.approx(8.89)  # 245 over 225

    async def test_single_pr_has_no_improvement(self, repos, back_squat):
        await self._log(repos, back_squat.id, 1, 135, 5)
        [summary] = await personal_records.pr_movement_summaries(repos.performances, USER_ID, limit=20)
        assert summary.pr_count == 1
        assert summary.improvement_percent is None

    async def test_movement_history_newest_first(self, repos, back_squat):
        await self._log(repos, back_squat.id, 1, 100, 5)
        await self._log(repos, back_squat.id, 2, 90, 5)
        history = await personal_records.movement_history(repos.performances, USER_ID, back_squat.id, limit=10)
        assert [(h.weight, h.is_pr) for h in history] == [(90, False), (100, True)]
