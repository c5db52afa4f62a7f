"""Data access layer.

Every read and write of persisted rows goes through these repositories. They share
the request-scoped AsyncSession, so all writes made while handling one request
commit (or roll back) together in ``get_db``. A failed flush rolls the session back
before raising PersistenceError (or Conflict for unique-constraint violations).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wodlog.core.exceptions import Conflict, NotFound, PersistenceError
from wodlog.models.movement import Movement
from wodlog.models.template import TemplateMovement, TemplateWOD, WorkoutTemplate
from wodlog.models.wod import WOD
from wodlog.models.workout import LoggedWorkout, MovementPerformance, WODPerformance

logger = logging.getLogger(__name__)


# ---- Filters (closed sets of named options) ----


@dataclass(frozen=True)
class LoggedWorkoutFilter:
    """Filter for listing a user's logged workouts. None means "no constraint"."""

    start_date: date | None = None  # inclusive
    end_date: date | None = None  # inclusive
    template_id: int | None = None
    workout_type: str | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class CatalogFilter:
    """Filter for listing movements / WODs / templates."""

    standard_only: bool = False
    owner_id: int | None = None  # only rows created by this user
    visible_to: int | None = None  # standard rows plus rows created by this user
    search: str | None = None  # case-insensitive name substring
    limit: int = 100
    offset: int = 0


@dataclass(frozen=True)
class WODPerformanceWithContext:
    """A WOD performance joined to its WOD and owning logged workout (for audits)."""

    performance: WODPerformance
    wod_name: str
    score_type: str | None
    user_id: int
    workout_date: date


class _Repository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _flush(self, conflict_message: str | None = None) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            if conflict_message:
                raise Conflict(conflict_message) from e
            raise PersistenceError(f"Integrity error: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Flush failed")
            raise PersistenceError("Database write failed") from e

    async def _execute(self, stmt):
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Query failed")
            raise PersistenceError("Database query failed") from e


def _apply_catalog_filter(stmt: Select, model, filters: CatalogFilter) -> Select:
    if filters.standard_only:
        stmt = stmt.where(model.created_by.is_(None))
    if filters.owner_id is not None:
        stmt = stmt.where(model.created_by == filters.owner_id)
    if filters.visible_to is not None:
        stmt = stmt.where(or_(model.created_by.is_(None), model.created_by == filters.visible_to))
    if filters.search:
        stmt = stmt.where(func.lower(model.name).contains(filters.search.strip().lower()))
    return stmt.order_by(model.name).offset(filters.offset).limit(filters.limit)


# ---- Catalog ----


class MovementRepository(_Repository):
    """Movements (standard and custom)."""

    async def get(self, movement_id: int) -> Movement | None:
        return await self.db.get(Movement, movement_id)

    async def get_by_name(self, name: str) -> Movement | None:
        result = await self._execute(select(Movement).where(func.lower(Movement.name) == name.strip().lower()))
        return result.scalar_one_or_none()

    async def list(self, filters: CatalogFilter) -> list[Movement]:
        result = await self._execute(_apply_catalog_filter(select(Movement), Movement, filters))
        return list(result.scalars().all())

    async def existing_ids(self, ids: Iterable[int]) -> set[int]:
        ids = set(ids)
        if not ids:
            return set()
        result = await self._execute(select(Movement.id).where(Movement.id.in_(ids)))
        return set(result.scalars().all())

    async def has_performances(self, movement_id: int) -> bool:
        """True when any logged workout (any user) references this movement."""
        result = await self._execute(
            select(MovementPerformance.id).where(MovementPerformance.movement_id == movement_id).limit(1)
        )
        return result.first() is not None

    async def add(self, movement: Movement) -> Movement:
        self.db.add(movement)
        await self._flush(conflict_message=f"Movement '{movement.name}' already exists")
        await self.db.refresh(movement)
        return movement

    async def save(self, movement: Movement) -> Movement:
        await self._flush(conflict_message=f"Movement '{movement.name}' already exists")
        await self.db.refresh(movement)
        return movement

    async def delete(self, movement: Movement) -> None:
        await self.db.delete(movement)
        await self._flush(conflict_message=f"Movement {movement.id} is used by logged workouts")


class WODRepository(_Repository):
    """WOD definitions."""

    async def get(self, wod_id: int) -> WOD | None:
        return await self.db.get(WOD, wod_id)

    async def get_by_name(self, name: str) -> WOD | None:
        result = await self._execute(select(WOD).where(func.lower(WOD.name) == name.strip().lower()))
        return result.scalar_one_or_none()

    async def get_many(self, ids: Iterable[int]) -> dict[int, WOD]:
        ids = set(ids)
        if not ids:
            return {}
        result = await self._execute(select(WOD).where(WOD.id.in_(ids)))
        return {w.id: w for w in result.scalars().all()}

    async def list(self, filters: CatalogFilter) -> list[WOD]:
        result = await self._execute(_apply_catalog_filter(select(WOD), WOD, filters))
        return list(result.scalars().all())

    async def has_performances(self, wod_id: int) -> bool:
        """True when any logged workout (any user) references this WOD."""
        result = await self._execute(select(WODPerformance.id).where(WODPerformance.wod_id == wod_id).limit(1))
        return result.first() is not None

    async def add(self, wod: WOD) -> WOD:
        self.db.add(wod)
        await self._flush(conflict_message=f"WOD '{wod.name}' already exists")
        await self.db.refresh(wod)
        return wod

    async def save(self, wod: WOD) -> WOD:
        await self._flush(conflict_message=f"WOD '{wod.name}' already exists")
        await self.db.refresh(wod)
        return wod

    async def delete(self, wod: WOD) -> None:
        await self.db.delete(wod)
        await self._flush(conflict_message=f"WOD {wod.id} is used by logged workouts")


class TemplateRepository(_Repository):
    """Workout templates with their ordered movements and WODs."""

    @staticmethod
    def _detail_query():
        return select(WorkoutTemplate).execution_options(populate_existing=True).options(
            selectinload(WorkoutTemplate.movements).selectinload(TemplateMovement.movement),
            selectinload(WorkoutTemplate.wods).selectinload(TemplateWOD.wod),
        )

    async def get(self, template_id: int) -> WorkoutTemplate | None:
        return await self.db.get(WorkoutTemplate, template_id)

    async def get_with_details(self, template_id: int) -> WorkoutTemplate | None:
        result = await self._execute(self._detail_query().where(WorkoutTemplate.id == template_id))
        return result.scalar_one_or_none()

    async def get_standard_by_name(self, name: str) -> WorkoutTemplate | None:
        result = await self._execute(
            select(WorkoutTemplate).where(
                WorkoutTemplate.created_by.is_(None), WorkoutTemplate.name == name
            )
        )
        return result.scalars().first()

    async def list(self, filters: CatalogFilter) -> list[WorkoutTemplate]:
        result = await self._execute(
            _apply_catalog_filter(self._detail_query(), WorkoutTemplate, filters)
        )
        return list(result.scalars().all())

    async def add(
        self,
        template: WorkoutTemplate,
        movements: Sequence[TemplateMovement],
        wods: Sequence[TemplateWOD],
    ) -> WorkoutTemplate:
        self.db.add(template)
        await self._flush()
        for entry in (*movements, *wods):
            entry.template_id = template.id
        self.db.add_all([*movements, *wods])
        await self._flush()
        return await self.get_with_details(template.id)

    async def replace_children(
        self,
        template: WorkoutTemplate,
        movements: Sequence[TemplateMovement],
        wods: Sequence[TemplateWOD],
    ) -> WorkoutTemplate:
        """Delete the template's movements/WODs and insert replacements (same transaction)."""
        await self._execute(delete(TemplateMovement).where(TemplateMovement.template_id == template.id))
        await self._execute(delete(TemplateWOD).where(TemplateWOD.template_id == template.id))
        for entry in (*movements, *wods):
            entry.template_id = template.id
        self.db.add_all([*movements, *wods])
        await self._flush()
        self.db.expire(template)
        return await self.get_with_details(template.id)

    async def save(self, template: WorkoutTemplate) -> None:
        await self._flush()

    async def delete(self, template: WorkoutTemplate) -> None:
        await self.db.delete(template)
        await self._flush()

    async def usage_stats(self, template_id: int, user_id: int | None = None) -> tuple[int, date | None]:
        """(times logged, last logged date), optionally scoped to one user."""
        stmt = select(func.count(LoggedWorkout.id), func.max(LoggedWorkout.workout_date)).where(
            LoggedWorkout.template_id == template_id
        )
        if user_id is not None:
            stmt = stmt.where(LoggedWorkout.user_id == user_id)
        row = (await self._execute(stmt)).one()
        last = row[1]
        if isinstance(last, str):
            last = date.fromisoformat(last)
        return int(row[0] or 0), last


# ---- Logged workouts and performance rows ----


class PerformanceRepository(_Repository):
    """Logged workouts and their movement / WOD performance rows."""

    @staticmethod
    def _detail_query():
        return select(LoggedWorkout).execution_options(populate_existing=True).options(
            selectinload(LoggedWorkout.template),
            selectinload(LoggedWorkout.movements).selectinload(MovementPerformance.movement),
            selectinload(LoggedWorkout.wods).selectinload(WODPerformance.wod),
        )

    # Logged workouts

    async def get_logged_workout(self, logged_workout_id: int) -> LoggedWorkout | None:
        return await self.db.get(LoggedWorkout, logged_workout_id)

    async def get_logged_workout_with_details(self, logged_workout_id: int) -> LoggedWorkout | None:
        result = await self._execute(self._detail_query().where(LoggedWorkout.id == logged_workout_id))
        return result.scalar_one_or_none()

    async def find_logged_workout(
        self, user_id: int, template_id: int, workout_date: date
    ) -> LoggedWorkout | None:
        """The user's log of ``template_id`` on ``workout_date``, if any."""
        result = await self._execute(
            select(LoggedWorkout).where(
                LoggedWorkout.user_id == user_id,
                LoggedWorkout.template_id == template_id,
                LoggedWorkout.workout_date == workout_date,
            )
        )
        return result.scalars().first()

    async def list_logged_workouts(self, user_id: int, filters: LoggedWorkoutFilter) -> list[LoggedWorkout]:
        stmt = self._detail_query().where(LoggedWorkout.user_id == user_id)
        if filters.start_date is not None:
            stmt = stmt.where(LoggedWorkout.workout_date >= filters.start_date)
        if filters.end_date is not None:
            stmt = stmt.where(LoggedWorkout.workout_date <= filters.end_date)
        if filters.template_id is not None:
            stmt = stmt.where(LoggedWorkout.template_id == filters.template_id)
        if filters.workout_type is not None:
            stmt = stmt.where(LoggedWorkout.workout_type == filters.workout_type)
        stmt = (
            stmt.order_by(LoggedWorkout.workout_date.desc(), LoggedWorkout.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def list_user_ids(self) -> list[int]:
        """Every user with at least one logged workout."""
        result = await self._execute(select(LoggedWorkout.user_id).distinct().order_by(LoggedWorkout.user_id))
        return list(result.scalars().all())

    async def count_logged_workouts(self, user_id: int, start_date: date, end_date: date) -> int:
        result = await self._execute(
            select(func.count(LoggedWorkout.id)).where(
                LoggedWorkout.user_id == user_id,
                LoggedWorkout.workout_date >= start_date,
                LoggedWorkout.workout_date <= end_date,
            )
        )
        return int(result.scalar() or 0)

    async def create_performance_batch(
        self,
        workout: LoggedWorkout,
        movements: Sequence[MovementPerformance],
        wods: Sequence[WODPerformance],
    ) -> LoggedWorkout:
        """Insert a logged workout and all of its rows as one unit: all rows or none."""
        workout.movements = list(movements)
        workout.wods = list(wods)
        self.db.add(workout)
        await self._flush(conflict_message="Workout already logged for this template on this date")
        return await self.get_logged_workout_with_details(workout.id)

    async def save_logged_workout(self, workout: LoggedWorkout) -> LoggedWorkout:
        await self._flush()
        await self.db.refresh(workout)
        return workout

    async def delete_logged_workout(self, workout: LoggedWorkout) -> None:
        """Delete a logged workout; its performance rows go with it."""
        await self.db.delete(workout)
        await self._flush()

    async def replace_movements(self, workout: LoggedWorkout, movements: Sequence[MovementPerformance]) -> None:
        """Drop the workout's movement rows (flushed, so history no longer sees them)."""
        await self._execute(
            delete(MovementPerformance).where(MovementPerformance.logged_workout_id == workout.id)
        )
        await self._flush()
        for m in movements:
            m.logged_workout_id = workout.id
        self.db.add_all(movements)
        await self._flush()
        self.db.expire(workout)

    async def replace_wods(self, workout: LoggedWorkout, wods: Sequence[WODPerformance]) -> None:
        await self._execute(delete(WODPerformance).where(WODPerformance.logged_workout_id == workout.id))
        for w in wods:
            w.logged_workout_id = workout.id
        self.db.add_all(wods)
        await self._flush()
        self.db.expire(workout)

    # Movement performances / PR history

    async def get_movement_performance(self, row_id: int) -> MovementPerformance | None:
        result = await self._execute(
            select(MovementPerformance)
            .where(MovementPerformance.id == row_id)
            .options(
                selectinload(MovementPerformance.logged_workout),
                selectinload(MovementPerformance.movement),
            )
        )
        return result.scalar_one_or_none()

    async def get_max_weight_for_movement(
        self,
        user_id: int,
        movement_id: int,
        exclude_ids: Iterable[int] = (),
        exclude_logged_workout_id: int | None = None,
    ) -> float | None:
        """Heaviest recorded weight for (user, movement), or None when there is no weighted history."""
        stmt = (
            select(func.max(MovementPerformance.weight))
            .join(LoggedWorkout, LoggedWorkout.id == MovementPerformance.logged_workout_id)
            .where(
                LoggedWorkout.user_id == user_id,
                MovementPerformance.movement_id == movement_id,
                MovementPerformance.weight.isnot(None),
            )
        )
        exclude = [i for i in exclude_ids if i is not None]
        if exclude:
            stmt = stmt.where(MovementPerformance.id.notin_(exclude))
        if exclude_logged_workout_id is not None:
            stmt = stmt.where(MovementPerformance.logged_workout_id != exclude_logged_workout_id)
        result = await self._execute(stmt)
        value = result.scalar()
        return float(value) if value is not None else None

    async def list_performance_history(
        self, user_id: int, movement_id: int | None = None
    ) -> list[tuple[MovementPerformance, date]]:
        """Weighted movement rows for a user, oldest first: (row, workout_date).

        Order: workout date, then logged workout id, then position in the workout.
        """
        stmt = (
            select(MovementPerformance, LoggedWorkout.workout_date)
            .join(LoggedWorkout, LoggedWorkout.id == MovementPerformance.logged_workout_id)
            .where(LoggedWorkout.user_id == user_id, MovementPerformance.weight.isnot(None))
            .order_by(
                LoggedWorkout.workout_date,
                LoggedWorkout.id,
                MovementPerformance.order_index,
                MovementPerformance.id,
            )
        )
        if movement_id is not None:
            stmt = stmt.where(MovementPerformance.movement_id == movement_id)
        result = await self._execute(stmt)
        return [(row, d) for row, d in result.all()]

    async def update_movement_performance(self, row: MovementPerformance, changes: dict) -> MovementPerformance:
        for k, v in changes.items():
            setattr(row, k, v)
        await self._flush()
        return row

    async def set_movement_pr_flag(self, row_id: int, is_pr: bool) -> None:
        row = await self.db.get(MovementPerformance, row_id)
        if row is None:
            raise NotFound(f"Movement performance {row_id} not found")
        row.is_pr = is_pr
        await self._flush()

    async def list_pr_movements(self, user_id: int, limit: int | None = None) -> list[MovementPerformance]:
        """PR-flagged movement rows, newest workout first (movement and workout loaded)."""
        stmt = (
            select(MovementPerformance)
            .join(LoggedWorkout, LoggedWorkout.id == MovementPerformance.logged_workout_id)
            .where(LoggedWorkout.user_id == user_id, MovementPerformance.is_pr.is_(True))
            .options(
                selectinload(MovementPerformance.movement),
                selectinload(MovementPerformance.logged_workout),
            )
            .order_by(
                LoggedWorkout.workout_date.desc(),
                LoggedWorkout.id.desc(),
                MovementPerformance.order_index.desc(),
                MovementPerformance.id.desc(),
            )
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def movement_history(self, user_id: int, movement_id: int, limit: int) -> list[MovementPerformance]:
        """All rows for (user, movement), newest first."""
        result = await self._execute(
            select(MovementPerformance)
            .join(LoggedWorkout, LoggedWorkout.id == MovementPerformance.logged_workout_id)
            .where(LoggedWorkout.user_id == user_id, MovementPerformance.movement_id == movement_id)
            .options(selectinload(MovementPerformance.logged_workout))
            .order_by(LoggedWorkout.workout_date.desc(), MovementPerformance.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # WOD performances

    async def get_wod_performance(self, row_id: int) -> WODPerformance | None:
        result = await self._execute(
            select(WODPerformance)
            .where(WODPerformance.id == row_id)
            .options(selectinload(WODPerformance.logged_workout), selectinload(WODPerformance.wod))
        )
        return result.scalar_one_or_none()

    async def update_wod_performance(self, row: WODPerformance, changes: dict) -> WODPerformance:
        for k, v in changes.items():
            setattr(row, k, v)
        await self._flush()
        return row

    async def set_wod_pr_flag(self, row_id: int, is_pr: bool) -> None:
        row = await self.db.get(WODPerformance, row_id)
        if row is None:
            raise NotFound(f"WOD performance {row_id} not found")
        row.is_pr = is_pr
        await self._flush()

    async def delete_wod_performance(self, row_id: int) -> None:
        """Delete one WOD row inside a savepoint, so a failure leaves earlier deletes intact."""
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(delete(WODPerformance).where(WODPerformance.id == row_id))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete WOD performance {row_id}") from e
        if result.rowcount == 0:
            raise NotFound(f"WOD performance {row_id} not found")

    async def list_wod_performances_with_score_type(self) -> list[WODPerformanceWithContext]:
        """Every WOD performance (all users) joined to its WOD's declared score type, newest first."""
        result = await self._execute(
            select(WODPerformance, WOD.name, WOD.score_type, LoggedWorkout.user_id, LoggedWorkout.workout_date)
            .join(WOD, WOD.id == WODPerformance.wod_id)
            .join(LoggedWorkout, LoggedWorkout.id == WODPerformance.logged_workout_id)
            .order_by(LoggedWorkout.workout_date.desc(), WODPerformance.id)
        )
        return [
            WODPerformanceWithContext(
                performance=row,
                wod_name=name,
                score_type=score_type,
                user_id=user_id,
                workout_date=workout_date,
            )
            for row, name, score_type, user_id, workout_date in result.all()
        ]

    async def list_pr_wods(self, user_id: int, limit: int | None = None) -> list[WODPerformance]:
        stmt = (
            select(WODPerformance)
            .join(LoggedWorkout, LoggedWorkout.id == WODPerformance.logged_workout_id)
            .where(LoggedWorkout.user_id == user_id, WODPerformance.is_pr.is_(True))
            .options(selectinload(WODPerformance.wod), selectinload(WODPerformance.logged_workout))
            .order_by(LoggedWorkout.workout_date.desc(), WODPerformance.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def wod_history(self, user_id: int, wod_id: int, limit: int) -> list[WODPerformance]:
        result = await self._execute(
            select(WODPerformance)
            .join(LoggedWorkout, LoggedWorkout.id == WODPerformance.logged_workout_id)
            .where(LoggedWorkout.user_id == user_id, WODPerformance.wod_id == wod_id)
            .options(selectinload(WODPerformance.logged_workout))
            .order_by(LoggedWorkout.workout_date.desc(), WODPerformance.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


@dataclass(frozen=True)
class Repositories:
    """All repositories bound to one session (one request / one script run)."""

    movements: MovementRepository
    wods: WODRepository
    templates: TemplateRepository
    performances: PerformanceRepository

    @classmethod
    def for_session(cls, db: AsyncSession) -> "Repositories":
        return cls(
            movements=MovementRepository(db),
            wods=WODRepository(db),
            templates=TemplateRepository(db),
            performances=PerformanceRepository(db),
        )
