"""LoggedWorkout and its performance rows (MovementPerformance, WODPerformance)."""

from __future__ import annotations

from datetime import date

from sqlalchemy import (
    Boolean,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodlog.db.base import Base, TimestampMixin


class LoggedWorkout(Base, TimestampMixin):
    """One dated instance of a user performing a template (or an ad-hoc session)."""

    __tablename__ = "logged_workouts"
    __table_args__ = (
        UniqueConstraint("user_id", "template_id", "workout_date", name="uq_logged_workouts_user_template_date"),
        Index("ix_logged_workouts_user_date", "user_id", "workout_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    template_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True
    )
    workout_name: Mapped[str | None] = mapped_column(String(255), nullable=True)  # ad-hoc sessions only
    workout_date: Mapped[date] = mapped_column(Date, nullable=False)
    workout_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    total_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    template: Mapped["WorkoutTemplate | None"] = relationship("WorkoutTemplate")
    movements: Mapped[list["MovementPerformance"]] = relationship(
        "MovementPerformance",
        back_populates="logged_workout",
        cascade="all, delete-orphan",
        order_by="MovementPerformance.order_index",
    )
    wods: Mapped[list["WODPerformance"]] = relationship(
        "WODPerformance",
        back_populates="logged_workout",
        cascade="all, delete-orphan",
        order_by="WODPerformance.order_index",
    )


class MovementPerformance(Base, TimestampMixin):
    """One recorded attempt at a movement. Weight is the PR dimension."""

    __tablename__ = "movement_performances"
    __table_args__ = (
        Index("ix_movement_performances_logged_workout_id", "logged_workout_id"),
        Index("ix_movement_performances_movement_id", "movement_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    logged_workout_id: Mapped[int] = mapped_column(
        ForeignKey("logged_workouts.id", ondelete="CASCADE"), nullable=False
    )
    movement_id: Mapped[int] = mapped_column(ForeignKey("movements.id", ondelete="RESTRICT"), nullable=False)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    logged_workout: Mapped["LoggedWorkout"] = relationship("LoggedWorkout", back_populates="movements")
    movement: Mapped["Movement"] = relationship("Movement", back_populates="performances")


class WODPerformance(Base, TimestampMixin):
    """One recorded attempt at a WOD: exactly one score group matching the WOD's score type."""

    __tablename__ = "wod_performances"
    __table_args__ = (
        Index("ix_wod_performances_logged_workout_id", "logged_workout_id"),
        Index("ix_wod_performances_wod_id", "wod_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    logged_workout_id: Mapped[int] = mapped_column(
        ForeignKey("logged_workouts.id", ondelete="CASCADE"), nullable=False
    )
    wod_id: Mapped[int] = mapped_column(ForeignKey("wods.id", ondelete="RESTRICT"), nullable=False)
    time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rounds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)  # remaining reps after full rounds
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)  # manual only
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    logged_workout: Mapped["LoggedWorkout"] = relationship("LoggedWorkout", back_populates="wods")
    wod: Mapped["WOD"] = relationship("WOD", back_populates="performances")
