"""Workout template - reusable definition of what to do (never what happened)."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodlog.db.base import Base, TimestampMixin


class WorkoutTemplate(Base, TimestampMixin):
    """Named plan with ordered movement prescriptions and WOD references."""

    __tablename__ = "workout_templates"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)  # NULL = standard

    movements: Mapped[list["TemplateMovement"]] = relationship(
        "TemplateMovement",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateMovement.order_index",
    )
    wods: Mapped[list["TemplateWOD"]] = relationship(
        "TemplateWOD",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateWOD.order_index",
    )

    @property
    def is_standard(self) -> bool:
        return self.created_by is None


class TemplateMovement(Base, TimestampMixin):
    """Prescribed movement in a template (target weight/sets/reps, not a result)."""

    __tablename__ = "template_movements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    template_id: Mapped[int] = mapped_column(
        ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    movement_id: Mapped[int] = mapped_column(
        ForeignKey("movements.id", ondelete="CASCADE"), nullable=False
    )
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    template: Mapped["WorkoutTemplate"] = relationship("WorkoutTemplate", back_populates="movements")
    movement: Mapped["Movement"] = relationship("Movement", back_populates="template_entries")


class TemplateWOD(Base, TimestampMixin):
    """WOD referenced by a template."""

    __tablename__ = "template_wods"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    template_id: Mapped[int] = mapped_column(
        ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    wod_id: Mapped[int] = mapped_column(ForeignKey("wods.id", ondelete="CASCADE"), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    template: Mapped["WorkoutTemplate"] = relationship("WorkoutTemplate", back_populates="wods")
    wod: Mapped["WOD"] = relationship("WOD", back_populates="template_entries")
