"""Movement model - a named exercise, standard (seeded) or user-created."""

from __future__ import annotations

from sqlalchemy import Boolean, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodlog.core.enums import MovementType
from wodlog.db.base import Base, TimestampMixin


class Movement(Base, TimestampMixin):
    """A movement (lift, gymnastics skill, cardio). Standard rows have created_by = NULL and are read-only."""

    __tablename__ = "movements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    type: Mapped[MovementType] = mapped_column(
        Enum(MovementType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_standard: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    performances: Mapped[list["MovementPerformance"]] = relationship(
        "MovementPerformance", back_populates="movement", passive_deletes="all"
    )
    template_entries: Mapped[list["TemplateMovement"]] = relationship(
        "TemplateMovement", back_populates="movement", cascade="all, delete-orphan"
    )
