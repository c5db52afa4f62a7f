"""WOD model - a named benchmark workout with a declared score type."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodlog.db.base import Base, TimestampMixin


class WOD(Base, TimestampMixin):
    """Workout of the Day (e.g. Fran, Murph).

    score_type is stored as plain text: rows predating the closed vocabulary may
    carry free-form values, which the score validator passes through.
    """

    __tablename__ = "wods"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    regime: Mapped[str | None] = mapped_column(String(50), nullable=True)
    score_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_standard: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    performances: Mapped[list["WODPerformance"]] = relationship(
        "WODPerformance", back_populates="wod", passive_deletes="all"
    )
    template_entries: Mapped[list["TemplateWOD"]] = relationship(
        "TemplateWOD", back_populates="wod", cascade="all, delete-orphan"
    )
