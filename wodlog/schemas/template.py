"""Workout template schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from wodlog.schemas.movement import MovementRef
from wodlog.schemas.wod import WODRef


class TemplateMovementBase(BaseModel):
    movement_id: int
    weight: float | None = Field(None, ge=0)
    sets: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    time_seconds: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)
    order_index: int = 0


class TemplateMovementCreate(TemplateMovementBase):
    pass


class TemplateMovementRead(TemplateMovementBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    movement: MovementRef | None = None


class TemplateWODBase(BaseModel):
    wod_id: int
    order_index: int = 0


class TemplateWODCreate(TemplateWODBase):
    pass


class TemplateWODRead(TemplateWODBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    wod: WODRef | None = None


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    notes: str | None = None


class WorkoutTemplateCreate(WorkoutTemplateBase):
    movements: list[TemplateMovementCreate] = []
    wods: list[TemplateWODCreate] = []


class WorkoutTemplateUpdate(BaseModel):
    """Children are replaced wholesale when given; omitted lists are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    notes: str | None = None
    movements: list[TemplateMovementCreate] | None = None
    wods: list[TemplateWODCreate] | None = None


class WorkoutTemplateRead(WorkoutTemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_by: int | None = None
    is_standard: bool
    created_at: datetime
    movements: list[TemplateMovementRead] = []
    wods: list[TemplateWODRead] = []


class TemplateUsageStats(BaseModel):
    template_id: int
    times_logged: int
    last_logged: date | None = None
