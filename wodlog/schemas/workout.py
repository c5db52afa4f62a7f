"""Logged workout and performance row schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wodlog.core.enums import WorkoutType
from wodlog.schemas.movement import MovementRef
from wodlog.schemas.wod import WODRef


class TemplateRef(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MovementPerformanceBase(BaseModel):
    movement_id: int
    sets: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    time_seconds: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)
    order_index: int = 0


class MovementPerformanceCreate(MovementPerformanceBase):
    pass


class MovementPerformanceUpdate(BaseModel):
    sets: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    time_seconds: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)


class MovementPerformanceRead(MovementPerformanceBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    is_pr: bool = False
    movement: MovementRef | None = None


class WODScore(BaseModel):
    """One score group; which one must be set depends on the WOD's score type."""

    time_seconds: int | None = Field(None, ge=0)
    rounds: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)


class WODPerformanceCreate(WODScore):
    wod_id: int
    order_index: int = 0


class WODPerformanceRead(WODScore):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    wod_id: int
    order_index: int = 0
    is_pr: bool = False
    wod: WODRef | None = None


class LoggedWorkoutBase(BaseModel):
    workout_date: date
    workout_type: WorkoutType | None = None
    total_time: int | None = Field(None, ge=0)
    notes: str | None = None


class LoggedWorkoutCreate(LoggedWorkoutBase):
    """Log a template (template_id) or an ad-hoc session (workout_name)."""

    template_id: int | None = None
    workout_name: str | None = Field(None, min_length=1, max_length=255)
    movements: list[MovementPerformanceCreate] = []
    wods: list[WODPerformanceCreate] = []

    @model_validator(mode="after")
    def template_or_name(self):
        if self.template_id is None and not self.workout_name:
            raise ValueError("Either template_id or workout_name is required")
        if self.template_id is not None and self.workout_name is not None:
            raise ValueError("workout_name is only for workouts without a template")
        return self


class LoggedWorkoutUpdate(BaseModel):
    workout_name: str | None = Field(None, min_length=1, max_length=255)
    workout_type: WorkoutType | None = None
    total_time: int | None = Field(None, ge=0)
    notes: str | None = None


class LoggedWorkoutRead(LoggedWorkoutBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    template_id: int | None = None
    workout_name: str | None = None
    workout_type: str | None = None
    created_at: datetime
    template: TemplateRef | None = None
    movements: list[MovementPerformanceRead] = []
    wods: list[WODPerformanceRead] = []


class MonthlyWorkoutCount(BaseModel):
    year: int
    month: int
    count: int
