"""Personal record and performance history schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class MovementPRRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    movement_id: int
    movement_name: str
    movement_type: str
    workout_date: date
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    calculated_1rm: float
    formula: str
    notes: str | None = None


class WODPRRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    wod_id: int
    wod_name: str
    score_type: str | None = None
    workout_date: date
    time_seconds: int | None = None
    rounds: int | None = None
    reps: int | None = None
    weight: float | None = None
    notes: str | None = None


class PersonalRecordsRead(BaseModel):
    movements: list[MovementPRRead] = []
    wods: list[WODPRRead] = []


class MovementPRSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    movement_id: int
    movement_name: str
    pr_count: int
    best_weight: float | None = None
    best_reps: int | None = None
    best_1rm: float
    formula: str
    last_pr_date: date
    improvement_percent: float | None = None  # latest PR weight over the one before it


class PRToggleRead(BaseModel):
    id: int
    is_pr: bool


class RetroactivePRRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    movement_pr_count: int
    wod_pr_count: int


class MovementHistoryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    workout_date: date
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    time_seconds: int | None = None
    distance: float | None = None
    is_pr: bool
    calculated_1rm: float
    formula: str
    notes: str | None = None


class WODHistoryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    logged_workout_id: int
    workout_date: date
    time_seconds: int | None = None
    rounds: int | None = None
    reps: int | None = None
    weight: float | None = None
    is_pr: bool
    notes: str | None = None
