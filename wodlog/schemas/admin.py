"""Admin schemas: WOD score-type audit and repair."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class WODMismatchRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    wod_id: int
    wod_name: str
    user_id: int
    workout_date: date
    expected_score_type: str
    issue: str
    time_seconds: int | None = None
    rounds: int | None = None
    reps: int | None = None
    weight: float | None = None
    violating_fields: list[str] = []


class WODMismatchReport(BaseModel):
    count: int
    mismatches: list[WODMismatchRead]


class RepairResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_found: int
    deleted_count: int
