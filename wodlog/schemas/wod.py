"""WOD schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wodlog.core.enums import ScoreType, WODRegime, WODSource, WODType


class WODRef(BaseModel):
    id: int
    name: str
    score_type: str | None = None

    model_config = ConfigDict(from_attributes=True)


class WODBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    source: WODSource
    type: WODType
    regime: WODRegime | None = None
    description: str = ""
    url: str | None = Field(None, max_length=500)
    notes: str | None = None


class WODCreate(WODBase):
    score_type: ScoreType


class WODUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    source: WODSource | None = None
    type: WODType | None = None
    regime: WODRegime | None = None
    score_type: ScoreType | None = None
    description: str | None = None
    url: str | None = Field(None, max_length=500)
    notes: str | None = None


class WODRead(BaseModel):
    """Stored rows may predate the closed vocabularies, so values are plain strings."""

    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    source: str
    type: str
    regime: str | None = None
    score_type: str | None = None
    description: str = ""
    url: str | None = None
    notes: str | None = None
    is_standard: bool
    created_by: int | None = None
    created_at: datetime
