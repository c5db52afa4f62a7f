"""Movement schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wodlog.core.enums import MovementType


class MovementRef(BaseModel):
    """Minimal movement info for embedding in other responses (id + name + type)."""

    id: int
    name: str
    type: MovementType

    model_config = ConfigDict(from_attributes=True)


class MovementBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    type: MovementType


class MovementCreate(MovementBase):
    pass


class MovementUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    type: MovementType | None = None


class MovementRead(MovementBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    is_standard: bool
    created_by: int | None = None
    created_at: datetime
