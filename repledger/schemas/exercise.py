"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from repledger.core.enums import Equipment, MuscleGroup


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: MuscleGroup = MuscleGroup.FULL_BODY
    equipment: Equipment = Equipment.OTHER
    notes: str = ""


class ExerciseCreate(ExerciseBase):
    is_custom: bool = True


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    muscle_group: MuscleGroup | None = None
    equipment: Equipment | None = None
    notes: str | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    is_custom: bool
    created_at: datetime
