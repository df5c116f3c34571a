"""Workout template schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    ordered_exercise_ids: list[UUID] = []


class TemplateCreate(TemplateBase):
    pass


class TemplateUpdate(BaseModel):
    """Rename and/or replace (reorder) the exercise list."""

    name: str | None = Field(None, min_length=1, max_length=255)
    ordered_exercise_ids: list[UUID] | None = None


class TemplateRead(TemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    last_used_at: datetime | None = None
