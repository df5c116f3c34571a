"""Dashboard read model: one snapshot, recomputed on every request."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repledger.core.constants import DAYS_PER_WEEK, EMPTY_DISPLAY
from repledger.core.enums import MuscleGroup, PRType
from repledger.services.metrics import as_utc, format_duration


def time_ago_text(date: datetime, now: datetime) -> str:
    """``"Today"``, ``"Yesterday"`` or ``"3d ago"`` by calendar day in ``now``'s zone."""
    if now.tzinfo is not None:
        date = as_utc(date).astimezone(now.tzinfo)
    days = (now.date() - date.date()).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    return f"{days}d ago"


class TrendPercentage(BaseModel):
    """Week-over-week change against a non-zero baseline."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    value: float

    @property
    def text(self) -> str:
        sign = "+" if self.value >= 0 else ""
        return f"{sign}{int(self.value)}%"

    @property
    def is_positive(self) -> bool:
        return self.value >= 0


class TrendNew(BaseModel):
    """No volume last week, some this week."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["new"] = "new"

    @property
    def text(self) -> str:
        return "New"

    @property
    def is_positive(self) -> bool:
        return True


class TrendNone(BaseModel):
    """No volume in either week."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"

    @property
    def text(self) -> str:
        return EMPTY_DISPLAY

    @property
    def is_positive(self) -> bool:
        return False


VolumeTrend = Annotated[Union[TrendPercentage, TrendNew, TrendNone], Field(discriminator="kind")]


class DashboardStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    weekly_volume: float
    volume_trend: VolumeTrend
    sessions_completed: int
    sessions_goal: int


class LastWorkoutData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    muscle_group: MuscleGroup | None = None
    date: datetime
    duration_seconds: int | None = None
    volume: float
    pr_count: int

    @property
    def duration_text(self) -> str:
        if not self.duration_seconds or self.duration_seconds <= 0:
            return EMPTY_DISPLAY
        return format_duration(self.duration_seconds)


class LatestPRData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID  # set id
    exercise_name: str
    pr_type: PRType
    weight: float
    reps: int | None = None
    achieved_at: datetime


class RecoveryItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    muscle: MuscleGroup
    recovered: float = Field(ge=0.0, le=1.0)
    hours_since_training: int = Field(ge=0)


class DashboardData(BaseModel):
    model_config = ConfigDict(frozen=True)

    stats: DashboardStats
    weekly_volume_by_day: list[float]  # Monday..Sunday
    last_workout: LastWorkoutData | None = None
    latest_pr: LatestPRData | None = None
    recovery: list[RecoveryItem] = []
    has_any_workouts: bool

    @field_validator("weekly_volume_by_day")
    @classmethod
    def seven_days(cls, v: list[float]) -> list[float]:
        if len(v) != DAYS_PER_WEEK:
            raise ValueError(f"weekly_volume_by_day needs {DAYS_PER_WEEK} entries, got {len(v)}")
        return v
