"""Personal record and exercise history read models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from repledger.core.enums import PRType


class PersonalRecord(BaseModel):
    """All-time best of one PR type for an exercise."""

    model_config = ConfigDict(frozen=True)

    type: PRType
    value: float
    set_id: UUID
    workout_id: UUID
    achieved_at: datetime


class WorkoutSetPR(BaseModel):
    """A record set within one workout, with what it beat."""

    model_config = ConfigDict(frozen=True)

    exercise_id: UUID
    exercise_name: str
    set_id: UUID
    pr_type: PRType
    value: float
    previous_best: float | None = None  # None: first time the exercise was logged
    weight: float | None = None
    reps: int | None = None

    @property
    def key(self) -> str:
        """Unique per (set, PR type); one set can hold several record types."""
        return f"{self.set_id}-{self.pr_type.value}"


class ExerciseHistorySummary(BaseModel):
    """How one exercise went in one finished workout."""

    model_config = ConfigDict(frozen=True)

    workout_id: UUID
    workout_title: str
    date: datetime
    set_count: int
    total_volume: float
    best_weight: float | None = None
    best_e1rm: float | None = None


class WeeklyStats(BaseModel):
    """History header: this calendar week against the previous one."""

    model_config = ConfigDict(frozen=True)

    sessions_completed: int
    sessions_goal: int
    total_volume: float
    volume_trend: float  # percent; 100 when last week had no volume
    total_time_seconds: float


class SectionStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_count: int
    total_volume: float
