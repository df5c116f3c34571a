"""User display preferences supplied by the host application."""

from pydantic import BaseModel, Field, field_validator

from repledger.core.config import get_settings
from repledger.core.constants import SESSIONS_GOAL_MAX, SESSIONS_GOAL_MIN
from repledger.core.enums import BodyweightUnit, WeightUnit


class UserPreferences(BaseModel):
    """Read-only input to formatting helpers; never mutated by the core."""

    lifting_unit: WeightUnit = Field(default_factory=lambda: get_settings().default_lifting_unit)
    bodyweight_unit: BodyweightUnit = Field(default_factory=lambda: get_settings().default_bodyweight_unit)
    rest_timer_duration_seconds: int = Field(default_factory=lambda: get_settings().rest_timer_duration_seconds, gt=0)
    rest_timer_auto_start: bool = Field(default_factory=lambda: get_settings().rest_timer_auto_start)
    weekly_sessions_goal: int = Field(default_factory=lambda: get_settings().weekly_sessions_goal)

    @field_validator("weekly_sessions_goal")
    @classmethod
    def clamp_sessions_goal(cls, v: int) -> int:
        return min(max(v, SESSIONS_GOAL_MIN), SESSIONS_GOAL_MAX)

    @property
    def formatted_rest_duration(self) -> str:
        """``"1m 30s"``, ``"2m"`` or ``"45s"``."""
        minutes, seconds = divmod(self.rest_timer_duration_seconds, 60)
        if minutes and seconds:
            return f"{minutes}m {seconds}s"
        if minutes:
            return f"{minutes}m"
        return f"{seconds}s"
