"""Shared enums for models and read models."""

from enum import Enum


class MuscleGroup(str, Enum):
    """Primary muscle group an exercise targets."""

    # Push
    CHEST = "chest"
    SHOULDERS = "shoulders"
    TRICEPS = "triceps"
    # Pull
    BACK = "back"
    BICEPS = "biceps"
    FOREARMS = "forearms"
    # Legs
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    # Core / full body
    CORE = "core"
    FULL_BODY = "fullBody"

    @property
    def display_name(self) -> str:
        if self is MuscleGroup.FULL_BODY:
            return "Full Body"
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str | None) -> "MuscleGroup":
        """Unknown or missing values read back as full body."""
        try:
            return cls(raw)
        except ValueError:
            return cls.FULL_BODY


class Equipment(str, Enum):
    """Equipment an exercise needs."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    MACHINE = "machine"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"
    BANDS = "bands"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str | None) -> "Equipment":
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class SetType(str, Enum):
    """Set classification."""

    WARMUP = "warmup"
    WORKING = "working"
    DROPSET = "dropset"
    FAILURE = "failure"

    @property
    def display_name(self) -> str:
        return {
            SetType.WARMUP: "Warm-up",
            SetType.WORKING: "Working",
            SetType.DROPSET: "Drop Set",
            SetType.FAILURE: "To Failure",
        }[self]

    @property
    def short_label(self) -> str:
        """Compact badge; working sets carry none."""
        return {SetType.WARMUP: "W", SetType.WORKING: "", SetType.DROPSET: "D", SetType.FAILURE: "F"}[self]


class WeightUnit(str, Enum):
    """Units for lifted weight."""

    KG = "kg"
    LB = "lb"

    @property
    def abbreviation(self) -> str:
        return self.value


class BodyweightUnit(str, Enum):
    """Bodyweight display units (adds UK stone + pounds)."""

    KG = "kg"
    LB = "lb"
    STONE_LB = "stoneLb"

    @property
    def abbreviation(self) -> str:
        return "st lb" if self is BodyweightUnit.STONE_LB else self.value


class PRType(str, Enum):
    """Type of personal record."""

    MAX_WEIGHT = "max_weight"  # Heaviest weight
    MAX_E1RM = "max_e1rm"  # Highest estimated 1RM
    MAX_VOLUME = "max_volume"  # Highest single-set volume (weight × reps)

    @property
    def title_text(self) -> str:
        return {
            PRType.MAX_WEIGHT: "Max Load",
            PRType.MAX_E1RM: "Max 1RM",
            PRType.MAX_VOLUME: "Max Set Vol",
        }[self]

    @property
    def badge_text(self) -> str:
        return self.title_text.upper()
