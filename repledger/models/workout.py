"""Workout, WorkoutExercise and SetEntry models."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repledger.core.constants import EMPTY_DISPLAY, RPE_MAX, RPE_MIN
from repledger.core.enums import SetType, WeightUnit
from repledger.db.base import Base
from repledger.services import metrics
from repledger.services.unit_conversion import format_lifting_weight


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """A training session; ``ended_at`` is null while it is in progress.

    Owns its workout exercises (and through them their sets): deleting a
    workout deletes both. Whether only one workout may be in progress at a
    time is left to the caller.
    """

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_started_at", "started_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)  # originating template, by id

    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order_index",
    )

    def __init__(
        self,
        *,
        title: str = "",
        started_at: datetime | None = None,
        ended_at: datetime | None = None,
        notes: str = "",
        template_id: uuid.UUID | None = None,
        id: uuid.UUID | None = None,
    ):
        started_at = started_at or _utcnow()
        super().__init__(
            id=id or uuid.uuid4(),
            title=title or self.generate_title(started_at),
            started_at=started_at,
            ended_at=ended_at,
            notes=notes,
            template_id=template_id,
        )

    @staticmethod
    def generate_title(date: datetime) -> str:
        """Default title from the start date, e.g. ``"Monday Workout"``."""
        return f"{date:%A} Workout"

    @property
    def is_in_progress(self) -> bool:
        return self.ended_at is None

    def duration(self, now: datetime | None = None) -> timedelta:
        """Session length; grows on every call while the workout is in progress."""
        return metrics.duration(self.started_at, self.ended_at, now)

    def duration_seconds(self, now: datetime | None = None) -> int:
        return int(self.duration(now).total_seconds())

    def formatted_duration(self, now: datetime | None = None) -> str:
        return metrics.format_duration(self.duration_seconds(now))

    def live_duration(self, now: datetime | None = None) -> str:
        return metrics.format_live_duration(self.duration_seconds(now))

    @property
    def ordered_exercises(self) -> list[WorkoutExercise]:
        return metrics.ordered(self.exercises)

    @property
    def completed_set_count(self) -> int:
        return sum(we.completed_set_count for we in self.exercises)

    @property
    def total_volume(self) -> float:
        return sum((we.total_volume for we in self.ordered_exercises), 0.0)

    @property
    def top_set(self) -> tuple[WorkoutExercise, SetEntry] | None:
        """Best set of the whole workout by e1RM (earlier exercise wins ties)."""
        best: tuple[WorkoutExercise, SetEntry] | None = None
        best_e1rm: float | None = None
        for we in self.ordered_exercises:
            candidate = we.best_set
            e1rm = candidate.estimated_1rm if candidate is not None else None
            if e1rm is not None and (best_e1rm is None or e1rm > best_e1rm):
                best, best_e1rm = (we, candidate), e1rm
        return best

    def was_modified_from_template(self, template) -> bool:
        """True when started from ``template`` and the exercise list no longer matches it."""
        if template is None or self.template_id != template.id:
            return False
        return [we.exercise_id for we in self.ordered_exercises] != template.ordered_exercise_ids

    def finish(self, now: datetime | None = None) -> None:
        self.ended_at = now or _utcnow()

    def add_exercise(self, workout_exercise: WorkoutExercise) -> None:
        """Append at the end of the current order."""
        workout_exercise.order_index = len(self.exercises)
        self.exercises.append(workout_exercise)

    def reindex_exercises(self) -> None:
        """Make order indexes dense again after a removal or reorder."""
        metrics.renumber(self.ordered_exercises)

    def __repr__(self) -> str:
        return f"Workout(id={self.id!s}, title={self.title!r}, started_at={self.started_at!s})"


class WorkoutExercise(Base):
    """An exercise performed within one workout, with its sets.

    ``exercise_id`` references the library entry without owning it.
    ``order_index`` is dense and 0-based within the parent workout.
    """

    __tablename__ = "workout_exercises"
    __table_args__ = (
        Index("ix_workout_exercises_workout_id", "workout_id"),
        Index("ix_workout_exercises_exercise_id", "exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)

    workout: Mapped["Workout | None"] = relationship("Workout", back_populates="exercises")
    sets: Mapped[list["SetEntry"]] = relationship(
        "SetEntry",
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        order_by="SetEntry.order_index",
    )

    def __init__(
        self,
        *,
        exercise_id: uuid.UUID,
        order_index: int = 0,
        notes: str = "",
        id: uuid.UUID | None = None,
    ):
        super().__init__(id=id or uuid.uuid4(), exercise_id=exercise_id, order_index=order_index, notes=notes)

    @property
    def ordered_sets(self) -> list[SetEntry]:
        return metrics.ordered(self.sets)

    @property
    def completed_set_count(self) -> int:
        return metrics.completed_set_count(self.sets)

    @property
    def total_volume(self) -> float:
        return metrics.total_volume(self.ordered_sets)

    @property
    def best_set(self) -> SetEntry | None:
        return metrics.best_set(self.sets)

    def add_set(self, set_entry: SetEntry) -> None:
        set_entry.order_index = len(self.sets)
        self.sets.append(set_entry)

    def duplicate_last_set(self) -> SetEntry | None:
        """Append a copy of the last set's weight, reps and type (not completed)."""
        ordered_sets = self.ordered_sets
        if not ordered_sets:
            return None
        last = ordered_sets[-1]
        new_set = SetEntry(weight=last.weight, reps=last.reps, set_type=last.set_type)
        self.add_set(new_set)
        return new_set

    def reindex_sets(self) -> None:
        metrics.renumber(self.ordered_sets)

    def __repr__(self) -> str:
        return f"WorkoutExercise(id={self.id!s}, exercise_id={self.exercise_id!s}, order_index={self.order_index})"


class SetEntry(Base):
    """One set: weight (kg) and reps, completion, optional RPE and set type.

    Weight, reps and RPE are optional; ``None`` means not recorded, which is
    different from a recorded zero.
    """

    __tablename__ = "set_entries"
    __table_args__ = (Index("ix_set_entries_workout_exercise_id", "workout_exercise_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=True
    )
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kilograms
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    set_type_raw: Mapped[str | None] = mapped_column("set_type", String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    workout_exercise: Mapped["WorkoutExercise | None"] = relationship("WorkoutExercise", back_populates="sets")

    def __init__(
        self,
        *,
        order_index: int = 0,
        weight: float | None = None,
        reps: int | None = None,
        is_completed: bool = False,
        rpe: float | None = None,
        set_type: SetType | None = None,
        created_at: datetime | None = None,
        id: uuid.UUID | None = None,
    ):
        super().__init__(
            id=id or uuid.uuid4(),
            order_index=order_index,
            weight=weight,
            reps=reps,
            is_completed=is_completed,
            set_type_raw=set_type.value if set_type is not None else None,
            created_at=created_at or _utcnow(),
        )
        self.set_rpe(rpe)

    @property
    def set_type(self) -> SetType | None:
        if self.set_type_raw is None:
            return None
        try:
            return SetType(self.set_type_raw)
        except ValueError:
            return None

    @set_type.setter
    def set_type(self, value: SetType | None) -> None:
        self.set_type_raw = value.value if value is not None else None

    @property
    def estimated_1rm(self) -> float | None:
        return metrics.estimated_one_rep_max(self.weight, self.reps)

    @property
    def volume(self) -> float | None:
        return metrics.set_volume(self.weight, self.reps)

    @property
    def is_counted(self) -> bool:
        return metrics.is_counted(self)

    def complete(self) -> None:
        self.is_completed = True

    def toggle_complete(self) -> None:
        self.is_completed = not self.is_completed

    def set_rpe(self, value: float | None) -> None:
        """Store RPE clamped into [1, 10]; ``None`` clears it."""
        if value is None:
            self.rpe = None
            return
        self.rpe = min(max(float(value), RPE_MIN), RPE_MAX)

    @property
    def is_valid_rpe(self) -> bool:
        return self.rpe is None or RPE_MIN <= self.rpe <= RPE_MAX

    def formatted_weight(self, unit: WeightUnit) -> str:
        return format_lifting_weight(self.weight, unit)

    @property
    def formatted_reps(self) -> str:
        return EMPTY_DISPLAY if self.reps is None else str(self.reps)

    def summary(self, unit: WeightUnit) -> str:
        """``"80.0 kg × 8"``, or a dash unless both weight and reps are recorded."""
        if self.weight is None or self.reps is None:
            return EMPTY_DISPLAY
        return f"{format_lifting_weight(self.weight, unit)} × {self.reps}"

    def __repr__(self) -> str:
        return f"SetEntry(id={self.id!s}, order_index={self.order_index}, weight={self.weight}, reps={self.reps})"
