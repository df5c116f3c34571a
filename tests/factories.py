"""Entity builders shared by the test modules."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from repledger.core.enums import Equipment, MuscleGroup, SetType
from repledger.models import Exercise, SetEntry, Template, Workout, WorkoutExercise

UTC = timezone.utc

# Wednesday; the calendar week starts Monday 2024-06-10
NOW = datetime(2024, 6, 12, 18, 0, tzinfo=UTC)


def make_exercise(
    name: str = "Bench Press",
    muscle_group: MuscleGroup = MuscleGroup.CHEST,
    equipment: Equipment = Equipment.BARBELL,
) -> Exercise:
    return Exercise(name=name, muscle_group=muscle_group, equipment=equipment)


def make_set(
    weight: float | None = None,
    reps: int | None = None,
    completed: bool = True,
    set_type: SetType | None = None,
    order_index: int = 0,
    rpe: float | None = None,
) -> SetEntry:
    return SetEntry(
        weight=weight,
        reps=reps,
        is_completed=completed,
        set_type=set_type,
        order_index=order_index,
        rpe=rpe,
    )


def make_workout(
    started_at: datetime,
    exercises: Iterable[tuple[Exercise | uuid.UUID, Iterable[SetEntry]]] = (),
    *,
    duration: timedelta | None = timedelta(hours=1),
    title: str = "",
    template_id: uuid.UUID | None = None,
) -> Workout:
    """Workout with the given (exercise, sets) pairs; ``duration=None`` leaves it in progress."""
    workout = Workout(
        title=title,
        started_at=started_at,
        ended_at=started_at + duration if duration is not None else None,
        template_id=template_id,
    )
    for exercise, sets in exercises:
        exercise_id = exercise.id if isinstance(exercise, Exercise) else exercise
        workout_exercise = WorkoutExercise(exercise_id=exercise_id)
        workout.add_exercise(workout_exercise)
        for set_entry in sets:
            workout_exercise.add_set(set_entry)
    return workout


def make_template(name: str, exercises: Iterable[Exercise | uuid.UUID] = ()) -> Template:
    return Template(
        name=name,
        ordered_exercise_ids=[e.id if isinstance(e, Exercise) else e for e in exercises],
    )
