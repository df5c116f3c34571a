"""Live workout editing: start, edit and finish a session.

These helpers only build and mutate entities; persisting them is up to the
caller (see ``repledger.repositories``). Order indexes are kept dense after
every structural change.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from repledger.models.exercise import Exercise
from repledger.models.template import Template
from repledger.models.workout import SetEntry, Workout, WorkoutExercise
from repledger.schemas.preferences import UserPreferences
from repledger.services.metrics import renumber

logger = logging.getLogger(__name__)


def start_empty_workout(now: datetime | None = None) -> Workout:
    """Quick start: an in-progress workout with no exercises."""
    return Workout(started_at=now or datetime.now(timezone.utc))


def _append_exercise(workout: Workout, exercise_id: uuid.UUID) -> WorkoutExercise:
    workout_exercise = WorkoutExercise(exercise_id=exercise_id)
    workout.add_exercise(workout_exercise)
    workout_exercise.add_set(SetEntry())
    return workout_exercise


def start_from_template(
    template: Template,
    exercises: Iterable[Exercise] | Mapping[uuid.UUID, Exercise],
    now: datetime | None = None,
) -> Workout:
    """New workout following the template's order, one empty set per exercise.

    Template ids with no matching exercise are skipped. Marks the template as
    used.
    """
    now = now or datetime.now(timezone.utc)
    workout = Workout(started_at=now, template_id=template.id)
    resolved = template.resolve_exercises(exercises)
    for exercise in resolved:
        _append_exercise(workout, exercise.id)
    template.touch(now)
    logger.debug(
        "Started workout %s from template %s (%d/%d exercises resolved)",
        workout.id, template.id, len(resolved), len(template.ordered_exercise_ids),
    )
    return workout


def repeat_workout(source: Workout, now: datetime | None = None) -> Workout:
    """Clone a past workout's structure: exercise order, set count and set types.

    Weight, reps and completion start empty.
    """
    workout = Workout(started_at=now or datetime.now(timezone.utc), template_id=source.template_id)
    for source_exercise in source.ordered_exercises:
        workout_exercise = WorkoutExercise(exercise_id=source_exercise.exercise_id)
        workout.add_exercise(workout_exercise)
        for source_set in source_exercise.ordered_sets:
            workout_exercise.add_set(SetEntry(set_type=source_set.set_type))
    return workout


def add_exercise(workout: Workout, exercise: Exercise) -> WorkoutExercise:
    """Append an exercise with one empty set."""
    return _append_exercise(workout, exercise.id)


def remove_exercise(workout: Workout, index: int) -> WorkoutExercise | None:
    """Remove the exercise at ``index`` (display order) and renumber the rest."""
    ordered_exercises = workout.ordered_exercises
    if not 0 <= index < len(ordered_exercises):
        return None
    removed = ordered_exercises.pop(index)
    # delete-orphan cascade removes it (and its sets) on the next flush
    workout.exercises.remove(removed)
    workout.reindex_exercises()
    return removed


def reorder_exercises(workout: Workout, from_index: int, to_index: int) -> None:
    """Move one exercise to a new position in display order."""
    ordered_exercises = workout.ordered_exercises
    if not 0 <= from_index < len(ordered_exercises):
        return
    moved = ordered_exercises.pop(from_index)
    to_index = min(max(to_index, 0), len(ordered_exercises))
    ordered_exercises.insert(to_index, moved)
    renumber(ordered_exercises)


def add_set(workout_exercise: WorkoutExercise) -> SetEntry:
    set_entry = SetEntry()
    workout_exercise.add_set(set_entry)
    return set_entry


def duplicate_last_set(workout_exercise: WorkoutExercise) -> SetEntry | None:
    return workout_exercise.duplicate_last_set()


def delete_set(workout_exercise: WorkoutExercise, set_entry: SetEntry) -> None:
    """Remove a set and renumber the remaining ones."""
    if set_entry in workout_exercise.sets:
        workout_exercise.sets.remove(set_entry)
    workout_exercise.reindex_sets()


def complete_set(set_entry: SetEntry, preferences: UserPreferences | None = None) -> bool:
    """Toggle completion. Returns True when a rest timer should start.

    That is only when the set just became completed and the user has rest
    timer auto-start enabled.
    """
    was_completed = set_entry.is_completed
    set_entry.toggle_complete()
    auto_start = preferences.rest_timer_auto_start if preferences is not None else False
    return not was_completed and set_entry.is_completed and auto_start


def finish_workout(workout: Workout, now: datetime | None = None) -> bool:
    """End the session. Returns True for a genuine completion.

    Genuine means it was in progress and has at least one completed set;
    empty sessions are finished too but should not count toward totals.
    """
    was_in_progress = workout.is_in_progress
    has_completed_sets = workout.completed_set_count > 0
    workout.finish(now)
    return was_in_progress and has_completed_sets


def rename_workout(workout: Workout, title: str) -> None:
    """Set the title; an empty title falls back to the date label."""
    workout.title = title.strip() or Workout.generate_title(workout.started_at)
