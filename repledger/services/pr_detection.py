"""PR detection: flag sets that beat every earlier best for their exercise.

Three record types are tracked per exercise: heaviest weight, highest e1RM and
highest single-set volume. Only counted sets (completed, weight and reps
recorded) of finished workouts take part. A set must be strictly greater than
the prior best to count; equalling it is not a record.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Mapping

from repledger.core.enums import PRType
from repledger.models.workout import SetEntry, Workout
from repledger.services.metrics import as_utc
from repledger.schemas.dashboard import LatestPRData
from repledger.schemas.records import PersonalRecord, WorkoutSetPR

logger = logging.getLogger(__name__)

UNKNOWN_EXERCISE_NAME = "Unknown Exercise"

_PR_VALUES: tuple[tuple[PRType, Callable[[SetEntry], float | None]], ...] = (
    (PRType.MAX_WEIGHT, lambda s: float(s.weight) if s.weight is not None else None),
    (PRType.MAX_E1RM, lambda s: s.estimated_1rm),
    (PRType.MAX_VOLUME, lambda s: s.volume),
)


def finished_workouts(workouts: Iterable[Workout]) -> list[Workout]:
    """Finished workouts, oldest first."""
    return sorted((w for w in workouts if w.ended_at is not None), key=lambda w: as_utc(w.started_at))


def _counted_sets(workout: Workout):
    for we in workout.ordered_exercises:
        for s in we.ordered_sets:
            if s.is_counted:
                yield we, s


def prior_bests(workouts: Iterable[Workout]) -> dict[uuid.UUID, dict[PRType, float]]:
    """Best value per exercise and PR type across ``workouts``."""
    bests: dict[uuid.UUID, dict[PRType, float]] = {}
    for workout in workouts:
        for we, s in _counted_sets(workout):
            per_type = bests.setdefault(we.exercise_id, {})
            for pr_type, value_of in _PR_VALUES:
                value = value_of(s)
                if value is not None and value > per_type.get(pr_type, 0.0):
                    per_type[pr_type] = value
    return bests


def personal_records(exercise_id: uuid.UUID, workouts: Iterable[Workout]) -> dict[PRType, PersonalRecord]:
    """All-time records for one exercise. The earliest set to reach a value holds it."""
    records: dict[PRType, PersonalRecord] = {}
    for workout in finished_workouts(workouts):
        for we, s in _counted_sets(workout):
            if we.exercise_id != exercise_id:
                continue
            for pr_type, value_of in _PR_VALUES:
                value = value_of(s)
                if value is None:
                    continue
                current = records.get(pr_type)
                if current is None or value > current.value:
                    records[pr_type] = PersonalRecord(
                        type=pr_type,
                        value=value,
                        set_id=s.id,
                        workout_id=workout.id,
                        achieved_at=workout.started_at,
                    )
    return records


def workout_prs(
    workout: Workout,
    history: Iterable[Workout],
    exercise_names: Mapping[uuid.UUID, str] | None = None,
) -> list[WorkoutSetPR]:
    """Records set in ``workout`` against finished workouts started before it.

    For each exercise and PR type, the best qualifying set is reported once.
    With no prior history the baseline is 0, so a first logged set is a record.
    """
    exercise_names = exercise_names or {}
    started_at = as_utc(workout.started_at)
    prior = [
        w for w in history
        if w.ended_at is not None and w.id != workout.id and as_utc(w.started_at) < started_at
    ]
    bests = prior_bests(prior)

    results: list[WorkoutSetPR] = []
    for we in workout.ordered_exercises:
        prior_for_exercise = bests.get(we.exercise_id, {})
        counted = [s for s in we.ordered_sets if s.is_counted]
        for pr_type, value_of in _PR_VALUES:
            baseline = prior_for_exercise.get(pr_type, 0.0)
            best: SetEntry | None = None
            best_value = baseline
            for s in counted:
                value = value_of(s)
                if value is not None and value > best_value:
                    best, best_value = s, value
            if best is None:
                continue
            results.append(
                WorkoutSetPR(
                    exercise_id=we.exercise_id,
                    exercise_name=exercise_names.get(we.exercise_id, UNKNOWN_EXERCISE_NAME),
                    set_id=best.id,
                    pr_type=pr_type,
                    value=best_value,
                    previous_best=prior_for_exercise.get(pr_type),
                    weight=best.weight,
                    reps=best.reps,
                )
            )
    return results


def count_workout_prs(workout: Workout, history: Iterable[Workout]) -> int:
    return len(workout_prs(workout, history))


def latest_pr(
    workouts: Iterable[Workout],
    exercise_names: Mapping[uuid.UUID, str] | None = None,
    lookback: int = 20,
) -> LatestPRData | None:
    """Most recent record across history, scanning the last ``lookback`` finished workouts.

    Within the newest workout holding any record, a max-weight record is shown
    in preference to the other types.
    """
    finished = finished_workouts(workouts)
    for workout in reversed(finished[-lookback:] if lookback > 0 else []):
        prs = workout_prs(workout, finished, exercise_names)
        if not prs:
            continue
        chosen = next((p for p in prs if p.pr_type is PRType.MAX_WEIGHT), prs[0])
        logger.debug("Latest PR %s in workout %s", chosen.key, workout.id)
        return LatestPRData(
            id=chosen.set_id,
            exercise_name=chosen.exercise_name,
            pr_type=chosen.pr_type,
            weight=chosen.weight if chosen.weight is not None else 0.0,
            reps=chosen.reps,
            achieved_at=workout.started_at,
        )
    return None
