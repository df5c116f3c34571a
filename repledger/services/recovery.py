"""Muscle-group recovery estimates for the dashboard.

How elapsed hours map to a recovered fraction is a policy supplied by the
caller as a ``RecoveryModel``. ``piecewise_recovery`` is the default policy.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta

from repledger.core.enums import MuscleGroup
from repledger.models.exercise import Exercise
from repledger.models.workout import Workout
from repledger.schemas.dashboard import RecoveryItem
from repledger.services.metrics import as_utc, hours_between, local_time

RecoveryModel = Callable[[MuscleGroup, float], float]


def piecewise_recovery(muscle: MuscleGroup, hours: float) -> float:
    """Linear segments: 0-24h -> 0-40%, 24-48h -> 40-80%, 48-72h -> 80-100%, then full."""
    if hours < 0:
        return 0.0
    if hours < 24:
        return hours / 24 * 0.4
    if hours < 48:
        return 0.4 + (hours - 24) / 24 * 0.4
    if hours < 72:
        return 0.8 + (hours - 48) / 24 * 0.2
    return 1.0


def last_trained(
    workouts: Iterable[Workout],
    exercises: Mapping[uuid.UUID, Exercise],
) -> dict[MuscleGroup, datetime]:
    """Latest start time per muscle group; full body and unknown exercises are ignored."""
    latest: dict[MuscleGroup, datetime] = {}
    for workout in sorted(workouts, key=lambda w: as_utc(w.started_at), reverse=True):
        for we in workout.ordered_exercises:
            exercise = exercises.get(we.exercise_id)
            if exercise is None:
                continue
            muscle = exercise.muscle_group
            if muscle is MuscleGroup.FULL_BODY:
                continue
            if muscle not in latest or as_utc(workout.started_at) > as_utc(latest[muscle]):
                latest[muscle] = workout.started_at
    return latest


def estimate_recovery(
    workouts: Iterable[Workout],
    exercises: Mapping[uuid.UUID, Exercise],
    now: datetime,
    *,
    lookback_days: int = 14,
    max_items: int = 2,
    model: RecoveryModel = piecewise_recovery,
) -> list[RecoveryItem]:
    """Least-recovered muscle groups trained within ``lookback_days`` (at most ``max_items``)."""
    cutoff = now - timedelta(days=lookback_days)
    recent = [w for w in workouts if w.ended_at is not None and local_time(w.started_at, now) >= cutoff]
    items = []
    for muscle, trained_at in last_trained(recent, exercises).items():
        hours = hours_between(trained_at, now)
        recovered = min(max(float(model(muscle, hours)), 0.0), 1.0)
        items.append(RecoveryItem(muscle=muscle, recovered=recovered, hours_since_training=hours))
    items.sort(key=lambda item: item.recovered)
    return items[:max_items]
