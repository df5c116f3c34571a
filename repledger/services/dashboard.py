"""Dashboard aggregation: reduce the workout history to one read-only snapshot.

Only finished workouts are considered. Weeks are calendar weeks starting on
Monday, in the time zone of ``now``. Nothing here is cached or persisted; the
snapshot is rebuilt from the entities on every call.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta, timezone

from repledger.core.config import Settings, get_settings
from repledger.core.constants import DAYS_PER_WEEK
from repledger.core.enums import MuscleGroup
from repledger.models.exercise import Exercise
from repledger.models.workout import Workout
from repledger.schemas.dashboard import (
    DashboardData,
    DashboardStats,
    LastWorkoutData,
    TrendNew,
    TrendNone,
    TrendPercentage,
    VolumeTrend,
)
from repledger.services.metrics import as_utc, local_time, week_start
from repledger.services.pr_detection import latest_pr, workout_prs
from repledger.services.recovery import RecoveryModel, estimate_recovery, piecewise_recovery

logger = logging.getLogger(__name__)

WorkoutClassifier = Callable[[Workout], MuscleGroup | None]


def volume_trend(this_week: float, last_week: float) -> VolumeTrend:
    """Week-over-week change; a zero baseline is ``new`` or ``none``, never a percentage."""
    if last_week > 0:
        return TrendPercentage(value=(this_week - last_week) / last_week * 100)
    if this_week > 0:
        return TrendNew()
    return TrendNone()


def workouts_between(workouts: Iterable[Workout], start: datetime, end: datetime, now: datetime) -> list[Workout]:
    """Finished workouts with ``start <= started_at < end``, newest first."""
    selected = [
        w for w in workouts
        if w.ended_at is not None and start <= local_time(w.started_at, now) < end
    ]
    return sorted(selected, key=lambda w: as_utc(w.started_at), reverse=True)


def weekly_volume_by_day(workouts: Iterable[Workout], week_begin: datetime, now: datetime) -> list[float]:
    """Seven totals, Monday first; days without training are 0."""
    by_day = [0.0] * DAYS_PER_WEEK
    for workout in workouts:
        index = (local_time(workout.started_at, now).date() - week_begin.date()).days
        by_day[min(max(index, 0), DAYS_PER_WEEK - 1)] += workout.total_volume
    return by_day


def primary_muscle_group(workout: Workout, exercises: Mapping[uuid.UUID, Exercise]) -> MuscleGroup | None:
    """Muscle group with the most exercises in the workout; first seen wins ties."""
    counts: Counter[MuscleGroup] = Counter()
    for we in workout.ordered_exercises:
        exercise = exercises.get(we.exercise_id)
        if exercise is not None:
            counts[exercise.muscle_group] += 1
    if not counts:
        return None
    # Counter.most_common keeps insertion order among equal counts
    return counts.most_common(1)[0][0]


def build_dashboard(
    workouts: Iterable[Workout],
    exercises: Iterable[Exercise] | Mapping[uuid.UUID, Exercise],
    now: datetime | None = None,
    *,
    sessions_goal: int | None = None,
    recovery_model: RecoveryModel = piecewise_recovery,
    classify_workout: WorkoutClassifier | None = None,
    settings: Settings | None = None,
) -> DashboardData:
    """Compose the dashboard snapshot from the entity graph.

    ``classify_workout`` overrides how the last workout's muscle group is
    derived; by default it is the most frequent muscle group among its
    exercises. Exercises missing from ``exercises`` are ignored wherever a
    classification or name is needed.
    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)
    sessions_goal = settings.weekly_sessions_goal if sessions_goal is None else sessions_goal
    exercise_map = exercises if isinstance(exercises, Mapping) else {e.id: e for e in exercises}
    names = {exercise_id: e.name for exercise_id, e in exercise_map.items()}

    finished = [w for w in workouts if w.ended_at is not None]

    this_week_start = week_start(now)
    this_week_end = this_week_start + timedelta(days=DAYS_PER_WEEK)
    last_week_start = this_week_start - timedelta(days=DAYS_PER_WEEK)
    this_week = workouts_between(finished, this_week_start, this_week_end, now)
    last_week = workouts_between(finished, last_week_start, this_week_start, now)

    this_week_volume = sum((w.total_volume for w in this_week), 0.0)
    last_week_volume = sum((w.total_volume for w in last_week), 0.0)
    stats = DashboardStats(
        weekly_volume=this_week_volume,
        volume_trend=volume_trend(this_week_volume, last_week_volume),
        sessions_completed=len(this_week),
        sessions_goal=sessions_goal,
    )

    last_workout_data = None
    if finished:
        last = max(finished, key=lambda w: as_utc(w.started_at))
        muscle = classify_workout(last) if classify_workout else primary_muscle_group(last, exercise_map)
        last_workout_data = LastWorkoutData(
            id=last.id,
            muscle_group=muscle,
            date=last.started_at,
            duration_seconds=last.duration_seconds(now),
            volume=last.total_volume,
            pr_count=len(workout_prs(last, finished, names)),
        )

    logger.debug(
        "Dashboard: %d finished workouts, this week %.1f kg vs last week %.1f kg",
        len(finished), this_week_volume, last_week_volume,
    )
    return DashboardData(
        stats=stats,
        weekly_volume_by_day=weekly_volume_by_day(this_week, this_week_start, now),
        last_workout=last_workout_data,
        latest_pr=latest_pr(finished, names, lookback=settings.latest_pr_lookback_workouts),
        recovery=estimate_recovery(
            finished,
            exercise_map,
            now,
            lookback_days=settings.recovery_lookback_days,
            max_items=settings.recovery_max_items,
            model=recovery_model,
        ),
        has_any_workouts=bool(finished),
    )
