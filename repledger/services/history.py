"""History screen statistics: weekly totals and per-exercise history."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from repledger.core.constants import DAYS_PER_WEEK
from repledger.models.workout import Workout
from repledger.schemas.records import ExerciseHistorySummary, SectionStats, WeeklyStats
from repledger.services.dashboard import workouts_between
from repledger.services.metrics import as_utc, week_start


def _total_volume(workouts: Iterable[Workout]) -> float:
    return sum((w.total_volume for w in workouts), 0.0)


def weekly_stats(workouts: Iterable[Workout], now: datetime | None = None, sessions_goal: int = 4) -> WeeklyStats:
    """This calendar week so far against the whole previous week.

    The trend here is a plain percentage (100 when last week was empty and
    this week is not, 0 when both are empty) for the compact history header.
    """
    now = now or datetime.now(timezone.utc)
    workouts = list(workouts)
    start = week_start(now)
    this_week = workouts_between(workouts, start, now, now)
    last_week = workouts_between(workouts, start - timedelta(days=DAYS_PER_WEEK), start, now)

    this_volume = _total_volume(this_week)
    last_volume = _total_volume(last_week)
    if last_volume > 0:
        trend = (this_volume - last_volume) / last_volume * 100
    elif this_volume > 0:
        trend = 100.0
    else:
        trend = 0.0

    return WeeklyStats(
        sessions_completed=len(this_week),
        sessions_goal=sessions_goal,
        total_volume=this_volume,
        volume_trend=trend,
        total_time_seconds=sum(w.duration(now).total_seconds() for w in this_week),
    )


def exercise_history(exercise_id: uuid.UUID, workouts: Iterable[Workout]) -> list[ExerciseHistorySummary]:
    """One summary per finished workout where the exercise has completed sets, newest first."""
    summaries = []
    for workout in workouts:
        if workout.ended_at is None:
            continue
        for we in workout.ordered_exercises:
            if we.exercise_id != exercise_id:
                continue
            completed = [s for s in we.ordered_sets if s.is_completed]
            if not completed:
                continue
            counted = [s for s in completed if s.is_counted]
            summaries.append(
                ExerciseHistorySummary(
                    workout_id=workout.id,
                    workout_title=workout.title,
                    date=workout.started_at,
                    set_count=len(completed),
                    total_volume=we.total_volume,
                    best_weight=max((float(s.weight) for s in counted), default=None),
                    best_e1rm=max((s.estimated_1rm for s in counted if s.estimated_1rm is not None), default=None),
                )
            )
    return sorted(summaries, key=lambda s: as_utc(s.date), reverse=True)


def section_stats(workouts: Iterable[Workout]) -> SectionStats:
    """Session count and volume for a group of workouts (e.g. one month)."""
    workouts = list(workouts)
    return SectionStats(session_count=len(workouts), total_volume=_total_volume(workouts))
