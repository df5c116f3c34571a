"""Tests for dashboard aggregation."""

from datetime import datetime, timedelta, timezone

import pytest

from repledger.core.enums import Equipment, MuscleGroup, PRType
from repledger.services.dashboard import build_dashboard, primary_muscle_group, volume_trend
from repledger.services.recovery import estimate_recovery, piecewise_recovery
from tests.factories import UTC, make_exercise, make_set, make_workout


class TestVolumeTrend:
    def test_increase(self):
        trend = volume_trend(150, 100)
        assert trend.kind == "percentage"
        assert trend.text == "+50%"
        assert trend.is_positive

    def test_decrease(self):
        trend = volume_trend(50, 100)
        assert trend.text == "-50%"
        assert not trend.is_positive

    def test_unchanged_is_positive(self):
        assert volume_trend(100, 100).text == "+0%"
        assert volume_trend(100, 100).is_positive

    def test_new_when_last_week_was_empty(self):
        trend = volume_trend(100, 0)
        assert trend.kind == "new"
        assert trend.text == "New"

    def test_none_when_both_weeks_empty(self):
        trend = volume_trend(0, 0)
        assert trend.kind == "none"
        assert trend.text == "—"
        assert not trend.is_positive


class TestBuildDashboard:
    def test_empty_history(self, settings, now):
        data = build_dashboard([], [], now, settings=settings)
        assert not data.has_any_workouts
        assert data.weekly_volume_by_day == [0.0] * 7
        assert data.last_workout is None
        assert data.latest_pr is None
        assert data.recovery == []
        assert data.stats.volume_trend.kind == "none"
        assert data.stats.sessions_completed == 0
        assert data.stats.sessions_goal == settings.weekly_sessions_goal

    def test_weekly_stats(self, history, library, settings, now):
        stats = build_dashboard(history, library, now, settings=settings).stats
        assert stats.weekly_volume == 2800
        assert stats.sessions_completed == 2
        assert stats.volume_trend.text == "+180%"

    def test_volume_by_day_starts_monday(self, history, library, settings, now):
        data = build_dashboard(history, library, now, settings=settings)
        assert data.weekly_volume_by_day == [1500, 0, 1300, 0, 0, 0, 0]

    def test_last_workout(self, history, library, settings, now):
        last = build_dashboard(history, library, now, settings=settings).last_workout
        assert last.id == history[-1].id
        # squat and row tie on exercise count; the first one listed wins
        assert last.muscle_group is MuscleGroup.QUADRICEPS
        assert last.volume == 1300
        assert last.duration_seconds == 3600
        assert last.duration_text == "1h 0m"
        assert last.pr_count == 6

    def test_latest_pr(self, history, library, settings, now):
        pr = build_dashboard(history, library, now, settings=settings).latest_pr
        assert pr.exercise_name == "Squat"
        assert pr.pr_type is PRType.MAX_WEIGHT
        assert (pr.weight, pr.reps) == (140, 5)
        assert pr.achieved_at == history[-1].started_at

    def test_recovery_lists_least_recovered_groups(self, history, library, settings, now):
        recovery = build_dashboard(history, library, now, settings=settings).recovery
        assert len(recovery) == 2
        assert {item.muscle for item in recovery} == {MuscleGroup.QUADRICEPS, MuscleGroup.BACK}
        assert all(item.hours_since_training == 10 for item in recovery)
        assert recovery[0].recovered == pytest.approx(10 / 24 * 0.4)

    def test_recovery_model_is_injectable(self, history, library, settings, now):
        data = build_dashboard(
            history, library, now, settings=settings, recovery_model=lambda muscle, hours: 3.0
        )
        assert [item.recovered for item in data.recovery] == [1.0, 1.0]

    def test_in_progress_workouts_are_ignored(self, history, library, bench, settings, now):
        live = make_workout(now - timedelta(minutes=30), [(bench, [make_set(200, 10)])], duration=None)
        with_live = build_dashboard(history + [live], library, now, settings=settings)
        without = build_dashboard(history, library, now, settings=settings)
        assert with_live == without

    def test_only_unfinished_workouts_means_no_history(self, bench, library, settings, now):
        live = make_workout(now - timedelta(minutes=30), [(bench, [make_set(100, 5)])], duration=None)
        assert not build_dashboard([live], library, now, settings=settings).has_any_workouts

    def test_workout_without_exercises(self, library, settings, now):
        empty = make_workout(now - timedelta(hours=3))
        data = build_dashboard([empty], library, now, settings=settings)
        assert data.has_any_workouts
        assert data.last_workout.muscle_group is None
        assert data.last_workout.volume == 0
        assert data.stats.volume_trend.kind == "none"

    def test_sessions_goal_and_classifier_overrides(self, history, library, settings, now):
        data = build_dashboard(
            history,
            library,
            now,
            settings=settings,
            sessions_goal=5,
            classify_workout=lambda workout: MuscleGroup.FULL_BODY,
        )
        assert data.stats.sessions_goal == 5
        assert data.last_workout.muscle_group is MuscleGroup.FULL_BODY

    def test_week_follows_the_time_zone_of_now(self, bench, library, settings):
        now = datetime(2024, 6, 12, 18, 0, tzinfo=timezone(timedelta(hours=2)))
        # Sunday 23:00 UTC is already Monday 01:00 in UTC+2
        workout = make_workout(datetime(2024, 6, 9, 23, 0, tzinfo=UTC), [(bench, [make_set(100, 5)])])
        data = build_dashboard([workout], library, now, settings=settings)
        assert data.weekly_volume_by_day[0] == 500
        assert data.stats.sessions_completed == 1


class TestPrimaryMuscleGroup:
    def test_most_exercises_wins(self, bench, squat, row, now):
        workout = make_workout(now, [(row, []), (squat, []), (bench, []), (bench, [])])
        exercises = {e.id: e for e in (bench, squat, row)}
        assert primary_muscle_group(workout, exercises) is MuscleGroup.CHEST

    def test_unknown_exercises_are_ignored(self, bench, now):
        workout = make_workout(now, [(bench, [])])
        assert primary_muscle_group(workout, {}) is None


class TestRecovery:
    def test_piecewise_curve(self):
        assert piecewise_recovery(MuscleGroup.CHEST, 0) == 0
        assert piecewise_recovery(MuscleGroup.CHEST, 24) == pytest.approx(0.4)
        assert piecewise_recovery(MuscleGroup.CHEST, 48) == pytest.approx(0.8)
        assert piecewise_recovery(MuscleGroup.CHEST, 60) == pytest.approx(0.9)
        assert piecewise_recovery(MuscleGroup.CHEST, 100) == 1.0

    def test_lookback_window_and_full_body(self, bench, now, library):
        burpee = make_exercise("Burpee", MuscleGroup.FULL_BODY, Equipment.BODYWEIGHT)
        exercises = {e.id: e for e in library + [burpee]}
        old = make_workout(now - timedelta(days=20), [(bench, [make_set(100, 5)])])
        recent = make_workout(now - timedelta(hours=5), [(burpee, [make_set(0, 20)])])
        assert estimate_recovery([old, recent], exercises, now) == []

    def test_most_recent_session_per_group(self, bench, now, library):
        exercises = {e.id: e for e in library}
        older = make_workout(now - timedelta(hours=50), [(bench, [make_set(100, 5)])])
        newer = make_workout(now - timedelta(hours=30), [(bench, [make_set(100, 5)])])
        (item,) = estimate_recovery([older, newer], exercises, now)
        assert item.muscle is MuscleGroup.CHEST
        assert item.hours_since_training == 30
        assert item.recovered == pytest.approx(0.5)


def _naive(workout):
    """Strip the zone the way SQLite hands timestamps back."""
    workout.started_at = workout.started_at.replace(tzinfo=None)
    if workout.ended_at is not None:
        workout.ended_at = workout.ended_at.replace(tzinfo=None)
    return workout


class TestMixedTimestamps:
    def test_naive_history_with_aware_current_week(self, history, library, settings, now):
        _naive(history[0])
        data = build_dashboard(history, library, now, settings=settings)
        assert data.stats.weekly_volume == 2800
        assert data.stats.volume_trend.text == "+180%"
        assert data.last_workout.id == history[2].id
        assert data.last_workout.pr_count == 6

    def test_naive_newest_workout(self, history, library, settings, now):
        _naive(history[2])
        data = build_dashboard(history, library, now, settings=settings)
        assert data.last_workout.id == history[2].id
        assert data.weekly_volume_by_day == [1500, 0, 1300, 0, 0, 0, 0]
        assert data.latest_pr.exercise_name == "Squat"
        assert {item.muscle for item in data.recovery} == {MuscleGroup.QUADRICEPS, MuscleGroup.BACK}

    def test_recovery_picks_latest_session_across_zones(self, bench, library, now):
        exercises = {e.id: e for e in library}
        older = make_workout(now - timedelta(hours=50), [(bench, [make_set(100, 5)])])
        newer = _naive(make_workout(now - timedelta(hours=30), [(bench, [make_set(100, 5)])]))
        for workouts in ([older, newer], [newer, older]):
            (item,) = estimate_recovery(workouts, exercises, now)
            assert item.hours_since_training == 30
