"""Build the dashboard straight from the database."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from repledger.core.config import Settings
from repledger.repositories.exercises import ExerciseRepository
from repledger.repositories.workouts import WorkoutRepository
from repledger.schemas.dashboard import DashboardData
from repledger.services.dashboard import WorkoutClassifier, build_dashboard
from repledger.services.recovery import RecoveryModel, piecewise_recovery


async def load_dashboard(
    session: AsyncSession,
    now: datetime | None = None,
    *,
    sessions_goal: int | None = None,
    recovery_model: RecoveryModel = piecewise_recovery,
    classify_workout: WorkoutClassifier | None = None,
    settings: Settings | None = None,
) -> DashboardData:
    """Load finished workouts and the exercise library, then aggregate.

    Record detection needs the full history, so every finished workout is read.
    """
    workouts = await WorkoutRepository(session).list_finished()
    exercises = await ExerciseRepository(session).list_all()
    return build_dashboard(
        workouts,
        exercises,
        now,
        sessions_goal=sessions_goal,
        recovery_model=recovery_model,
        classify_workout=classify_workout,
        settings=settings,
    )
