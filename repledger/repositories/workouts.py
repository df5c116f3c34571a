"""Workout persistence. Reads always load exercises and sets eagerly."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from repledger.core.exceptions import NotFoundError
from repledger.models.workout import Workout, WorkoutExercise

logger = logging.getLogger(__name__)


def _with_children() -> Select:
    return select(Workout).options(selectinload(Workout.exercises).selectinload(WorkoutExercise.sets))


class WorkoutRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, workout: Workout) -> Workout:
        """Persist a new workout with everything it owns."""
        self.session.add(workout)
        await self.session.flush()
        logger.info("Saved workout %s (%d exercises)", workout.id, len(workout.exercises))
        return workout

    async def get(self, workout_id: uuid.UUID) -> Workout:
        result = await self.session.execute(_with_children().where(Workout.id == workout_id))
        workout = result.scalar_one_or_none()
        if workout is None:
            raise NotFoundError("Workout", workout_id)
        return workout

    async def list_all(self) -> list[Workout]:
        result = await self.session.execute(_with_children().order_by(Workout.started_at.desc()))
        return list(result.scalars().all())

    async def get_in_progress(self) -> Workout | None:
        """The most recently started unfinished workout, if any."""
        result = await self.session.execute(
            _with_children()
            .where(Workout.ended_at.is_(None))
            .order_by(Workout.started_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_finished(self, start: datetime | None = None, end: datetime | None = None) -> list[Workout]:
        """Finished workouts with ``start <= started_at < end``, newest first."""
        stmt = _with_children().where(Workout.ended_at.is_not(None))
        if start is not None:
            stmt = stmt.where(Workout.started_at >= start)
        if end is not None:
            stmt = stmt.where(Workout.started_at < end)
        result = await self.session.execute(stmt.order_by(Workout.started_at.desc()))
        return list(result.scalars().all())

    async def list_containing_exercise(self, exercise_id: uuid.UUID) -> list[Workout]:
        result = await self.session.execute(
            _with_children()
            .where(Workout.exercises.any(WorkoutExercise.exercise_id == exercise_id))
            .order_by(Workout.started_at.desc())
        )
        return list(result.scalars().all())

    async def delete(self, workout_id: uuid.UUID) -> None:
        """Delete a workout with its exercises and sets."""
        # Loaded with children so the ORM cascade reaches them
        workout = await self.get(workout_id)
        await self.session.delete(workout)
        await self.session.flush()
        logger.info("Deleted workout %s", workout_id)
