"""Exercise library persistence."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from repledger.core.enums import MuscleGroup
from repledger.core.exceptions import NotFoundError
from repledger.models.exercise import Exercise
from repledger.schemas.exercise import ExerciseCreate, ExerciseUpdate

logger = logging.getLogger(__name__)


class ExerciseRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payload: ExerciseCreate) -> Exercise:
        exercise = Exercise(
            name=payload.name.strip(),
            muscle_group=payload.muscle_group,
            equipment=payload.equipment,
            notes=payload.notes,
            is_custom=payload.is_custom,
        )
        self.session.add(exercise)
        await self.session.flush()
        logger.info("Created exercise %s (%s)", exercise.id, exercise.name)
        return exercise

    async def get(self, exercise_id: uuid.UUID) -> Exercise:
        exercise = await self.session.get(Exercise, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        return exercise

    async def list_all(self) -> list[Exercise]:
        result = await self.session.execute(select(Exercise).order_by(Exercise.name))
        return list(result.scalars().all())

    async def list_by_muscle_group(self, muscle_group: MuscleGroup) -> list[Exercise]:
        result = await self.session.execute(
            select(Exercise)
            .where(Exercise.muscle_group_raw == MuscleGroup(muscle_group).value)
            .order_by(Exercise.name)
        )
        return list(result.scalars().all())

    async def search(self, query: str) -> list[Exercise]:
        """Case-insensitive substring match on the name; a blank query lists everything."""
        query = query.strip()
        if not query:
            return await self.list_all()
        result = await self.session.execute(
            select(Exercise)
            .where(Exercise.name.icontains(query, autoescape=True))
            .order_by(Exercise.name)
        )
        return list(result.scalars().all())

    async def update(self, exercise_id: uuid.UUID, payload: ExerciseUpdate) -> Exercise:
        exercise = await self.get(exercise_id)
        data = payload.model_dump(exclude_unset=True)
        if data.get("name") is not None:
            exercise.name = data["name"].strip()
        if data.get("muscle_group") is not None:
            exercise.muscle_group = data["muscle_group"]
        if data.get("equipment") is not None:
            exercise.equipment = data["equipment"]
        if data.get("notes") is not None:
            exercise.notes = data["notes"]
        await self.session.flush()
        return exercise

    async def seed_if_empty(self, exercises: Iterable[Exercise]) -> int:
        """Insert the built-in library on first run. Returns how many were added."""
        existing = await self.session.scalar(select(func.count()).select_from(Exercise))
        if existing:
            return 0
        seeded = list(exercises)
        self.session.add_all(seeded)
        await self.session.flush()
        logger.info("Seeded %d exercises", len(seeded))
        return len(seeded)
