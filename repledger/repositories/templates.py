"""Template persistence, including the free-tier creation limit."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from repledger.core.config import Settings, get_settings
from repledger.core.exceptions import NotFoundError, TemplateLimitReachedError
from repledger.models.template import Template
from repledger.models.workout import Workout
from repledger.schemas.template import TemplateCreate, TemplateUpdate
from repledger.services.feature_gating import can_create_template

logger = logging.getLogger(__name__)


class TemplateRepository:
    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()

    async def count(self) -> int:
        return await self.session.scalar(select(func.count()).select_from(Template)) or 0

    async def _ensure_can_create(self, is_entitled: bool) -> None:
        # Counted at write time: the UI check may be stale
        current = await self.count()
        if not can_create_template(current, is_entitled, self.settings):
            logger.warning("Template limit reached (%d/%d)", current, self.settings.free_template_limit)
            raise TemplateLimitReachedError(current, self.settings.free_template_limit)

    async def create(self, payload: TemplateCreate, *, is_entitled: bool) -> Template:
        await self._ensure_can_create(is_entitled)
        template = Template(name=payload.name.strip(), ordered_exercise_ids=payload.ordered_exercise_ids)
        self.session.add(template)
        await self.session.flush()
        logger.info("Created template %s (%s)", template.id, template.name)
        return template

    async def create_from_workout(self, workout: Workout, name: str, *, is_entitled: bool) -> Template:
        """Save a workout's exercise order as a template."""
        return await self.create(
            TemplateCreate(name=name, ordered_exercise_ids=[we.exercise_id for we in workout.ordered_exercises]),
            is_entitled=is_entitled,
        )

    async def get(self, template_id: uuid.UUID) -> Template:
        template = await self.session.get(Template, template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    async def list_all(self) -> list[Template]:
        """Most recently used first; never-used templates last, newest first."""
        result = await self.session.execute(
            select(Template).order_by(Template.last_used_at.desc().nulls_last(), Template.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, template_id: uuid.UUID, payload: TemplateUpdate) -> Template:
        template = await self.get(template_id)
        if payload.name is not None:
            template.name = payload.name.strip()
        if payload.ordered_exercise_ids is not None:
            template.ordered_exercise_ids = payload.ordered_exercise_ids
        await self.session.flush()
        return template

    async def delete(self, template_id: uuid.UUID) -> None:
        template = await self.get(template_id)
        await self.session.delete(template)
        await self.session.flush()
        logger.info("Deleted template %s", template_id)
