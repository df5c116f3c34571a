"""Workout template - named, ordered list of exercise references."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from repledger.db.base import Base
from repledger.models.exercise import Exercise

logger = logging.getLogger(__name__)


class Template(Base):
    """Saved workout structure.

    Exercises are referenced by id, not owned: deleting an exercise leaves the
    template intact and the missing id is skipped when resolving. The same id
    may appear more than once.
    """

    __tablename__ = "templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # JSON list of UUID strings; list order is the workout-generation order
    exercise_id_values: Mapped[list[str]] = mapped_column(
        "ordered_exercise_ids", JSON, default=list, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    def __init__(
        self,
        *,
        name: str,
        ordered_exercise_ids: Iterable[uuid.UUID] = (),
        id: uuid.UUID | None = None,
        created_at: datetime | None = None,
        last_used_at: datetime | None = None,
    ):
        super().__init__(
            id=id or uuid.uuid4(),
            name=name,
            exercise_id_values=[str(x) for x in ordered_exercise_ids],
            created_at=created_at or datetime.now(timezone.utc),
            last_used_at=last_used_at,
        )

    @property
    def ordered_exercise_ids(self) -> list[uuid.UUID]:
        return [uuid.UUID(x) for x in self.exercise_id_values or []]

    @ordered_exercise_ids.setter
    def ordered_exercise_ids(self, ids: Iterable[uuid.UUID]) -> None:
        # Reassign (not mutate) so the JSON column is flagged dirty
        self.exercise_id_values = [str(x) for x in ids]

    def resolve_exercises(self, library: Mapping[uuid.UUID, Exercise] | Iterable[Exercise]) -> list[Exercise]:
        """Referenced exercises in template order; ids with no match are skipped."""
        by_id = library if isinstance(library, Mapping) else {e.id: e for e in library}
        resolved = []
        for exercise_id in self.ordered_exercise_ids:
            exercise = by_id.get(exercise_id)
            if exercise is None:
                logger.debug("Template %s references missing exercise %s; skipping", self.id, exercise_id)
                continue
            resolved.append(exercise)
        return resolved

    def touch(self, now: datetime | None = None) -> None:
        """Record that the template was used to start a workout."""
        self.last_used_at = now or datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return f"Template(id={self.id!s}, name={self.name!r})"
