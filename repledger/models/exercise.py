"""Exercise model - library entry (seeded or user-authored)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from repledger.core.enums import Equipment, MuscleGroup
from repledger.db.base import Base


class Exercise(Base):
    """Exercise definition with one muscle group and one equipment type.

    Classifications are stored as raw strings; values this version does not
    know read back as full body / other.
    """

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    muscle_group_raw: Mapped[str] = mapped_column("muscle_group", String(32), nullable=False, index=True)
    equipment_raw: Mapped[str] = mapped_column("equipment", String(32), nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    is_custom: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    def __init__(
        self,
        *,
        name: str,
        muscle_group: MuscleGroup,
        equipment: Equipment,
        notes: str = "",
        is_custom: bool = False,
        id: uuid.UUID | None = None,
        created_at: datetime | None = None,
    ):
        super().__init__(
            id=id or uuid.uuid4(),
            name=name,
            muscle_group_raw=MuscleGroup(muscle_group).value,
            equipment_raw=Equipment(equipment).value,
            notes=notes,
            is_custom=is_custom,
            created_at=created_at or datetime.now(timezone.utc),
        )

    @property
    def muscle_group(self) -> MuscleGroup:
        return MuscleGroup.parse(self.muscle_group_raw)

    @muscle_group.setter
    def muscle_group(self, value: MuscleGroup) -> None:
        self.muscle_group_raw = MuscleGroup(value).value

    @property
    def equipment(self) -> Equipment:
        return Equipment.parse(self.equipment_raw)

    @equipment.setter
    def equipment(self, value: Equipment) -> None:
        self.equipment_raw = Equipment(value).value

    @classmethod
    def seeded(cls, name: str, muscle_group: MuscleGroup, equipment: Equipment, notes: str = "") -> Exercise:
        """Library exercise shipped with the app (not user-authored)."""
        return cls(name=name, muscle_group=muscle_group, equipment=equipment, notes=notes, is_custom=False)

    def __repr__(self) -> str:
        return f"Exercise(id={self.id!s}, name={self.name!r})"
