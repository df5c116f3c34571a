"""Derived training metrics for sets, workout exercises and workouts.

Every quantity that can be undefined is returned as ``None`` rather than a
sentinel; nothing here raises on missing data. A set is *counted* only when it
is completed and has both weight and reps.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, TypeVar

from repledger.core.constants import EPLEY_REP_DIVISOR, SECONDS_PER_HOUR

if TYPE_CHECKING:
    from repledger.models.workout import SetEntry

T = TypeVar("T")


def estimated_one_rep_max(weight: float | None, reps: int | None) -> float | None:
    """Epley e1RM = weight * (1 + reps/30).

    A single rep is already a max effort, so it returns the weight unchanged.
    """
    if weight is None or reps is None or reps <= 0:
        return None
    if reps == 1:
        return float(weight)
    return float(weight) * (1 + reps / EPLEY_REP_DIVISOR)


def set_volume(weight: float | None, reps: int | None) -> float | None:
    if weight is None or reps is None:
        return None
    return float(weight) * reps


def is_counted(s: SetEntry) -> bool:
    return s.is_completed and s.weight is not None and s.reps is not None


def ordered(items: Iterable[T]) -> list[T]:
    """Stable sort by ``order_index`` ascending (the canonical read order)."""
    return sorted(items, key=lambda x: x.order_index)


def total_volume(sets: Iterable[SetEntry]) -> float:
    """Sum of weight × reps over counted sets; anything else contributes 0."""
    return sum((float(s.weight) * s.reps for s in sets if is_counted(s)), 0.0)


def completed_set_count(sets: Iterable[SetEntry]) -> int:
    """Completed sets, whether or not weight/reps were filled in."""
    return sum(1 for s in sets if s.is_completed)


def best_set(sets: Iterable[SetEntry]) -> SetEntry | None:
    """Counted set with the highest e1RM; the lowest order index wins ties."""
    best: SetEntry | None = None
    best_e1rm = 0.0
    for s in ordered(sets):
        if not is_counted(s):
            continue
        e1rm = estimated_one_rep_max(s.weight, s.reps) or 0.0
        if best is None or e1rm > best_e1rm:
            best, best_e1rm = s, e1rm
    return best


def as_utc(value: datetime) -> datetime:
    """Aware timestamp for ordering; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _comparable(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    """Treat naive timestamps as UTC when mixed with aware ones."""
    if (a.tzinfo is None) != (b.tzinfo is None):
        if a.tzinfo is None:
            a = a.replace(tzinfo=timezone.utc)
        else:
            b = b.replace(tzinfo=timezone.utc)
    return a, b


def duration(started_at: datetime, ended_at: datetime | None, now: datetime | None = None) -> timedelta:
    """Elapsed session time; live (``now - start``) while in progress. Never negative."""
    end = ended_at
    if end is None:
        end = now or datetime.now(timezone.utc)
    end, start = _comparable(end, started_at)
    return max(timedelta(0), end - start)


def hours_between(earlier: datetime, later: datetime) -> int:
    """Whole hours elapsed (truncated), zero for future timestamps."""
    later, earlier = _comparable(later, earlier)
    return max(0, int((later - earlier).total_seconds() // SECONDS_PER_HOUR))


def format_duration(seconds: float) -> str:
    """Compact duration: ``"1h 45m"`` or ``"45m"``."""
    total = int(seconds)
    hours, minutes = total // 3600, (total % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_live_duration(seconds: float) -> str:
    """Running timer: ``"HH:MM:SS"``."""
    total = int(seconds)
    return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def renumber(items: Sequence[T]) -> None:
    """Rewrite ``order_index`` to be dense and 0-based in the given order."""
    for i, item in enumerate(items):
        item.order_index = i


def local_time(value: datetime, reference: datetime) -> datetime:
    """Express ``value`` in the zone of ``reference`` (naive values are taken as UTC)."""
    if reference.tzinfo is None:
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(reference.tzinfo)


def week_start(now: datetime) -> datetime:
    """Midnight of the Monday that starts ``now``'s calendar week."""
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)
