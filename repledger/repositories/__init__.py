"""Async persistence for the entity graph."""

from repledger.repositories.dashboard import load_dashboard
from repledger.repositories.exercises import ExerciseRepository
from repledger.repositories.templates import TemplateRepository
from repledger.repositories.workouts import WorkoutRepository

__all__ = [
    "ExerciseRepository",
    "TemplateRepository",
    "WorkoutRepository",
    "load_dashboard",
]
