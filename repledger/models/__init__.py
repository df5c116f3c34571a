"""ORM models - import all so Base.metadata is complete."""

from repledger.models.exercise import Exercise
from repledger.models.template import Template
from repledger.models.workout import SetEntry, Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "SetEntry",
    "Template",
    "Workout",
    "WorkoutExercise",
]
