"""ORM models - import all so Base.metadata is complete for migrations."""

from wodlog.models.movement import Movement
from wodlog.models.template import TemplateMovement, TemplateWOD, WorkoutTemplate
from wodlog.models.wod import WOD
from wodlog.models.workout import LoggedWorkout, MovementPerformance, WODPerformance

__all__ = [
    "LoggedWorkout",
    "Movement",
    "MovementPerformance",
    "TemplateMovement",
    "TemplateWOD",
    "WOD",
    "WODPerformance",
    "WorkoutTemplate",
]
