"""Scheduling engine for generating on-call rotas."""

from oncallrota.scheduling.fairness import FairnessTracker
from oncallrota.scheduling.rotation import (
    RotationCursor,
    identity_shuffle,
    make_shuffle,
)
from oncallrota.scheduling.schedule_builder import ScheduleBuilder
from oncallrota.scheduling.scheduler import RotaScheduler
from oncallrota.scheduling.week_assigner import WeekAssigner

__all__ = [
    # Core schedulers
    "RotaScheduler",
    "ScheduleBuilder",
    "WeekAssigner",
    # State
    "FairnessTracker",
    "RotationCursor",
    # Roster ordering
    "identity_shuffle",
    "make_shuffle",
]
