"""Scheduler module - Dependency-aware task window resolution."""

from ganttiek.scheduler.time_units import TimeUnit
from ganttiek.scheduler.models import NoPredecessor, PredecessorId, ResolvedTask, Task
from ganttiek.scheduler.dependency_resolver import (
    CycleDetectedError,
    DependencyResolver,
    SchedulerError,
)
from ganttiek.scheduler.scheduler_service import ScheduleResult, SchedulerService

__all__ = [
    "TimeUnit",
    "Task",
    "ResolvedTask",
    "NoPredecessor",
    "PredecessorId",
    "DependencyResolver",
    "CycleDetectedError",
    "SchedulerError",
    "SchedulerService",
    "ScheduleResult",
]
