"""Data models for the scheduler - Task, predecessor reference, ResolvedTask."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Hashable, Optional, Union
from uuid import uuid4

from ganttiek.scheduler.time_units import TimeUnit

TaskId = Hashable


def generate_task_id() -> str:
    """Generate a task ID."""
    return str(uuid4())


@dataclass(frozen=True)
class NoPredecessor:
    """The task is unconstrained and keeps its planned start."""


@dataclass(frozen=True)
class PredecessorId:
    """Finish-to-start reference to another task by id."""

    id: TaskId


Predecessor = Union[NoPredecessor, PredecessorId]

NO_PREDECESSOR = NoPredecessor()


@dataclass(frozen=True)
class Task:
    """A schedulable unit with a planned window and at most one predecessor.

    ``lag_days`` is counted in the scheduler's time unit (days by default,
    quarter-days when the scheduler runs at 6-hour granularity).
    """

    name: str
    planned_start: datetime
    planned_end: datetime
    id: TaskId = field(default_factory=generate_task_id)
    predecessor_id: Optional[TaskId] = None
    lag_days: int = 0

    @property
    def predecessor(self) -> Predecessor:
        """Predecessor as a sum type."""
        if self.predecessor_id is None:
            return NO_PREDECESSOR
        return PredecessorId(self.predecessor_id)

    @property
    def clamped_end(self) -> datetime:
        """Planned end, never before the planned start."""
        return max(self.planned_start, self.planned_end)

    @property
    def duration_days(self) -> int:
        """Planned length in whole days (at least one)."""
        return self.duration_in(TimeUnit.DAY)

    def duration_in(self, unit: TimeUnit) -> int:
        """Planned length in whole units of ``unit``, at least one."""
        start = unit.floor(self.planned_start)
        end = unit.ceil(self.clamped_end)
        return max(unit.between(start, end), 1)


@dataclass(frozen=True)
class ResolvedTask:
    """Dependency-consistent window computed for a task."""

    id: TaskId
    task: Task
    scheduled_start: datetime
    scheduled_end: datetime

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def predecessor_id(self) -> Optional[TaskId]:
        return self.task.predecessor_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.task.name,
            "predecessor_id": self.task.predecessor_id,
            "lag_days": self.task.lag_days,
            "planned_start": self.task.planned_start.isoformat(),
            "planned_end": self.task.planned_end.isoformat(),
            "scheduled_start": self.scheduled_start.isoformat(),
            "scheduled_end": self.scheduled_end.isoformat(),
        }
