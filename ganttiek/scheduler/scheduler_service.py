"""Scheduler Service - Resolves a task batch and applies the cycle fallback."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ganttiek.scheduler.dependency_resolver import CycleDetectedError, DependencyResolver
from ganttiek.scheduler.models import ResolvedTask, Task, TaskId
from ganttiek.scheduler.time_units import TimeUnit

logger = logging.getLogger(__name__)


@dataclass
class ScheduleResult:
    """Result of scheduling tasks."""

    items: List[ResolvedTask]
    links: List[Tuple[TaskId, TaskId]]
    schedule_time_ms: float
    has_cycle: bool = False
    cycle_tasks: List[TaskId] = field(default_factory=list)
    fallback_used: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "items": [item.to_dict() for item in self.items],
            "links": [
                {"predecessor_id": pred_id, "task_id": task_id}
                for pred_id, task_id in self.links
            ],
            "schedule_time_ms": self.schedule_time_ms,
            "has_cycle": self.has_cycle,
            "cycle_tasks": self.cycle_tasks,
            "fallback_used": self.fallback_used,
            "error": self.error,
        }


def planned_windows(
    tasks: Iterable[Task],
    time_unit: TimeUnit = TimeUnit.DAY,
) -> List[ResolvedTask]:
    """Place every task at its own planned window, ignoring dependencies.

    Windows are snapped to ``time_unit`` boundaries like resolved ones.
    """
    return [
        ResolvedTask(
            id=t.id,
            task=t,
            scheduled_start=time_unit.floor(t.planned_start),
            scheduled_end=time_unit.ceil(t.clamped_end),
        )
        for t in tasks
    ]


def dependency_links(items: Iterable[ResolvedTask]) -> List[Tuple[TaskId, TaskId]]:
    """(predecessor_id, task_id) pairs whose predecessor is part of the batch."""
    items = list(items)
    known = {item.id for item in items}
    return [
        (item.predecessor_id, item.id)
        for item in items
        if item.predecessor_id is not None and item.predecessor_id in known
    ]


class SchedulerService:
    """Main service for task scheduling."""

    def __init__(
        self,
        time_unit: TimeUnit = TimeUnit.DAY,
        fallback_on_cycle: bool = True,
    ):
        """Initialize scheduler service.

        Args:
            time_unit: Scheduling granularity
            fallback_on_cycle: Return planned windows instead of raising on a cycle
        """
        self.time_unit = time_unit
        self.fallback_on_cycle = fallback_on_cycle
        self.resolver = DependencyResolver(time_unit=time_unit)

    def schedule(
        self,
        tasks: List[Task],
        fallback_on_cycle: Optional[bool] = None,
    ) -> ScheduleResult:
        """Schedule a list of tasks.

        Args:
            tasks: Tasks to schedule
            fallback_on_cycle: Override the service default for this call

        Returns:
            ScheduleResult with resolved windows and connector links

        Raises:
            CycleDetectedError: If a cycle is found and fallback is disabled
        """
        start_time = time.time()
        use_fallback = self.fallback_on_cycle if fallback_on_cycle is None else fallback_on_cycle

        try:
            items = self.resolver.resolve(tasks)
        except CycleDetectedError as e:
            if not use_fallback:
                raise

            logger.warning("%s; falling back to planned windows", e)
            items = planned_windows(tasks, self.time_unit)
            schedule_time_ms = (time.time() - start_time) * 1000
            return ScheduleResult(
                items=items,
                links=dependency_links(items),
                schedule_time_ms=round(schedule_time_ms, 2),
                has_cycle=True,
                cycle_tasks=e.path,
                fallback_used=True,
                error=str(e),
            )

        schedule_time_ms = (time.time() - start_time) * 1000
        logger.debug("Scheduled %d tasks in %.2fms", len(items), schedule_time_ms)

        return ScheduleResult(
            items=items,
            links=dependency_links(items),
            schedule_time_ms=round(schedule_time_ms, 2),
        )
