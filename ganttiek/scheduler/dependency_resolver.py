"""Dependency Resolver - Finish-to-start scheduling with cycle detection."""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ganttiek.scheduler.models import PredecessorId, ResolvedTask, Task, TaskId
from ganttiek.scheduler.time_units import TimeUnit

logger = logging.getLogger(__name__)

Window = Tuple[datetime, datetime]


class SchedulerError(Exception):
    """Base class for scheduling failures."""


class CycleDetectedError(SchedulerError):
    """A predecessor chain revisits a task already on the resolution path."""

    def __init__(self, task_id: TaskId, path: Sequence[TaskId] = ()):
        self.task_id = task_id
        self.path: List[TaskId] = list(path) or [task_id]
        super().__init__(
            "Dependency cycle detected: " + " -> ".join(str(p) for p in self.path)
        )


class DependencyResolver:
    """Resolves planned task windows against their predecessor chains."""

    def __init__(self, time_unit: TimeUnit = TimeUnit.DAY):
        """Initialize resolver.

        Args:
            time_unit: Unit applied to durations, lag and window snapping
        """
        self.time_unit = time_unit

    def resolve(self, tasks: Iterable[Task]) -> List[ResolvedTask]:
        """Compute scheduled windows for all tasks.

        A task starts at the later of its planned start and its predecessor's
        scheduled end plus lag. A predecessor id that names no task in the
        batch is ignored. Task ids must be unique; duplicates are not
        detected.

        The walk is iterative: each task is visited at most once before it is
        memoized, so a long predecessor chain costs no recursion depth.

        Args:
            tasks: Tasks to schedule (never mutated)

        Returns:
            Resolved tasks sorted by (scheduled_start, name)

        Raises:
            CycleDetectedError: On the first cycle found; no partial result
        """
        task_list = list(tasks)
        positions: Dict[TaskId, int] = {t.id: i for i, t in enumerate(task_list)}
        predecessors = [self._predecessor_position(t, positions) for t in task_list]
        memo: List[Optional[Window]] = [None] * len(task_list)

        for root in range(len(task_list)):
            if memo[root] is not None:
                continue

            # Follow the predecessor chain down to a memoized or unconstrained task.
            path: List[int] = []
            visiting: Set[int] = set()
            current: Optional[int] = root
            while current is not None and memo[current] is None:
                if current in visiting:
                    cycle = [task_list[i].id for i in path[path.index(current):]]
                    cycle.append(task_list[current].id)
                    logger.warning("Dependency cycle detected at task %s", task_list[current].id)
                    raise CycleDetectedError(task_list[current].id, cycle)

                visiting.add(current)
                path.append(current)
                current = predecessors[current]

            # Unwind: predecessors first.
            for index in reversed(path):
                pred_index = predecessors[index]
                pred_window = memo[pred_index] if pred_index is not None else None
                memo[index] = self._window(task_list[index], pred_window)

        resolved = [
            ResolvedTask(
                id=task.id,
                task=task,
                scheduled_start=window[0],
                scheduled_end=window[1],
            )
            for task, window in zip(task_list, memo)
        ]
        resolved.sort(key=lambda r: (r.scheduled_start, r.task.name))
        return resolved

    def _predecessor_position(
        self,
        task: Task,
        positions: Dict[TaskId, int],
    ) -> Optional[int]:
        """Index of the task's predecessor, or None when unconstrained."""
        predecessor = task.predecessor
        if not isinstance(predecessor, PredecessorId):
            return None

        position = positions.get(predecessor.id)
        if position is None:
            logger.debug(
                "Task %s references missing predecessor %s; scheduling at planned start",
                task.id,
                predecessor.id,
            )
        return position

    def _window(self, task: Task, pred_window: Optional[Window]) -> Window:
        """Scheduled (start, end) for a task given its predecessor's window."""
        unit = self.time_unit
        duration = task.duration_in(unit)
        start = unit.floor(task.planned_start)

        if pred_window is not None:
            earliest_start = unit.add(pred_window[1], task.lag_days)
            start = max(start, earliest_start)

        return start, unit.add(start, duration)
