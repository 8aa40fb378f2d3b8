"""Sample project used by the CLI demo and tests."""

from datetime import datetime, timedelta
from typing import List, Optional

from ganttiek.scheduler.models import Task


def sample_tasks(today: Optional[datetime] = None) -> List[Task]:
    """Four-phase demo project anchored at the start of ``today``.

    Resolves to Analysis[0,3], Design[4,9], Implementation[9,17] and
    Testing[19,25] in days from the anchor.
    """
    anchor = (today or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)

    def day(n: int) -> datetime:
        return anchor + timedelta(days=n)

    analysis = Task(name="Analysis", planned_start=day(0), planned_end=day(3))
    design = Task(
        name="Design",
        planned_start=day(2),
        planned_end=day(7),
        predecessor_id=analysis.id,
        lag_days=1,
    )
    implementation = Task(
        name="Implementation",
        planned_start=day(6),
        planned_end=day(14),
        predecessor_id=design.id,
        lag_days=0,
    )
    testing = Task(
        name="Testing",
        planned_start=day(12),
        planned_end=day(18),
        predecessor_id=implementation.id,
        lag_days=2,
    )
    return [analysis, design, implementation, testing]
