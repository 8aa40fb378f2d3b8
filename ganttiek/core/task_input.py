"""Task input records shared by the HTTP API and the CLI."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ganttiek.scheduler.models import Task


class TaskInput(BaseModel):
    """Input task for scheduling.

    Numeric ids are read as strings. Timezone-aware instants are converted
    to naive UTC so aware and naive input can be compared.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    planned_start: datetime
    planned_end: datetime
    predecessor_id: Optional[str] = None
    lag_days: int = Field(default=0, ge=0)

    @field_validator("planned_start", "planned_end")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def to_task(self) -> Task:
        """Convert to a scheduler Task."""
        return Task(
            id=self.id,
            name=self.name,
            planned_start=self.planned_start,
            planned_end=self.planned_end,
            predecessor_id=self.predecessor_id,
            lag_days=self.lag_days,
        )


def load_tasks_file(path: str | Path) -> List[Task]:
    """Load tasks from a YAML (or JSON) file holding a list of task mappings.

    A top-level mapping with a ``tasks`` key is accepted as well.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Task file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("tasks", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of tasks in {path}")

    return [TaskInput(**item).to_task() for item in data]
