"""FastAPI application for the Ganttiek scheduler."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ganttiek import __version__
from ganttiek.core.config import load_app_config, load_scheduler_config
from ganttiek.core.task_input import TaskInput
from ganttiek.scheduler.dependency_resolver import CycleDetectedError
from ganttiek.scheduler.scheduler_service import ScheduleResult, SchedulerService
from ganttiek.scheduler.time_units import TimeUnit

load_dotenv()

logger = logging.getLogger(__name__)

# Global instances
scheduler_service: Optional[SchedulerService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global scheduler_service

    app_config = load_app_config()
    scheduler_config = load_scheduler_config(app_config.config_path)

    logging.basicConfig(
        level=getattr(logging, app_config.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    scheduler_service = SchedulerService(
        time_unit=scheduler_config.time_unit,
        fallback_on_cycle=scheduler_config.fallback_on_cycle,
    )
    logger.info("Scheduler initialized (time_unit=%s)", scheduler_config.time_unit.value)

    yield

    logger.info("Shutting down scheduler...")
    scheduler_service = None


app = FastAPI(
    title="Ganttiek Scheduler",
    description="Dependency-aware task scheduling API",
    version=__version__,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    time_unit: str


class ScheduleRequest(BaseModel):
    """Request for schedule endpoint."""
    tasks: List[TaskInput]
    time_unit: Optional[TimeUnit] = None


class ScheduledTaskResponse(BaseModel):
    """A task with its resolved window."""
    id: str
    name: str
    predecessor_id: Optional[str]
    lag_days: int
    planned_start: datetime
    planned_end: datetime
    scheduled_start: datetime
    scheduled_end: datetime


class LinkResponse(BaseModel):
    """A predecessor -> successor connector."""
    predecessor_id: str
    task_id: str


class ScheduleResponse(BaseModel):
    """Response from schedule endpoint."""
    items: List[ScheduledTaskResponse]
    links: List[LinkResponse]
    schedule_time_ms: float
    has_cycle: bool
    cycle_tasks: List[str]
    fallback_used: bool
    error: Optional[str] = None


def _service_for(request: ScheduleRequest) -> SchedulerService:
    if scheduler_service is None:
        raise HTTPException(status_code=503, detail="Scheduler service not initialized")

    if not request.tasks:
        raise HTTPException(status_code=400, detail="Tasks list cannot be empty")

    if request.time_unit is None or request.time_unit == scheduler_service.time_unit:
        return scheduler_service
    return SchedulerService(
        time_unit=request.time_unit,
        fallback_on_cycle=scheduler_service.fallback_on_cycle,
    )


def _to_response(result: ScheduleResult) -> ScheduleResponse:
    data = result.to_dict()
    return ScheduleResponse(
        items=[ScheduledTaskResponse(**item) for item in data["items"]],
        links=[LinkResponse(**link) for link in data["links"]],
        schedule_time_ms=data["schedule_time_ms"],
        has_cycle=data["has_cycle"],
        cycle_tasks=[str(t) for t in data["cycle_tasks"]],
        fallback_used=data["fallback_used"],
        error=data["error"],
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    if scheduler_service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")

    return HealthResponse(
        status="healthy",
        time_unit=scheduler_service.time_unit.value,
    )


@app.post("/schedule", response_model=ScheduleResponse)
async def schedule(request: ScheduleRequest):
    """Resolve task windows against their predecessors.

    On a dependency cycle the tasks are returned at their planned windows
    with ``has_cycle`` set, so a chart can still be drawn.
    """
    service = _service_for(request)
    tasks = [t.to_task() for t in request.tasks]

    result = service.schedule(tasks, fallback_on_cycle=True)
    return _to_response(result)


@app.post("/schedule/strict", response_model=ScheduleResponse)
async def schedule_strict(request: ScheduleRequest):
    """Resolve task windows; a dependency cycle is a 409 error."""
    service = _service_for(request)
    tasks = [t.to_task() for t in request.tasks]

    try:
        result = service.schedule(tasks, fallback_on_cycle=False)
    except CycleDetectedError as e:
        raise HTTPException(
            status_code=409,
            detail={"error": str(e), "cycle_tasks": [str(t) for t in e.path]},
        )

    return _to_response(result)


@app.get("/ping")
async def ping():
    """Lightweight health check endpoint.

    Returns a simple pong response without requiring service initialization.
    """
    return {"message": "pong"}
