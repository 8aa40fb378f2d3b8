"""CLI for the Ganttiek scheduler."""

import argparse
import logging
import sys
from typing import List

from dotenv import load_dotenv

from ganttiek.core.config import load_app_config, load_scheduler_config
from ganttiek.core.task_input import load_tasks_file
from ganttiek.scheduler.dependency_resolver import CycleDetectedError
from ganttiek.scheduler.models import ResolvedTask
from ganttiek.scheduler.sample_data import sample_tasks
from ganttiek.scheduler.scheduler_service import SchedulerService
from ganttiek.scheduler.time_units import TimeUnit

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_service(args) -> SchedulerService:
    scheduler_config = load_scheduler_config(getattr(args, "config", None))
    time_unit = TimeUnit(args.unit) if getattr(args, "unit", None) else scheduler_config.time_unit
    return SchedulerService(
        time_unit=time_unit,
        fallback_on_cycle=scheduler_config.fallback_on_cycle,
    )


def print_schedule(items: List[ResolvedTask]):
    """Print resolved tasks as a table."""
    names = {item.id: item.name for item in items}
    width = max([len(item.name) for item in items] + [4])

    print(f"\n{'Task':<{width}}  {'Start':<16}  {'End':<16}  Depends on")
    for item in items:
        depends = ""
        if item.predecessor_id is not None:
            depends = names.get(item.predecessor_id, str(item.predecessor_id))
            if item.task.lag_days:
                depends += f" (+{item.task.lag_days})"
        print(
            f"{item.name:<{width}}  "
            f"{item.scheduled_start:%Y-%m-%d %H:%M}  "
            f"{item.scheduled_end:%Y-%m-%d %H:%M}  "
            f"{depends}"
        )


def cmd_sample(args):
    """Sample command handler."""
    load_dotenv()
    setup_logging(load_app_config().log_level)

    service = _build_service(args)
    result = service.schedule(sample_tasks())

    print(f"Sample project ({service.time_unit.value} units)")
    print_schedule(result.items)


def cmd_resolve(args):
    """Resolve command handler."""
    load_dotenv()
    setup_logging(load_app_config().log_level)

    service = _build_service(args)
    try:
        tasks = load_tasks_file(args.file)
    except ValueError as e:
        print(f"Error: invalid task file {args.file}: {e}", file=sys.stderr)
        sys.exit(1)
    logger.info("Loaded %d tasks from %s", len(tasks), args.file)

    try:
        result = service.schedule(tasks, fallback_on_cycle=False if args.strict else None)
    except CycleDetectedError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if result.has_cycle:
        print(f"Warning: {result.error}; showing planned windows", file=sys.stderr)

    print_schedule(result.items)
    print(f"\nScheduled {len(result.items)} tasks in {result.schedule_time_ms}ms")


def cmd_serve(args):
    """Serve command handler."""
    import uvicorn

    load_dotenv()
    app_config = load_app_config()
    setup_logging(app_config.log_level)

    uvicorn.run(
        "ganttiek.api.main:app",
        host=args.host or app_config.host,
        port=args.port or app_config.port,
        log_level=app_config.log_level.lower(),
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Ganttiek - Dependency-aware task scheduler"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    units = [u.value for u in TimeUnit]

    # Sample command
    sample_parser = subparsers.add_parser("sample", help="Resolve the sample project")
    sample_parser.add_argument(
        "--unit", "-u",
        choices=units,
        help="Time unit (defaults to the configured one)",
    )
    sample_parser.add_argument(
        "--config", "-c",
        help="Path to scheduler config file",
        default=None,
    )
    sample_parser.set_defaults(func=cmd_sample)

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve tasks from a YAML/JSON file")
    resolve_parser.add_argument("file", help="Task file")
    resolve_parser.add_argument(
        "--unit", "-u",
        choices=units,
        help="Time unit (defaults to the configured one)",
    )
    resolve_parser.add_argument(
        "--config", "-c",
        help="Path to scheduler config file",
        default=None,
    )
    resolve_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on dependency cycles instead of showing planned windows",
    )
    resolve_parser.set_defaults(func=cmd_resolve)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", "-p", type=int, default=None)
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
