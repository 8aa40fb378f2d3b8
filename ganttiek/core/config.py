"""Configuration management for Ganttiek."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

from ganttiek.scheduler.time_units import TimeUnit

DEFAULT_CONFIG_PATH = "config/scheduler.yaml"


class SchedulerConfig(BaseModel):
    """Scheduler configuration."""
    time_unit: TimeUnit = TimeUnit.DAY
    fallback_on_cycle: bool = True


class AppConfig(BaseModel):
    """Application configuration."""
    config_path: str | None = None
    host: str = "0.0.0.0"
    port: int = 5230
    log_level: str = "INFO"


def load_scheduler_config(config_path: str | None = None) -> SchedulerConfig:
    """Load scheduler configuration from YAML file.

    An explicitly named file must exist. When no path is given and the default
    file is absent, defaults are used.
    """
    explicit = config_path is not None or "GANTTIEK_CONFIG_PATH" in os.environ
    if config_path is None:
        config_path = os.getenv("GANTTIEK_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Scheduler config not found: {config_path}")
        return SchedulerConfig()

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    return SchedulerConfig(**data)


def load_app_config() -> AppConfig:
    """Load application configuration from environment variables."""
    return AppConfig(
        config_path=os.getenv("GANTTIEK_CONFIG_PATH"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5230")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
