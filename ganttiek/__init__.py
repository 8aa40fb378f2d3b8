"""Ganttiek - Dependency-aware Gantt task scheduling."""

__version__ = "1.0.0"
