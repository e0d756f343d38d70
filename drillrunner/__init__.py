"""Run, verify and track small programming exercises from the terminal."""

__version__ = "5.5.1"
__all__ = ["cli", "exercise", "project", "run", "ui", "verify", "watch"]