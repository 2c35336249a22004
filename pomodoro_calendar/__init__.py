"""Pomodoro timer with a per-day completion calendar."""

__version__ = "1.0.0"
