class PomodoroError(Exception):
    """Base class for errors raised by the pomodoro core."""


class HistoryStoreError(PomodoroError):
    """The count history could not be read from or written to disk."""
