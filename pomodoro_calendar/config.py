import os

APP_TITLE = "Pomodoro Calendar"
LOGGER_NAME = "PomodoroCalendar"
APPDATA_DIR = os.getenv("POMODORO_CALENDAR_HOME") or os.path.join(
    os.getenv("APPDATA") or os.path.expanduser("~"), "PomodoroCalendar"
)

DATA_FILE = os.path.join(APPDATA_DIR, "pomodoro_counts.json")

LOG_DIR = os.path.join(APPDATA_DIR, "logs")
LOG_FILE = os.path.join(LOG_DIR, "pomodoro_calendar.log")

# Session lengths (seconds)
WORK_DURATION_SEC = 25 * 60
SHORT_BREAK_DURATION_SEC = 5 * 60
LONG_BREAK_DURATION_SEC = 15 * 60

LONG_BREAK_EVERY = 4

TICK_INTERVAL_MS = 1000
GRACE_DELAY_MS = 1000

# Chimes
WORK_END_NOTES_HZ = (523.25, 659.25, 784.00, 1046.50)
BREAK_END_NOTES_HZ = (1046.50, 784.00, 659.25, 523.25)
CHIME_NOTE_MS = 180
CHIME_VOLUME = 0.5
SAMPLE_RATE = 44100

CALENDAR_WEEKS = 6
