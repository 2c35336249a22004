import calendar
import datetime
from dataclasses import dataclass
from typing import Mapping

from .config import CALENDAR_WEEKS
from .utils import date_key

WEEKDAY_HEADERS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
GRID_SIZE = CALENDAR_WEEKS * 7


@dataclass(frozen=True)
class CalendarCell:
    date: str | None = None
    day: int | None = None
    count: int = 0
    is_today: bool = False

    @property
    def is_empty(self) -> bool:
        return self.date is None


def build_month_grid(
    history: Mapping[str, int],
    year: int,
    month: int,
    today: datetime.date,
) -> list[CalendarCell]:
    """Lay out a month as 6 Monday-first weeks of 7 cells.

    Leading cells before the 1st and trailing cells after the last day are
    empty. Counts are looked up by ISO date key; missing days count 0.
    """
    first_weekday, days_in_month = calendar.monthrange(year, month)

    cells = [CalendarCell() for _ in range(first_weekday)]
    for d in range(1, days_in_month + 1):
        day = datetime.date(year, month, d)
        key = date_key(day)
        cells.append(
            CalendarCell(
                date=key,
                day=d,
                count=int(history.get(key, 0)),
                is_today=(day == today),
            )
        )

    while len(cells) < GRID_SIZE:
        cells.append(CalendarCell())
    return cells


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    y, m = divmod(year * 12 + (month - 1) + delta, 12)
    return y, m + 1


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"
