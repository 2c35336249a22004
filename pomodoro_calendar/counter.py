import datetime
import logging
import threading
from types import MappingProxyType
from typing import Callable, Mapping

from .config import LOGGER_NAME
from .errors import HistoryStoreError
from .history_store import HistoryStore
from .utils import date_key


class DailyCounter:
    """Completed work sessions per day, written through to a HistoryStore."""

    def __init__(
        self,
        store: HistoryStore,
        logger: logging.Logger | None = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self._store = store
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._today = today
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def load(self) -> None:
        try:
            counts = self._store.load()
        except HistoryStoreError as e:
            self._logger.warning(f"History load failed, starting empty: {e}")
            counts = {}
        with self._lock:
            self._counts = dict(counts)
        self._logger.info(f"History loaded days={len(counts)} today={self.today_count()}")

    def today_key(self) -> str:
        return date_key(self._today())

    def today_count(self) -> int:
        key = self.today_key()
        with self._lock:
            return self._counts.get(key, 0)

    def record_completion(self) -> int:
        key = self.today_key()
        with self._lock:
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
            data = dict(self._counts)
        try:
            self._store.save(data)
        except HistoryStoreError:
            self._logger.exception("History save failed, keeping in-memory counts")
        self._logger.info(f"Pomodoro completed date={key} count={count}")
        return count

    def snapshot(self) -> Mapping[str, int]:
        with self._lock:
            return MappingProxyType(dict(self._counts))
