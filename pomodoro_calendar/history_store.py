import os
import json
import threading

from .errors import HistoryStoreError
from .utils import ensure_dir


class HistoryStore:
    """JSON-file persistence for the per-day pomodoro counts.

    The file holds a single object, ``{"counts": {"YYYY-MM-DD": n, ...}}``.
    Writes go to a sibling ``.tmp`` file first and are moved into place with
    ``os.replace`` so a failed write leaves the previous file untouched.
    """

    def __init__(self, path: str):
        self._path = path
        self._lock = threading.Lock()

    def load(self) -> dict[str, int]:
        if not os.path.exists(self._path):
            return {}
        try:
            with self._lock:
                with open(self._path, "r", encoding="utf-8") as f:
                    data = json.load(f)
        except (OSError, ValueError) as e:
            raise HistoryStoreError(f"Cannot read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise HistoryStoreError(f"Expected a JSON object in {self._path}")
        counts = data.get("counts", {})
        if not isinstance(counts, dict):
            raise HistoryStoreError(f"'counts' is not an object in {self._path}")

        cleaned: dict[str, int] = {}
        for k, v in counts.items():
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise HistoryStoreError(f"Invalid count for {k!r}: {v!r}")
            cleaned[str(k)] = v
        return cleaned

    def save(self, counts: dict[str, int]) -> None:
        data = {"counts": {str(k): int(v) for k, v in counts.items()}}
        tmp_path = self._path + ".tmp"
        with self._lock:
            try:
                ensure_dir(os.path.dirname(self._path))
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self._path)
            except OSError as e:
                raise HistoryStoreError(f"Cannot write {self._path}: {e}") from e
