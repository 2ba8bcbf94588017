import threading
from typing import Protocol


class ViewCounter(Protocol):
    def get(self, article_id: int) -> int: ...


class InMemoryViewCounter:
    """Live viewer counts per article, shared by every request of one process."""

    def __init__(self):
        self._counts: dict[int, int] = {}
        self._lock = threading.Lock()

    def get(self, article_id: int) -> int:
        with self._lock:
            return self._counts.get(article_id, 0)

    def increment(self, article_id: int) -> int:
        with self._lock:
            count = self._counts.get(article_id, 0) + 1
            self._counts[article_id] = count
            return count

    def decrement(self, article_id: int) -> int:
        with self._lock:
            count = self._counts.get(article_id, 0) - 1
            if count <= 0:
                self._counts.pop(article_id, None)
                return 0
            self._counts[article_id] = count
            return count
