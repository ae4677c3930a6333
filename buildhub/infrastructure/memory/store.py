"""
In-memory fallback store.

Used when no DATABASE_URL is configured (local/demo mode and tests). One
instance is owned by the app's composition root; tables map primary keys to
model instances and mutations are serialised through a re-entrant lock,
since sync FastAPI routes run on a thread pool.
"""

import itertools
import threading
from collections import defaultdict
from typing import Any, Dict


class InMemoryStore:

    def __init__(self):
        self._tables: Dict[str, Dict[Any, Any]] = defaultdict(dict)
        self._sequences: Dict[str, Any] = defaultdict(lambda: itertools.count(1))
        self.lock = threading.RLock()

    def table(self, name: str) -> Dict[Any, Any]:
        return self._tables[name]

    def next_id(self, name: str) -> int:
        with self.lock:
            return next(self._sequences[name])

    def clear(self) -> None:
        with self.lock:
            self._tables.clear()
            self._sequences.clear()
