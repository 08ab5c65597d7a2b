"""In-memory, content-addressed store of analyzed strings.

The store owns its synchronization: any number of readers may hold the
lock together, writers hold it alone. Locks are held for a single map
operation only; scans work on a snapshot copy taken under the read lock.
"""

import threading
from contextlib import contextmanager
from typing import Dict, List, Optional

from string_analyzer.models import StringRecord


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class StringStore:
    """Map from record id (SHA-256 of the value) to StringRecord"""

    def __init__(self):
        self._records: Dict[str, StringRecord] = {}
        self._lock = ReadWriteLock()

    def insert_if_absent(self, record: StringRecord) -> bool:
        """Insert record unless its id is taken. Check and set happen under one write lock."""
        with self._lock.write():
            if record.id in self._records:
                return False
            self._records[record.id] = record
        return True

    def get(self, record_id: str) -> Optional[StringRecord]:
        with self._lock.read():
            return self._records.get(record_id)

    def delete(self, record_id: str) -> bool:
        """Remove a record; returns False if nothing was stored under record_id"""
        with self._lock.write():
            return self._records.pop(record_id, None) is not None

    def snapshot(self) -> List[StringRecord]:
        """Point-in-time copy of all records, safe to iterate without the lock"""
        with self._lock.read():
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock.write():
            self._records.clear()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)


# Process-wide store; lives only as long as the process
_store = StringStore()


def get_store() -> StringStore:
    """Dependency to provide the store."""
    return _store
