"""
Single-writer, multi-reader lock.
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """
    Readers share the lock and never block each other; a writer waits until all
    readers are gone and excludes everyone while it holds the lock.

    >>> lock = ReadWriteLock()
    >>> with lock.read():
    ...     with lock.read():
    ...         lock.readers
    2
    >>> with lock.write():
    ...     lock.writing
    True
    """

    def __init__(self) -> None:
        super().__init__()
        self._condition = threading.Condition(threading.Lock())
        self.readers = 0
        self.writing = False

    @contextmanager
    def read(self):
        """Hold the shared side of the lock."""
        with self._condition:
            while self.writing:
                self._condition.wait()
            self.readers += 1
        try:
            yield
        finally:
            with self._condition:
                self.readers -= 1
                if self.readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self):
        """Hold the exclusive side of the lock."""
        with self._condition:
            while self.writing or self.readers:
                self._condition.wait()
            self.writing = True
        try:
            yield
        finally:
            with self._condition:
                self.writing = False
                self._condition.notify_all()
