"""
Reader/writer lock built on threading.Condition.

Any number of readers may hold the lock together; a writer holds it
alone. Waiting writers block new readers so a steady stream of reads
cannot starve a write.
"""
import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """
    Shared/exclusive lock for in-process state.

    Example:
        >>> lock = ReadWriteLock()
        >>> with lock.read():
        ...     value = mapping.get(key)
        >>> with lock.write():
        ...     mapping[key] = value
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the shared side for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the exclusive side for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
