"""Page storage back ends and the background disk scheduler."""

from __future__ import annotations

import abc
import enum
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Optional, Union

PAGE_SIZE = 4 * 1024


def _check_page_data(data: bytes) -> None:
    if len(data) != PAGE_SIZE:
        raise ValueError(f"page data must be {PAGE_SIZE} bytes, got {len(data)}")


class PageOperator(abc.ABC):
    """Something that stores fixed-size pages by page id."""

    @abc.abstractmethod
    def write_page(self, page_id: int, data: bytes) -> None:
        """Store ``data`` as page ``page_id``."""

    @abc.abstractmethod
    def read_page(self, page_id: int) -> bytes:
        """Return the contents of page ``page_id``."""


class MemoryManager(PageOperator):
    """Pages kept in memory, up to a fixed number of pages."""

    def __init__(self, page_capacity: int) -> None:
        self.page_capacity = page_capacity
        self._memory = bytearray(page_capacity * PAGE_SIZE)

    def _check_bound(self, page_id: int) -> None:
        if not 0 <= page_id < self.page_capacity:
            raise IndexError(
                f"memory page manager can only serve page ids below "
                f"{self.page_capacity} but {page_id} was requested"
            )

    def write_page(self, page_id: int, data: bytes) -> None:
        self._check_bound(page_id)
        _check_page_data(data)
        start = page_id * PAGE_SIZE
        self._memory[start : start + PAGE_SIZE] = data

    def read_page(self, page_id: int) -> bytes:
        self._check_bound(page_id)
        start = page_id * PAGE_SIZE
        return bytes(self._memory[start : start + PAGE_SIZE])


class DiskManager(PageOperator):
    """Pages kept in a single database file."""

    def __init__(self, path: Union[str, PathLike]) -> None:
        self.path = Path(path)
        self.path.touch(exist_ok=True)
        self._file = open(self.path, "r+b")

    def write_page(self, page_id: int, data: bytes) -> None:
        _check_page_data(data)
        self._file.seek(page_id * PAGE_SIZE)
        self._file.write(data)
        self._file.flush()

    def read_page(self, page_id: int) -> bytes:
        self._file.seek(page_id * PAGE_SIZE)
        data = self._file.read(PAGE_SIZE)
        if len(data) < PAGE_SIZE:
            raise EOFError(f"page {page_id} lies beyond the end of {self.path}")
        return data

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "DiskManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class RequestKind(enum.Enum):
    READ = "read"
    WRITE = "write"


@dataclass
class DiskRequest:
    """A pending page read or write; its result arrives on ``future``."""

    kind: RequestKind
    page_id: int
    data: Optional[bytes] = None
    future: Future = field(default_factory=Future, compare=False, repr=False)

    @classmethod
    def read(cls, page_id: int) -> "DiskRequest":
        return cls(RequestKind.READ, page_id)

    @classmethod
    def write(cls, page_id: int, data: bytes) -> "DiskRequest":
        _check_page_data(data)
        return cls(RequestKind.WRITE, page_id, bytes(data))


class DiskScheduler:
    """Runs disk requests one at a time on a background thread."""

    def __init__(self, page_operator: PageOperator) -> None:
        self._operator = page_operator
        self._queue: "queue.SimpleQueue[Optional[DiskRequest]]" = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._worker = threading.Thread(target=self._run, name="disk-scheduler", daemon=True)
        self._worker.start()

    def _run(self) -> None:
        while (request := self._queue.get()) is not None:
            if not request.future.set_running_or_notify_cancel():
                continue
            try:
                if request.kind is RequestKind.READ:
                    result = self._operator.read_page(request.page_id)
                else:
                    self._operator.write_page(request.page_id, request.data)
                    result = request.data
            except Exception as exc:
                request.future.set_exception(exc)
            else:
                request.future.set_result(result)

    def schedule(self, request: DiskRequest) -> Future:
        """Queue a request and return the future that will hold its result."""
        with self._lock:
            if self._closed:
                raise ConnectionError("failed to submit disk request: scheduler is shut down")
            self._queue.put(request)
        return request.future

    def shutdown(self) -> None:
        """Finish queued requests and stop the worker thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(None)
        self._worker.join()

    def __enter__(self) -> "DiskScheduler":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()