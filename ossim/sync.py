"""Classic synchronisation problems built on threads and semaphores."""

from __future__ import annotations

import itertools
import random
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from functools import partial
from typing import Generic, TypeVar

Log = Callable[[str], None]
T = TypeVar("T")


class _Recorder:
    """Collects messages from many threads and forwards them to a log."""

    def __init__(self, log: Log | None) -> None:
        self._log = log
        self._lock = threading.Lock()
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        with self._lock:
            self.messages.append(message)
            if self._log is not None:
                self._log(message)


def _rounds(rounds: int | None) -> Iterable[object]:
    if rounds is None:
        return itertools.repeat(None)
    if rounds < 0:
        raise ValueError(f"rounds must not be negative, got {rounds}")
    return range(rounds)


def _run_all(tasks: Iterable[Callable[[], None]]) -> None:
    errors: list[BaseException] = []

    def guard(task: Callable[[], None]) -> None:
        try:
            task()
        except BaseException as exc:  # re-raised in the calling thread
            errors.append(exc)

    threads = [threading.Thread(target=guard, args=(task,), daemon=True) for task in tasks]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if errors:
        raise errors[0]


class BoundedBuffer(Generic[T]):
    """A fixed-capacity FIFO guarded by a mutex and two counting semaphores.

    ``put`` blocks while the buffer is full and ``get`` while it is empty.
    The optional callbacks run inside the critical section, so what they
    record appears in the order the buffer was changed.
    """

    def __init__(
        self,
        capacity: int = 10,
        on_put: Callable[[T], None] | None = None,
        on_get: Callable[[T], None] | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: deque[T] = deque()
        self._mutex = threading.Lock()
        self._empty = threading.Semaphore(capacity)
        self._full = threading.Semaphore(0)
        self._on_put = on_put
        self._on_get = on_get

    def __len__(self) -> int:
        with self._mutex:
            return len(self._items)

    def put(self, item: T) -> None:
        """Add an item, waiting for a free slot."""
        self._empty.acquire()
        with self._mutex:
            self._items.append(item)
            if self._on_put is not None:
                self._on_put(item)
        self._full.release()

    def get(self) -> T:
        """Remove and return the oldest item, waiting for one to arrive."""
        self._full.acquire()
        with self._mutex:
            item = self._items.popleft()
            if self._on_get is not None:
                self._on_get(item)
        self._empty.release()
        return item


class ReadersWriterLock:
    """Many readers or one writer at a time; readers take precedence."""

    def __init__(self) -> None:
        self._resource = threading.Semaphore(1)
        self._count_lock = threading.Lock()
        self._readers = 0

    @property
    def readers(self) -> int:
        """How many readers currently hold the lock."""
        with self._count_lock:
            return self._readers

    @contextmanager
    def reading(self) -> Iterator[None]:
        """Hold the lock shared for the duration of the block."""
        with self._count_lock:
            self._readers += 1
            if self._readers == 1:
                self._resource.acquire()
        try:
            yield
        finally:
            with self._count_lock:
                self._readers -= 1
                if self._readers == 0:
                    self._resource.release()

    @contextmanager
    def writing(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        with self._resource:
            yield


def dine(
    philosophers: int = 5,
    rounds: int | None = None,
    eat_time: float = 2.0,
    log: Log | None = print,
) -> list[str]:
    """Run the dining philosophers and return every message logged.

    Even-numbered philosophers pick up their right chopstick first and odd
    ones their left, which rules out a circular wait. ``rounds=None`` runs
    forever.
    """
    if philosophers < 2:
        raise ValueError(f"need at least two philosophers, got {philosophers}")
    schedule = _rounds(rounds)
    chopsticks = [threading.Semaphore(1) for _ in range(philosophers)]
    record = _Recorder(log)

    def philosopher(pid: int) -> None:
        left, right = pid, (pid + 1) % philosophers
        if pid % 2 == 0:
            order = [(right, "right"), (left, "left")]
        else:
            order = [(left, "left"), (right, "right")]
        for _ in schedule if rounds is None else range(rounds):
            record(f"Philosopher {pid} is thinking.")
            for stick, side in order:
                record(f"Philosopher {pid} is trying to pick up chopstick {stick} ({side}).")
                chopsticks[stick].acquire()
                record(f"Philosopher {pid} picked up chopstick {stick} ({side}).")
            record(f"Philosopher {pid} is eating.")
            time.sleep(eat_time)
            chopsticks[left].release()
            chopsticks[right].release()
            record(f"Philosopher {pid} has put down chopsticks {left} and {right}.\n")

    _run_all(partial(philosopher, pid) for pid in range(philosophers))
    return record.messages


def produce_consume(
    count: int = 10,
    buffer_size: int = 10,
    delay: float = 1.0,
    rng: random.Random | None = None,
    log: Log | None = print,
) -> tuple[list[int], list[int]]:
    """Pass ``count`` random items (0-99) from a producer to a consumer.

    Returns the items in the order they were produced and consumed.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    rng = rng if rng is not None else random.Random()
    record = _Recorder(log)
    produced: list[int] = []
    consumed: list[int] = []

    def on_put(item: int) -> None:
        produced.append(item)
        record(f"Produced: {item}")

    def on_get(item: int) -> None:
        consumed.append(item)
        record(f"Consumed: {item}")

    buffer: BoundedBuffer[int] = BoundedBuffer(buffer_size, on_put, on_get)

    def producer() -> None:
        for _ in range(count):
            buffer.put(rng.randrange(100))
            time.sleep(delay)

    def consumer() -> None:
        for _ in range(count):
            buffer.get()
            time.sleep(delay)

    _run_all([producer, consumer])
    return produced, consumed


def readers_writers(
    readers: int = 5,
    writers: int = 2,
    rounds: int | None = None,
    delay: float = 1.0,
    log: Log | None = print,
) -> list[str]:
    """Run readers and writers over a shared lock and return the messages.

    A reader reads for ``delay`` seconds and a writer writes for twice that;
    between rounds each rests a random whole multiple of ``delay``.
    """
    if readers < 0 or writers < 0:
        raise ValueError("reader and writer counts must not be negative")
    _rounds(rounds)
    lock = ReadersWriterLock()
    record = _Recorder(log)

    def reader(number: int) -> None:
        for _ in _rounds(rounds):
            with lock.reading():
                record(f"Reader {number} is reading")
                time.sleep(delay)
            time.sleep(random.randrange(3) * delay)

    def writer(number: int) -> None:
        for _ in _rounds(rounds):
            with lock.writing():
                record(f"Writer {number} is writing")
                time.sleep(2 * delay)
            time.sleep(random.randrange(5) * delay)

    tasks = [partial(reader, n) for n in range(1, readers + 1)]
    tasks += [partial(writer, n) for n in range(1, writers + 1)]
    _run_all(tasks)
    return record.messages