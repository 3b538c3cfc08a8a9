import concurrent.futures
import random
import threading
from itertools import accumulate

import pytest

from ossim.sync import (
    BoundedBuffer,
    ReadersWriterLock,
    dine,
    produce_consume,
    readers_writers,
)


def test_buffer_is_fifo():
    buffer = BoundedBuffer(5)
    for item in (7, 8, 9):
        buffer.put(item)
    assert [buffer.get() for _ in range(3)] == [7, 8, 9]
    assert len(buffer) == 0


def test_buffer_rejects_zero_capacity():
    with pytest.raises(ValueError):
        BoundedBuffer(0)


def test_buffer_put_blocks_when_full():
    buffer = BoundedBuffer(2)
    done = threading.Event()

    def fill():
        for item in range(3):
            buffer.put(item)
        done.set()

    thread = threading.Thread(target=fill, daemon=True)
    thread.start()
    assert not done.wait(0.2)
    assert len(buffer) == buffer.capacity
    assert buffer.get() == 0
    assert done.wait(2)
    thread.join(2)
    assert [buffer.get(), buffer.get()] == [1, 2]


def test_buffer_get_waits_for_item():
    buffer = BoundedBuffer(1)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(buffer.get)
        with pytest.raises(concurrent.futures.TimeoutError):
            future.result(timeout=0.2)
        buffer.put("x")
        assert future.result(timeout=2) == "x"
    assert len(buffer) == 0


def test_buffer_callbacks_see_changes():
    events = []
    buffer = BoundedBuffer(3, on_put=lambda i: events.append(("put", i)),
                           on_get=lambda i: events.append(("get", i)))
    buffer.put("a")
    buffer.put("b")
    buffer.get()
    assert events == [("put", "a"), ("put", "b"), ("get", "a")]


def test_readers_share_the_lock():
    lock = ReadersWriterLock()
    barrier = threading.Barrier(2, timeout=2)
    counts = []

    def read():
        with lock.reading():
            barrier.wait()
            counts.append(lock.readers)
            barrier.wait()

    threads = [threading.Thread(target=read, daemon=True) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(3)
    assert counts == [2, 2]
    assert lock.readers == 0


def test_writer_waits_for_reader():
    lock = ReadersWriterLock()

    def write():
        with lock.writing():
            return lock.readers

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        with lock.reading():
            assert lock.readers == 1
            future = pool.submit(write)
            with pytest.raises(concurrent.futures.TimeoutError):
                future.result(timeout=0.2)
        assert future.result(timeout=2) == 0
    assert lock.readers == 0


def test_reader_waits_for_writer():
    lock = ReadersWriterLock()

    def read():
        with lock.reading():
            return lock.readers

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        with lock.writing():
            future = pool.submit(read)
            with pytest.raises(concurrent.futures.TimeoutError):
                future.result(timeout=0.2)
        assert future.result(timeout=2) == 1
    assert lock.readers == 0


def test_dine_every_philosopher_eats_each_round():
    messages = []
    returned = dine(philosophers=5, rounds=2, eat_time=0, log=messages.append)
    assert returned == messages
    for pid in range(5):
        assert messages.count(f"Philosopher {pid} is eating.") == 2
    assert sum(m.endswith("has put down chopsticks 0 and 1.\n") for m in messages) == 2


def test_dine_even_philosopher_takes_right_first():
    messages = dine(philosophers=5, rounds=1, eat_time=0, log=None)
    first_zero = next(m for m in messages if m.startswith("Philosopher 0 is trying"))
    first_one = next(m for m in messages if m.startswith("Philosopher 1 is trying"))
    assert first_zero == "Philosopher 0 is trying to pick up chopstick 1 (right)."
    assert first_one == "Philosopher 1 is trying to pick up chopstick 1 (left)."


def test_dine_needs_two_philosophers():
    with pytest.raises(ValueError):
        dine(philosophers=1, rounds=1, eat_time=0, log=None)


def test_produce_consume_passes_every_item_in_order():
    produced, consumed = produce_consume(
        count=20, buffer_size=3, delay=0, rng=random.Random(4), log=None
    )
    assert consumed == produced
    assert len(produced) == 20
    assert all(0 <= item < 100 for item in produced)


def test_produce_consume_is_reproducible_with_seed():
    first = produce_consume(count=10, delay=0, rng=random.Random(11), log=None)
    second = produce_consume(count=10, delay=0, rng=random.Random(11), log=None)
    assert first == second


def test_produce_consume_log_never_consumes_ahead():
    messages = []
    produced, consumed = produce_consume(
        count=15, buffer_size=2, delay=0, rng=random.Random(1), log=messages.append
    )
    assert consumed == produced
    assert len(produced) == 15
    assert len(messages) == 30

    kinds = [message.split(": ", 1)[0] for message in messages]
    assert set(kinds) == {"Produced", "Consumed"}
    balances = list(accumulate(1 if kind == "Produced" else -1 for kind in kinds))
    assert min(balances) >= 0
    assert max(balances) <= 2
    assert balances[-1] == 0


def test_readers_writers_runs_each_round():
    messages = readers_writers(readers=3, writers=2, rounds=2, delay=0, log=None)
    for number in (1, 2, 3):
        assert messages.count(f"Reader {number} is reading") == 2
    for number in (1, 2):
        assert messages.count(f"Writer {number} is writing") == 2
    assert len(messages) == 10


def test_readers_writers_rejects_negative_rounds():
    with pytest.raises(ValueError):
        readers_writers(readers=1, writers=1, rounds=-1, delay=0, log=None)