"""Preemptive CPU schedulers: SRTF, round robin and preemptive priority.

Results are listed in the order the processes were given. Segments follow
the dispatch record: for round robin and preemptive priority a segment lasts
from one dispatch until the next one (or the end of the run), so any idle
time before the next dispatch is counted in the segment before it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ossim.gantt import Segment
from ossim.models import Process, ProcessResult, Schedule


def _validated(processes: Iterable[Process]) -> list[Process]:
    procs = list(processes)
    for process in procs:
        if process.burst < 1:
            raise ValueError(
                f"process P{process.pid} needs a positive burst, got {process.burst}"
            )
    return procs


def _next_arrival(procs: Sequence[Process], remaining: Sequence[int]) -> int:
    return min(p.arrival for p, left in zip(procs, remaining) if left > 0)


def _segments_from_dispatches(
    dispatches: list[tuple[int, int]], final_time: int
) -> tuple[Segment, ...]:
    ends = [start for _, start in dispatches[1:]] + [final_time]
    return tuple(
        Segment(pid, start, end) for (pid, start), end in zip(dispatches, ends)
    )


def _build_schedule(
    procs: Sequence[Process],
    completions: Sequence[int],
    segments: tuple[Segment, ...],
) -> Schedule:
    return Schedule(
        tuple(ProcessResult(p, done) for p, done in zip(procs, completions)),
        segments,
    )


def srtf(processes: Iterable[Process]) -> Schedule:
    """Shortest remaining time first, one time unit at a time.

    Every executed unit becomes its own one-unit segment. Ties go to the
    process given first.
    """
    procs = _validated(processes)
    remaining = [p.burst for p in procs]
    completions = [0] * len(procs)
    segments: list[Segment] = []
    time = 0
    pending = len(procs)
    while pending:
        ready = [
            index
            for index, (process, left) in enumerate(zip(procs, remaining))
            if left > 0 and process.arrival <= time
        ]
        if not ready:
            time = _next_arrival(procs, remaining)
            continue
        chosen = min(ready, key=remaining.__getitem__)
        remaining[chosen] -= 1
        time += 1
        segments.append(Segment(procs[chosen].pid, time - 1, time))
        if remaining[chosen] == 0:
            completions[chosen] = time
            pending -= 1
    return _build_schedule(procs, completions, tuple(segments))


def round_robin(processes: Iterable[Process], quantum: int) -> Schedule:
    """Cycle through arrived processes in input order, a quantum at a time."""
    if quantum < 1:
        raise ValueError(f"quantum must be positive, got {quantum}")
    procs = _validated(processes)
    remaining = [p.burst for p in procs]
    completions = [0] * len(procs)
    dispatches: list[tuple[int, int]] = []
    time = 0
    pending = len(procs)
    while pending:
        executed = False
        for index, process in enumerate(procs):
            if remaining[index] <= 0 or process.arrival > time:
                continue
            executed = True
            dispatches.append((process.pid, time))
            if remaining[index] > quantum:
                time += quantum
                remaining[index] -= quantum
            else:
                time += remaining[index]
                remaining[index] = 0
                completions[index] = time
                pending -= 1
        if not executed:
            time = _next_arrival(procs, remaining)
    return _build_schedule(
        procs, completions, _segments_from_dispatches(dispatches, time)
    )


def priority_preemptive(processes: Iterable[Process]) -> Schedule:
    """Run the most urgent arrived process each time unit.

    A lower priority value is more urgent; ties go to the process given
    first. Consecutive units of the same process share one segment.
    """
    procs = _validated(processes)
    remaining = [p.burst for p in procs]
    completions = [0] * len(procs)
    dispatches: list[tuple[int, int]] = []
    last_pid: int | None = None
    time = 0
    pending = len(procs)
    while pending:
        ready = [
            index
            for index, (process, left) in enumerate(zip(procs, remaining))
            if left > 0 and process.arrival <= time
        ]
        if not ready:
            time = _next_arrival(procs, remaining)
            continue
        chosen = min(ready, key=lambda index: procs[index].priority)
        pid = procs[chosen].pid
        if pid != last_pid:
            dispatches.append((pid, time))
        last_pid = pid
        remaining[chosen] -= 1
        time += 1
        if remaining[chosen] == 0:
            completions[chosen] = time
            pending -= 1
    return _build_schedule(
        procs, completions, _segments_from_dispatches(dispatches, time)
    )