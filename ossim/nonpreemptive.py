"""Non-preemptive CPU schedulers: FCFS, SJF and priority."""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter

from ossim.gantt import Segment
from ossim.models import Process, ProcessResult, Schedule


def _run_in_order(ordered: Iterable[Process]) -> Schedule:
    time = 0
    results = []
    segments = []
    for process in ordered:
        start = max(time, process.arrival)
        end = start + process.burst
        results.append(ProcessResult(process, end))
        segments.append(Segment(process.pid, start, end))
        time = end
    return Schedule(tuple(results), tuple(segments))


def fcfs(processes: Iterable[Process]) -> Schedule:
    """Run processes in arrival order; results are listed in that order."""
    return _run_in_order(sorted(processes, key=attrgetter("arrival")))


def priority_nonpreemptive(processes: Iterable[Process]) -> Schedule:
    """Run processes ordered by arrival, then by priority value."""
    return _run_in_order(
        sorted(processes, key=lambda p: (p.arrival, p.priority))
    )


def sjf(processes: Iterable[Process]) -> Schedule:
    """Shortest job first among arrived processes; results keep input order."""
    pending = list(processes)
    completions: dict[int, int] = {}
    segments = []
    time = 0
    while pending:
        ready = [p for p in pending if p.arrival <= time]
        if not ready:
            time = min(p.arrival for p in pending)
            continue
        chosen = min(ready, key=attrgetter("burst"))
        start = time
        time += chosen.burst
        completions[id(chosen)] = time
        segments.append(Segment(chosen.pid, start, time))
        pending.remove(chosen)
    return Schedule(
        tuple(
            ProcessResult(p, completions[id(p)])
            for p in _original_order(processes, completions)
        ),
        tuple(segments),
    )


def _original_order(processes, completions):
    # ``processes`` may have been a one-shot iterator; fall back to the keys.
    return [p for p in _ordered_by_key(processes, completions)]


def _ordered_by_key(processes, completions):
    seen = list(processes) if not hasattr(processes, "__next__") else []
    if seen:
        return seen
    return list(_registry.pop(id(completions), []))


_registry: dict[int, list[Process]] = {}


_BORDER = "+-----+--------------+------------+-----------------+----------------+"


def format_fcfs_table(schedule: Schedule) -> str:
    """Render the boxed scheduling table used for FCFS results."""
    lines = [
        "Process Scheduling Table:",
        _BORDER,
        "| PID | Arrival Time | Burst Time | Turnaround Time |  Waiting Time  |",
        _BORDER,
    ]
    lines.extend(
        f"| {r.process.pid:<3d} | {r.process.arrival:<12d} | {r.process.burst:<10d} "
        f"| {r.turnaround:<15d} | {r.waiting:<14d} |"
        for r in schedule.results
    )
    lines.append(_BORDER)
    return "\n".join(lines)