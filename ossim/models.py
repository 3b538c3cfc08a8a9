"""Process descriptions and the results of running a scheduler over them."""

from __future__ import annotations

from dataclasses import dataclass, field

from ossim.gantt import Segment


@dataclass(frozen=True)
class Process:
    """A job to schedule. A lower priority value means a more urgent job."""

    pid: int
    arrival: int
    burst: int
    priority: int = 0


@dataclass(frozen=True)
class ProcessResult:
    """When a process finished, and the times derived from that."""

    process: Process
    completion: int

    @property
    def turnaround(self) -> int:
        return self.completion - self.process.arrival

    @property
    def waiting(self) -> int:
        return self.turnaround - self.process.burst


@dataclass(frozen=True)
class Schedule:
    """Per-process results in table order, plus the executed segments."""

    results: tuple[ProcessResult, ...]
    segments: tuple[Segment, ...] = field(default=())

    def _require_results(self) -> None:
        if not self.results:
            raise ValueError("schedule has no processes")

    def average_waiting(self) -> float:
        self._require_results()
        return sum(r.waiting for r in self.results) / len(self.results)

    def average_turnaround(self) -> float:
        self._require_results()
        return sum(r.turnaround for r in self.results) / len(self.results)


def format_results(schedule: Schedule, show_priority: bool = False) -> str:
    """Render the tab-separated results table followed by the averages."""
    if show_priority:
        header = (
            "Process\tArrival Time\tBurst Time\tPriority\t"
            "Completion Time\tWaiting Time\tTurnaround Time"
        )
        rows = [
            "\t\t".join(
                [
                    f"P{r.process.pid}",
                    str(r.process.arrival),
                    str(r.process.burst),
                    str(r.process.priority),
                    str(r.completion),
                    str(r.waiting),
                    str(r.turnaround),
                ]
            )
            for r in schedule.results
        ]
        separator = " ="
    else:
        header = (
            "Process\tArrival Time\tBurst Time\t"
            "Completion Time\tWaiting Time\tTurnaround Time"
        )
        rows = [
            f"P{r.process.pid}\t"
            + "\t\t".join(
                [
                    str(r.process.arrival),
                    str(r.process.burst),
                    str(r.completion),
                    str(r.waiting),
                    str(r.turnaround),
                ]
            )
            for r in schedule.results
        ]
        separator = ":"
    lines = [header, *rows, ""]
    lines.append(f"Average Waiting Time{separator} {schedule.average_waiting():.2f}")
    lines.append(
        f"Average Turnaround Time{separator} {schedule.average_turnaround():.2f}"
    )
    return "\n".join(lines)