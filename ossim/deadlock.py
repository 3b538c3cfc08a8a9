"""Banker's safety check and deadlock detection over resource matrices."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

Matrix = Sequence[Sequence[int]]

_BANKERS_HEADER = "Process | Allocation | Max Need | Available | Requirement"
_DETECTION_HEADER = "Process | Allocation | Available | Request"


@dataclass(frozen=True)
class SafetyResult:
    """Outcome of the safety check.

    ``sequence`` lists the processes that could finish, in order; when the
    state is unsafe it holds only those that finished before the search
    stalled. ``steps`` pairs each finished process with the free resources
    after it released its allocation.
    """

    safe: bool
    sequence: tuple[int, ...]
    steps: tuple[tuple[int, tuple[int, ...]], ...]

    def __bool__(self) -> bool:
        return self.safe


def _check_shape(name: str, matrix: Matrix, rows: int, columns: int) -> None:
    if len(matrix) != rows:
        raise ValueError(f"{name} must have {rows} rows, got {len(matrix)}")
    for index, row in enumerate(matrix):
        if len(row) != columns:
            raise ValueError(
                f"{name} row {index} must have {columns} entries, got {len(row)}"
            )


def available_resources(totals: Sequence[int], allocation: Matrix) -> list[int]:
    """Subtract every process's allocation from the total of each resource."""
    _check_shape("allocation", allocation, len(allocation), len(totals))
    return [
        total - sum(column) for total, column in zip(totals, zip(*allocation))
    ] if allocation else list(totals)


def need_matrix(maximum: Matrix, allocation: Matrix) -> list[list[int]]:
    """Return maximum demand minus current allocation, entry by entry."""
    columns = len(maximum[0]) if maximum else 0
    _check_shape("maximum", maximum, len(maximum), columns)
    _check_shape("allocation", allocation, len(maximum), columns)
    return [
        [most - held for most, held in zip(max_row, alloc_row)]
        for max_row, alloc_row in zip(maximum, allocation)
    ]


def find_safe_sequence(
    available: Sequence[int], allocation: Matrix, demand: Matrix
) -> SafetyResult:
    """Search for an order in which every process can finish.

    ``demand`` is the need matrix for the banker's algorithm or the request
    matrix for deadlock detection. Each pass scans the processes in order and
    lets every one whose demand fits finish and release its allocation.
    """
    count = len(allocation)
    _check_shape("allocation", allocation, count, len(available))
    _check_shape("demand", demand, count, len(available))

    work = list(available)
    finished = [False] * count
    sequence: list[int] = []
    steps: list[tuple[int, tuple[int, ...]]] = []
    while len(sequence) < count:
        progressed = False
        for process, (held, wanted) in enumerate(zip(allocation, demand)):
            if finished[process]:
                continue
            if any(want > free for want, free in zip(wanted, work)):
                continue
            work = [free + h for free, h in zip(work, held)]
            finished[process] = True
            sequence.append(process)
            steps.append((process, tuple(work)))
            progressed = True
        if not progressed:
            return SafetyResult(False, tuple(sequence), tuple(steps))
    return SafetyResult(True, tuple(sequence), tuple(steps))


def _cells(values: Sequence[int]) -> str:
    return "".join(f"{value} " for value in values)


def _available_cell(row: int, available: Sequence[int]) -> str:
    return _cells(available) if row == 0 else "  " * len(available)


def format_bankers_table(
    allocation: Matrix, maximum: Matrix, available: Sequence[int], need: Matrix
) -> str:
    """Render allocation, maximum, available and need side by side."""
    rows, columns = len(allocation), len(available)
    for name, matrix in (("allocation", allocation), ("maximum", maximum), ("need", need)):
        _check_shape(name, matrix, rows, columns)
    lines = [_BANKERS_HEADER, "-" * 60]
    for index, (held, most, needed) in enumerate(zip(allocation, maximum, need)):
        lines.append(
            f"P{index}\t| {_cells(held)}\t| {_cells(most)}\t| "
            f"{_available_cell(index, available)}\t| {_cells(needed)}"
        )
    return "\n".join(lines)


def format_detection_table(
    allocation: Matrix, request: Matrix, available: Sequence[int]
) -> str:
    """Render allocation, available and request side by side."""
    rows, columns = len(allocation), len(available)
    _check_shape("allocation", allocation, rows, columns)
    _check_shape("request", request, rows, columns)
    lines = [_DETECTION_HEADER, "-" * 49]
    for index, (held, wanted) in enumerate(zip(allocation, request)):
        lines.append(
            f"P{index}\t| {_cells(held)}\t| "
            f"{_available_cell(index, available)}\t| {_cells(wanted)}"
        )
    return "\n".join(lines)