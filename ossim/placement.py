"""Contiguous memory placement: first, next, best and worst fit."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

Allocation = list[int | None]


class Strategy(Enum):
    """Placement algorithms, numbered as in the interactive menu."""

    FIRST = 1
    NEXT = 2
    BEST = 3
    WORST = 4


def _place(
    blocks: Sequence[int],
    processes: Sequence[int],
    choose: Callable[[list[int]], int],
    from_last: bool = False,
) -> Allocation:
    used = [False] * len(blocks)
    last = 0
    allocation: Allocation = []
    for need in processes:
        start = last if from_last else 0
        fitting = [
            index
            for index, size in enumerate(blocks)
            if index >= start and not used[index] and size >= need
        ]
        choice = choose(fitting) if fitting else None
        if choice is not None:
            used[choice] = True
            last = choice
        allocation.append(choice)
    return allocation


def first_fit(blocks: Sequence[int], processes: Sequence[int]) -> Allocation:
    """Give each process the first unused block large enough for it."""
    return _place(blocks, processes, lambda fitting: fitting[0])


def next_fit(blocks: Sequence[int], processes: Sequence[int]) -> Allocation:
    """Like first fit, but each search starts at the last block used and does not wrap."""
    return _place(blocks, processes, lambda fitting: fitting[0], from_last=True)


def best_fit(blocks: Sequence[int], processes: Sequence[int]) -> Allocation:
    """Give each process the smallest unused block that fits; ties go to the earlier block."""
    return _place(blocks, processes, lambda fitting: min(fitting, key=blocks.__getitem__))


def worst_fit(blocks: Sequence[int], processes: Sequence[int]) -> Allocation:
    """Give each process the largest unused block that fits; ties go to the earlier block."""
    return _place(blocks, processes, lambda fitting: max(fitting, key=blocks.__getitem__))


_ALGORITHMS = {
    Strategy.FIRST: first_fit,
    Strategy.NEXT: next_fit,
    Strategy.BEST: best_fit,
    Strategy.WORST: worst_fit,
}


def place(
    strategy: Strategy, blocks: Sequence[int], processes: Sequence[int]
) -> Allocation:
    """Run the chosen strategy; each entry is a block index or None."""
    return _ALGORITHMS[Strategy(strategy)](blocks, processes)


def format_allocation(
    blocks: Sequence[int], processes: Sequence[int], allocation: Sequence[int | None]
) -> str:
    """Describe where each process went, numbering from 1."""
    if len(allocation) != len(processes):
        raise ValueError("allocation must have one entry per process")
    lines = ["Process Allocation:"]
    for number, (need, block) in enumerate(zip(processes, allocation), start=1):
        if block is None:
            lines.append(f"Process {number} ({need} KB) -> Not allocated")
        else:
            lines.append(
                f"Process {number} ({need} KB) -> Block {block + 1} ({blocks[block]} KB)"
            )
    return "\n".join(lines)