"""Interactive front ends for the memory, deadlock and synchronisation simulators."""

from __future__ import annotations

import argparse
import random
import re
import sys
from collections.abc import Callable
from typing import TextIO

from ossim.buddy import AllocationError, BuddyAllocator, ProcessNotFound
from ossim.deadlock import (
    available_resources,
    find_safe_sequence,
    format_bankers_table,
    format_detection_table,
    need_matrix,
)
from ossim.placement import Strategy, format_allocation, place
from ossim.sync import dine, produce_consume, readers_writers

_INTEGER = re.compile(r"[+-]?\d+")

_BUDDY_MENU = (
    "\n--- Buddy System Menu ---\n"
    "1. Allocate Process\n"
    "2. Deallocate Process\n"
    "3. Print Memory Blocks\n"
    "4. Exit\n"
    "Enter your choice: "
)

_PLACEMENT_MENU = (
    "\nChoose allocation algorithm:\n"
    "1. First Fit\n2. Next Fit\n3. Best Fit\n4. Worst Fit\n5. Exit\n"
    "Enter choice: "
)


class _Scanner:
    """Reads whitespace-separated integers and single characters from a stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending = ""

    def _skip_space(self) -> None:
        while True:
            stripped = self._pending.lstrip()
            if stripped:
                self._pending = stripped
                return
            line = self._stream.readline()
            if not line:
                raise EOFError("unexpected end of input")
            self._pending = line

    def char(self) -> str:
        self._skip_space()
        char, self._pending = self._pending[0], self._pending[1:]
        return char

    def integer(self) -> int:
        self._skip_space()
        match = _INTEGER.match(self._pending)
        if match is None:
            raise ValueError(f"expected an integer, got {self._pending.split()[0]!r}")
        self._pending = self._pending[match.end():]
        return int(match.group())

    def count(self) -> int:
        value = self.integer()
        if value < 0:
            raise ValueError(f"expected a count, got {value}")
        return value


def _prompt(out: TextIO, text: str) -> None:
    out.write(text)
    out.flush()


def _buddy(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    allocator = BuddyAllocator(args.size)
    while True:
        _prompt(out, _BUDDY_MENU)
        choice = scan.integer()
        if choice == 1:
            _prompt(out, "Process name: ")
            name = scan.char()
            _prompt(out, "Process size: ")
            size = scan.integer()
            try:
                allocator.allocate(name, size)
            except AllocationError:
                out.write(f"Could not allocate memory for process {name}\n")
            else:
                out.write(f"Process {name} allocated successfully.\n")
        elif choice == 2:
            _prompt(out, "Enter process name to deallocate: ")
            name = scan.char()
            try:
                allocator.deallocate(name)
            except ProcessNotFound:
                out.write(f"Process {name} not found in memory.\n")
            else:
                out.write(f"Process {name} deallocated successfully.\n")
        elif choice == 3:
            out.write("\nMemory Allocation:\n" + allocator.render() + "\n")
        elif choice == 4:
            return
        else:
            out.write("Invalid choice. Try again.\n")


def _placement(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    _prompt(out, "Enter number of memory blocks: ")
    block_count = scan.count()
    _prompt(out, "Enter sizes of memory blocks: ")
    blocks = [scan.integer() for _ in range(block_count)]
    _prompt(out, "Enter number of processes: ")
    process_count = scan.count()
    _prompt(out, "Enter sizes of processes: ")
    processes = [scan.integer() for _ in range(process_count)]
    while True:
        _prompt(out, _PLACEMENT_MENU)
        choice = scan.integer()
        if choice == 5:
            return
        try:
            strategy = Strategy(choice)
        except ValueError:
            out.write("Invalid choice!\n")
            continue
        allocation = place(strategy, blocks, processes)
        out.write("\n" + format_allocation(blocks, processes, allocation) + "\n")


def _read_matrix(scan: _Scanner, out: TextIO, title: str, rows: int, columns: int) -> list[list[int]]:
    out.write(f"Enter the {title} matrix:\n")
    matrix = []
    for row in range(rows):
        out.write(f"Process P{row}:\n")
        values = []
        for column in range(columns):
            _prompt(out, f"Resource {chr(ord('A') + column)}: ")
            values.append(scan.integer())
        matrix.append(values)
    return matrix


def _read_state(scan: _Scanner, out: TextIO, demand_title: str):
    _prompt(out, "Enter the number of processes: ")
    processes = scan.count()
    _prompt(out, "Enter the number of resource types: ")
    resources = scan.count()
    out.write("Enter the maximum available resources of each type (A B C ...):\n")
    totals = []
    for column in range(resources):
        _prompt(out, f"Resource {chr(ord('A') + column)}: ")
        totals.append(scan.integer())
    allocation = _read_matrix(scan, out, "allocation", processes, resources)
    demand = _read_matrix(scan, out, demand_title, processes, resources)
    return totals, allocation, demand


def _report(out: TextIO, available, allocation, demand, unsafe_message: str) -> None:
    result = find_safe_sequence(available, allocation, demand)
    for process, work in result.steps:
        cells = "".join(f"{value} " for value in work)
        out.write(f"\nResources after process P{process} completes: {cells}")
    if result.safe:
        order = "".join(f"P{process} " for process in result.sequence)
        out.write(f"\nSystem is in a safe state.\nSafe sequence is: {order}\n")
    else:
        out.write(f"\n{unsafe_message}\n")


def _bankers(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    totals, allocation, maximum = _read_state(scan, out, "maximum need")
    available = available_resources(totals, allocation)
    need = need_matrix(maximum, allocation) if maximum else []
    out.write("\n" + format_bankers_table(allocation, maximum, available, need) + "\n")
    _report(out, available, allocation, need, "System is not in a safe state.")


def _detect(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    totals, allocation, request = _read_state(scan, out, "request")
    available = available_resources(totals, allocation)
    out.write("\n" + format_detection_table(allocation, request, available) + "\n")
    _report(
        out, available, allocation, request,
        "System is not in a safe state. Deadlock detected.",
    )


def _logger(out: TextIO) -> Callable[[str], None]:
    def log(message: str) -> None:
        out.write(message + "\n")
        out.flush()

    return log


def _philosophers(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    dine(args.count, args.rounds, args.eat_time, _logger(out))


def _producer_consumer(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    rng = random.Random(args.seed)
    produce_consume(args.items, args.buffer, args.delay, rng, _logger(out))


def _readers_writers(args: argparse.Namespace, scan: _Scanner, out: TextIO) -> None:
    readers_writers(args.readers, args.writers, args.rounds, args.delay, _logger(out))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ossim", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    buddy = commands.add_parser("buddy", help="buddy system memory allocator")
    buddy.add_argument("--size", type=int, default=1024, help="total memory size")
    buddy.set_defaults(handler=_buddy)

    commands.add_parser("placement", help="first, next, best and worst fit").set_defaults(
        handler=_placement
    )
    commands.add_parser("bankers", help="banker's algorithm safety check").set_defaults(
        handler=_bankers
    )
    commands.add_parser("detect", help="deadlock detection").set_defaults(handler=_detect)

    phil = commands.add_parser("philosophers", help="dining philosophers")
    phil.add_argument("--count", type=int, default=5)
    phil.add_argument("--rounds", type=int, default=None)
    phil.add_argument("--eat-time", type=float, default=2.0)
    phil.set_defaults(handler=_philosophers)

    prod = commands.add_parser("producer-consumer", help="bounded buffer")
    prod.add_argument("--items", type=int, default=10)
    prod.add_argument("--buffer", type=int, default=10)
    prod.add_argument("--delay", type=float, default=1.0)
    prod.add_argument("--seed", type=int, default=None)
    prod.set_defaults(handler=_producer_consumer)

    rw = commands.add_parser("readers-writers", help="readers and writers")
    rw.add_argument("--readers", type=int, default=5)
    rw.add_argument("--writers", type=int, default=2)
    rw.add_argument("--rounds", type=int, default=None)
    rw.add_argument("--delay", type=float, default=1.0)
    rw.set_defaults(handler=_readers_writers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one simulator, reading answers from standard input."""
    args = _parser().parse_args(argv)
    try:
        args.handler(args, _Scanner(sys.stdin), sys.stdout)
    except (EOFError, ValueError) as exc:
        sys.stdout.flush()
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())