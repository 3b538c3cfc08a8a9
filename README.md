# ossim

Small, readable simulations of the algorithms found in an operating-systems
course:

- **CPU scheduling** (`ossim.nonpreemptive`, `ossim.preemptive`):
  first-come first-served, shortest job first, non-preemptive and preemptive
  priority, shortest remaining time first and round robin. Each returns a
  `Schedule` with per-process completion, turnaround and waiting times and the
  executed segments, which `ossim.gantt.render_gantt` draws as a text Gantt
  chart.
- **Memory allocation** (`ossim.buddy`, `ossim.placement`): a buddy allocator,
  and the first, next, best and worst fit placement strategies.
- **Deadlock** (`ossim.deadlock`): the banker's safety check and deadlock
  detection, giving a safe sequence when there is one.
- **A toy machine** (`ossim.machine`): a word-addressed machine that loads and
  runs `$AMJ` / `$DTA` / `$END` job decks, in two instruction-set dialects.
- **Paging** (`ossim.paging`): virtual-to-real address translation through a
  page table, and a small word-addressed memory.
- **Synchronisation** (`ossim.sync`): dining philosophers, producer/consumer
  over a bounded buffer, and readers/writers, using threads and semaphores.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `ossim` command runs one simulator, chosen by a subcommand. The
interactive ones read their answers from standard input.

```
ossim buddy [--size N]
ossim placement
ossim bankers
ossim detect
ossim philosophers [--count N] [--rounds N] [--eat-time SECONDS]
ossim producer-consumer [--items N] [--buffer N] [--delay SECONDS] [--seed N]
ossim readers-writers [--readers N] [--writers N] [--rounds N] [--delay SECONDS]
```

- `buddy` shows a menu to allocate a process (a one-character name and a
  size), deallocate one, print the block tree, or exit. Memory is 1024 units
  unless `--size` gives another power of two.
- `placement` asks for block sizes and process sizes, then lets you pick first,
  next, best or worst fit repeatedly until you choose exit.
- `bankers` asks for the total of each resource, the allocation matrix and the
  maximum need matrix; `detect` asks for the allocation and request matrices.
  Both print the state table, the resources freed as each process finishes,
  and either the safe sequence or that the state is unsafe.
- `philosophers` and `readers-writers` run until interrupted unless `--rounds`
  is given. `producer-consumer` passes `--items` random numbers from 0 to 99
  through the buffer; `--seed` makes them repeatable.

Input that runs out early or is not a number ends the command with an
`error:` message on standard error and exit status 1.

## Library use

### Scheduling

```python
from ossim.models import Process, format_results
from ossim.nonpreemptive import fcfs, sjf, priority_nonpreemptive, format_fcfs_table
from ossim.preemptive import srtf, round_robin, priority_preemptive
from ossim.gantt import render_gantt

processes = [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 8)]

schedule = round_robin(processes, 2)
print(format_results(schedule))
print(render_gantt(schedule.segments))
print(schedule.average_waiting(), schedule.average_turnaround())
```

`Process(pid, arrival, burst, priority=0)` treats a lower priority value as
more urgent. Each `ProcessResult` in `schedule.results` has `completion`,
`turnaround` and `waiting`. `fcfs` and `priority_nonpreemptive` list results
in the order the processes ran; `sjf` and the preemptive schedulers keep the
order they were given in (pass `sjf` a list). The preemptive schedulers and
`round_robin` raise `ValueError` for a burst or quantum below 1.

`format_results(schedule, show_priority=True)` adds a priority column;
`format_fcfs_table` draws a boxed table. `render_gantt` takes `scale`,
`min_width`, `fixed_width` and `clip_timeline` to control block widths and how
the time axis is laid out.

### Memory placement

```python
from ossim.placement import Strategy, best_fit, place, format_allocation

blocks = [100, 500, 200, 300, 600]
processes = [212, 417, 112, 426]

allocation = best_fit(blocks, processes)       # block index per process, or None
allocation = place(Strategy.WORST, blocks, processes)
print(format_allocation(blocks, processes, allocation))
```

### Buddy allocation

```python
from ossim.buddy import AllocationError, BuddyAllocator, ProcessNotFound

allocator = BuddyAllocator(1024, True)
block = allocator.allocate("A", 100)   # a 128 block, block.fragmentation == 28
allocator.allocate("B", 240)           # a 256 block
allocator.deallocate("A")              # free buddies merge again
print(allocator.render())
```

`allocate` raises `AllocationError` when nothing fits, and `deallocate` raises
`ProcessNotFound` for an unknown name. With `require_leaf=False` a free block of
the right size is handed out even if it was split before.

### Deadlock

```python
from ossim.deadlock import available_resources, need_matrix, find_safe_sequence

totals = [10, 5, 7]
allocation = [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]]
maximum = [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]]

available = available_resources(totals, allocation)   # [3, 3, 2]
need = need_matrix(maximum, allocation)
result = find_safe_sequence(available, allocation, need)
result.safe       # True
result.sequence   # (1, 3, 4, 0, 2)
```

For deadlock detection pass the request matrix in place of `need`.
`format_bankers_table` and `format_detection_table` draw the state tables.

### The toy machine

```python
from ossim.machine import Dialect, Machine, run_job

output = run_job(deck_text, Dialect.CHECKED)
```

`Dialect.CHECKED` has 100 words and stops with an error line on a bad opcode
or operand; `Dialect.EXTENDED` has 200 words and adds the `NR` instruction.
A `Machine(dialect, input_lines)` also exposes `memory`, `register`,
`console` (status messages and memory dumps) and `memory_dump()`.

### Paging

```python
from ossim.paging import PagedMemory, translate_address

translate_address(12)        # 232, with page table (11, 23, 5) and page size 10
memory = PagedMemory()
memory.store_message()       # "WELCOME"
memory.output()              # "WELCOME"
```

An address whose page is outside the table raises `ValueError`.

### Synchronisation

`ossim.sync` provides `BoundedBuffer` (`put`, `get`), `ReadersWriterLock`
(`reading()` and `writing()` context managers) and the runners `dine`,
`produce_consume` and `readers_writers`, which return the messages they
logged. Each takes a `log` callable (default `print`, or `None` for silence).

## What it does not do

The command line covers memory allocation, deadlock and synchronisation only.
The CPU schedulers, the toy machine and paging are used from Python; there is
no command that reads processes or job decks interactively or from files.