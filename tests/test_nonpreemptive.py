import pytest

from ossim.models import Process
from ossim.nonpreemptive import (
    fcfs,
    format_fcfs_table,
    priority_nonpreemptive,
    sjf,
)


def _check_consistent(schedule, processes):
    assert sorted(r.process.pid for r in schedule.results) == sorted(
        p.pid for p in processes
    )
    for result in schedule.results:
        assert result.waiting >= 0
    for before, after in zip(schedule.segments, schedule.segments[1:]):
        assert before.end <= after.start
    assert sum(s.duration for s in schedule.segments) == sum(p.burst for p in processes)


def test_fcfs_orders_by_arrival():
    processes = [Process(3, 6, 2), Process(1, 0, 4), Process(2, 2, 3)]
    schedule = fcfs(processes)
    arrivals = [r.process.arrival for r in schedule.results]
    assert arrivals == sorted(arrivals)
    assert [s.pid for s in schedule.segments] == [r.process.pid for r in schedule.results]
    _check_consistent(schedule, processes)


def test_fcfs_idle_cpu_waits_for_arrival():
    late = Process(2, 50, 3)
    schedule = fcfs([Process(1, 0, 2), late])
    second = schedule.segments[1]
    assert second.start == late.arrival
    assert schedule.results[1].waiting == 0


def test_fcfs_keeps_input_order_for_equal_arrivals():
    processes = [Process(9, 1, 1), Process(4, 1, 1), Process(6, 1, 1)]
    schedule = fcfs(processes)
    assert [r.process.pid for r in schedule.results] == [p.pid for p in processes]


def test_sjf_picks_shortest_ready_job():
    processes = [
        Process(1, 0, 7),
        Process(2, 2, 4),
        Process(3, 4, 1),
        Process(4, 5, 4),
    ]
    schedule = sjf(processes)
    assert [s.pid for s in schedule.segments] == [1, 3, 2, 4]
    _check_consistent(schedule, processes)


def test_sjf_results_keep_input_order():
    processes = [Process(1, 0, 9), Process(2, 1, 1), Process(3, 1, 2)]
    schedule = sjf(processes)
    assert [r.process.pid for r in schedule.results] == [p.pid for p in processes]


def test_sjf_starts_at_first_arrival():
    processes = [Process(1, 5, 2), Process(2, 8, 1)]
    schedule = sjf(processes)
    assert schedule.segments[0].start == processes[0].arrival
    assert schedule.segments[1].start == processes[1].arrival


def test_sjf_ties_go_to_earlier_input():
    processes = [Process(5, 0, 3), Process(6, 0, 3)]
    schedule = sjf(processes)
    assert [s.pid for s in schedule.segments] == [p.pid for p in processes]


def test_priority_breaks_arrival_ties():
    processes = [Process(1, 0, 3, 3), Process(2, 0, 2, 1), Process(3, 4, 1, 0)]
    schedule = priority_nonpreemptive(processes)
    assert [r.process.pid for r in schedule.results] == [2, 1, 3]
    _check_consistent(schedule, processes)


def test_priority_does_not_preempt_earlier_arrival():
    processes = [Process(1, 0, 10, 9), Process(2, 1, 1, 0)]
    schedule = priority_nonpreemptive(processes)
    assert schedule.segments[0].pid == processes[0].pid
    assert schedule.segments[0].duration == processes[0].burst


def test_empty_input_gives_empty_schedule():
    schedule = fcfs([])
    assert schedule.results == ()
    with pytest.raises(ValueError):
        schedule.average_waiting()


def test_fcfs_table_layout():
    processes = [Process(1, 0, 4), Process(2, 1, 3)]
    schedule = fcfs(processes)
    lines = format_fcfs_table(schedule).splitlines()
    border = "+-----+--------------+------------+-----------------+----------------+"
    assert lines[0] == "Process Scheduling Table:"
    assert lines[1] == border and lines[3] == border and lines[-1] == border
    assert lines[2] == (
        "| PID | Arrival Time | Burst Time | Turnaround Time |  Waiting Time  |"
    )
    assert all(len(line) == len(border) for line in lines[1:])
    for line, result in zip(lines[4:-1], schedule.results):
        cells = [cell.strip() for cell in line.split("|")[1:-1]]
        assert cells == [
            str(result.process.pid),
            str(result.process.arrival),
            str(result.process.burst),
            str(result.turnaround),
            str(result.waiting),
        ]