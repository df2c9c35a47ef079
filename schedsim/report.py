"""Text tables and statistics for the scheduling simulator."""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from .pcb import PCB, State

_PCB_TABLE_WIDTH = 83
_EXEC_TABLE_WIDTH = 49

_PCB_COLUMNS = (
    ("PID", 4),
    ("Partition", 11),
    ("Size", 5),
    ("Arrival Time", 13),
    ("Start Time", 11),
    ("Remaining Time", 14),
    ("State", 11),
)

_EXEC_COLUMNS = (
    ("Time of Transition", 18),
    ("PID", 3),
    ("Old State", 10),
    ("New State", 10),
)


def _border(width: int) -> str:
    return "+" + "+".rjust(width, "-") + "\n"


def _row(values: Iterable[object], widths: Iterable[int]) -> str:
    cells = "".join(f"{str(value):>{width}} |" for value, width in zip(values, widths))
    return "|" + cells + "\n"


def format_pcb_table(processes: Union[PCB, Iterable[PCB]]) -> str:
    """Render one PCB or a collection of PCBs as a table."""
    if isinstance(processes, PCB):
        processes = [processes]
    widths = [width for _, width in _PCB_COLUMNS]
    parts = [
        _border(_PCB_TABLE_WIDTH),
        _row((name for name, _ in _PCB_COLUMNS), widths),
        _border(_PCB_TABLE_WIDTH),
    ]
    parts.extend(
        _row(
            (
                p.pid,
                p.partition_number,
                p.size,
                p.arrival_time,
                p.start_time,
                p.remaining_time,
                p.state,
            ),
            widths,
        )
        for p in processes
    )
    parts.append(_border(_PCB_TABLE_WIDTH))
    return "".join(parts)


def format_exec_header() -> str:
    """Top border and header of the state-transition table."""
    return (
        _border(_EXEC_TABLE_WIDTH)
        + _row((name for name, _ in _EXEC_COLUMNS), (width for _, width in _EXEC_COLUMNS))
        + _border(_EXEC_TABLE_WIDTH)
    )


def format_exec_status(current_time: int, pid: int, old_state: State, new_state: State) -> str:
    """One row of the state-transition table."""
    return _row((current_time, pid, old_state, new_state), (width for _, width in _EXEC_COLUMNS))


def format_exec_footer() -> str:
    """Bottom border of the state-transition table."""
    return _border(_EXEC_TABLE_WIDTH)


def _div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def calculate_averages(jobs: Sequence[PCB], current_time: int) -> str:
    """Throughput and average turnaround, wait and response times."""
    if not jobs:
        raise ValueError("cannot compute averages of an empty job list")
    count = len(jobs)
    total_wait = sum(job.wait_time for job in jobs)
    total_turnaround = sum(job.termination_time - job.arrival_time for job in jobs)
    total_response = 0
    for job in jobs:
        starts = job.io_start_times
        total_response += sum(
            _div(later - earlier, len(starts)) for earlier, later in zip(starts, starts[1:])
        )
    return (
        f"Throughput: {count}/{current_time}"
        f"\nAverage TAT: {_div(total_turnaround, count)}"
        f"\nAverage WT: {_div(total_wait, count)}"
        f"\nAverage RT: {_div(total_response, count)}"
    )