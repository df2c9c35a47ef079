"""Process control blocks, process states and fixed-partition memory."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

FIELD_SEPARATOR = ", "
_FIELD_COUNT = 6

# (partition number, size) of the fixed memory layout
DEFAULT_PARTITIONS: tuple[tuple[int, int], ...] = (
    (1, 40),
    (2, 25),
    (3, 15),
    (4, 10),
    (5, 8),
    (6, 2),
)

FREE = -1


class State(Enum):
    """Lifecycle state of a process."""

    NEW = auto()
    READY = auto()
    RUNNING = auto()
    WAITING = auto()
    TERMINATED = auto()
    NOT_ASSIGNED = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class PCB:
    """Process control block of one simulated process."""

    pid: int
    size: int
    arrival_time: int
    processing_time: int
    io_freq: int
    io_duration: int
    remaining_time: Optional[int] = None
    time_until_next_io: Optional[int] = None
    start_time: int = -1
    partition_number: int = -1
    state: State = State.NOT_ASSIGNED
    wait_time: int = 0
    termination_time: int = 0
    io_start_times: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.processing_time
        if self.time_until_next_io is None:
            self.time_until_next_io = self.io_freq


@dataclass
class MemoryPartition:
    """A fixed-size memory partition, holding the PID that occupies it or FREE."""

    number: int
    size: int
    occupied: int = FREE

    @property
    def is_free(self) -> bool:
        return self.occupied == FREE


class Memory:
    """Fixed-partition memory; processes go to the smallest free partition that fits."""

    def __init__(self, partitions: Optional[Iterable[MemoryPartition]] = None) -> None:
        if partitions is None:
            self.partitions = [MemoryPartition(number, size) for number, size in DEFAULT_PARTITIONS]
        else:
            self.partitions = list(partitions)

    def assign(self, process: PCB) -> bool:
        """Place the process in a partition; return False if none is available."""
        for partition in reversed(self.partitions):
            if process.size <= partition.size and partition.is_free:
                partition.occupied = process.pid
                process.partition_number = partition.number
                return True
        return False

    def free(self, process: PCB) -> bool:
        """Release the partition held by the process; return False if it held none."""
        for partition in reversed(self.partitions):
            if partition.occupied == process.pid:
                partition.occupied = FREE
                process.partition_number = -1
                return True
        return False


def parse_process(line: str) -> PCB:
    """Build a PCB from 'pid, size, arrival, processing, io_freq, io_duration'."""
    tokens = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(tokens) < _FIELD_COUNT:
        raise ValueError(
            f"expected {_FIELD_COUNT} fields separated by {FIELD_SEPARATOR!r}, got {len(tokens)}: {line!r}"
        )
    try:
        pid, size, arrival, processing, io_freq, io_duration = (
            int(token.strip()) for token in tokens[:_FIELD_COUNT]
        )
    except ValueError as exc:
        raise ValueError(f"invalid process line: {line!r}") from exc
    return PCB(
        pid=pid,
        size=size,
        arrival_time=arrival,
        processing_time=processing,
        io_freq=io_freq,
        io_duration=io_duration,
        io_start_times=[arrival],
    )


def all_terminated(processes: Iterable[PCB]) -> bool:
    """True when every process has terminated (vacuously true for none)."""
    return all(process.state is State.TERMINATED for process in processes)