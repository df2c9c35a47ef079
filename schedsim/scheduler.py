"""Tick-by-tick simulation of priority and round-robin CPU scheduling."""

from __future__ import annotations

import argparse
import copy
import sys
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .pcb import PCB, Memory, State, all_terminated, parse_process
from .report import (
    calculate_averages,
    format_exec_footer,
    format_exec_header,
    format_exec_status,
)

DEFAULT_TIME_SLICE = 100
DEFAULT_OUTPUT_DIR = "./output_files"


class Policy(Enum):
    """Scheduling policy; the value is used as the output file suffix."""

    EP = "EP"  # external priorities (lower PID first), no preemption
    RR = "RR"  # round robin with a time slice
    EP_RR = "EP_RR"  # external priorities, preemptive, with a time slice


class _Simulation:
    """State of one simulation run."""

    def __init__(self, processes: Iterable[PCB], policy: Policy, time_slice: int) -> None:
        self.processes = [copy.deepcopy(process) for process in processes]
        self.policy = policy
        self.time_slice = time_slice
        self.memory = Memory()
        self.ready: list[PCB] = []
        self.waiting: list[PCB] = []
        self.jobs: list[PCB] = []
        self.running: Optional[PCB] = None
        self.now = 0
        self.preempt = False
        self.lines = [format_exec_header()]

    def run(self) -> str:
        while not self.jobs or not all_terminated(self.jobs):
            self._admit_arrivals()
            self._finish_io()
            self._advance_running()
            if self.preempt:
                self._preempt_running()
                self.preempt = False
            if self.policy is not Policy.RR:
                self.ready.sort(key=lambda process: process.pid, reverse=True)
            self._dispatch()
            for process in self.ready:
                process.wait_time += 1
            self.now += 1

        self.lines.append(format_exec_footer())
        self.lines.append("\n" + calculate_averages(self.jobs, self.now - 1) + "\n")
        return "".join(self.lines)

    def _log(self, pid: int, old: State, new: State) -> None:
        self.lines.append(format_exec_status(self.now, pid, old, new))

    def _admit_arrivals(self) -> None:
        for process in self.processes:
            if process.arrival_time != self.now:
                continue
            self.memory.assign(process)
            process.state = State.READY
            if self.policy is Policy.RR:
                self.ready.insert(0, process)
                self.jobs.insert(0, process)
            else:
                self.ready.append(process)
                self.jobs.append(process)
            if self.policy is Policy.EP_RR:
                self.preempt = True
            self._log(process.pid, State.NEW, State.READY)

    def _finish_io(self) -> None:
        done = [
            process
            for process in reversed(self.waiting)
            if self.now - process.start_time == process.io_duration
        ]
        if not done:
            return
        done_ids = {id(process) for process in done}
        self.waiting = [process for process in self.waiting if id(process) not in done_ids]
        for process in done:
            process.state = State.READY
            if self.policy is Policy.EP:
                self.ready.append(process)
            else:
                self.ready.insert(0, process)
            if self.policy is Policy.EP_RR:
                self.preempt = True
            self._log(process.pid, State.WAITING, State.READY)

    def _advance_running(self) -> None:
        process = self.running
        if process is None:
            return
        process.remaining_time -= 1
        process.time_until_next_io -= 1

        if process.remaining_time == 0:
            self._log(process.pid, State.RUNNING, State.TERMINATED)
            process.termination_time = self.now
            process.remaining_time = 0
            process.state = State.TERMINATED
            self.memory.free(process)
            self.running = None
        elif process.time_until_next_io == 0 and process.io_freq != 0:
            process.time_until_next_io = process.io_freq
            process.state = State.WAITING
            process.start_time = self.now
            process.io_start_times.append(self.now)
            self._log(process.pid, State.RUNNING, State.WAITING)
            self.waiting.append(process)
            self.running = None
        elif self.policy is not Policy.EP and self.now - process.start_time == self.time_slice:
            self.preempt = True

    def _preempt_running(self) -> None:
        process = self.running
        if process is None:
            return
        process.state = State.READY
        self._log(process.pid, State.RUNNING, State.READY)
        self.ready.insert(0, process)
        self.running = None

    def _dispatch(self) -> None:
        if self.running is not None or not self.ready or all_terminated(self.jobs):
            return
        process = self.ready.pop()
        process.start_time = self.now
        process.state = State.RUNNING
        self.running = process
        self._log(process.pid, State.READY, State.RUNNING)


def _validate(processes: Sequence[PCB], time_slice: int) -> None:
    if not processes:
        raise ValueError("no processes to simulate")
    if time_slice <= 0:
        raise ValueError(f"time slice must be positive, got {time_slice}")
    for process in processes:
        if process.arrival_time < 0:
            raise ValueError(f"process {process.pid} has a negative arrival time")
        if process.remaining_time is None or process.remaining_time <= 0:
            raise ValueError(f"process {process.pid} needs a positive processing time")
        if process.io_freq < 0 or process.io_duration < 0:
            raise ValueError(f"process {process.pid} has negative I/O parameters")
        if process.io_freq > 0 and process.io_duration == 0:
            raise ValueError(f"process {process.pid} does I/O with a zero duration")


def run_simulation(
    processes: Iterable[PCB],
    policy: Union[Policy, str] = Policy.EP,
    time_slice: int = DEFAULT_TIME_SLICE,
) -> str:
    """Simulate the processes under the policy and return the transition log and averages.

    The given PCBs are not modified.
    """
    policy = Policy(policy)
    processes = list(processes)
    _validate(processes, time_slice)
    return _Simulation(processes, policy, time_slice).run()


def read_processes(path: Union[str, Path]) -> list[PCB]:
    """Read one process per line; blank lines are ignored."""
    with open(path, encoding="utf-8") as handle:
        return [parse_process(line) for line in handle if line.strip()]


def write_output(text: str, path: Union[str, Path]) -> None:
    """Overwrite the file at path with text."""
    Path(path).write_text(text, encoding="utf-8")
    print("File content overwritten successfully.")
    print(f"Output generated in {path}.txt")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="schedsim", description="Simulate CPU scheduling of processes read from a file."
    )
    parser.add_argument("input_file", help="file with one 'pid, size, arrival, burst, io_freq, io_duration' per line")
    parser.add_argument(
        "-p",
        "--policy",
        choices=[policy.value for policy in Policy],
        default=Policy.EP.value,
        help="scheduling policy (default: EP)",
    )
    parser.add_argument(
        "-t", "--time-slice", type=int, default=DEFAULT_TIME_SLICE, help="round-robin time slice"
    )
    parser.add_argument(
        "-o", "--output-dir", default=DEFAULT_OUTPUT_DIR, help="directory for the execution log"
    )
    args = parser.parse_args(argv)
    policy = Policy(args.policy)

    try:
        processes = read_processes(args.input_file)
    except OSError:
        print(f"Error: Unable to open file: {args.input_file}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        text = run_simulation(processes, policy, args.time_slice)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_path = f"{args.output_dir}/execution_{args.input_file}_{policy.value}.txt"
    try:
        write_output(text, output_path)
    except OSError:
        print("Error opening file!", file=sys.stderr)
        return 1
    return 0