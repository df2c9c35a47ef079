# schedsim

A small discrete-time simulator of CPU scheduling for operating systems
coursework. Processes arrive at given times, are placed in a fixed memory
partition, run on a single CPU, block for I/O at regular intervals and then
terminate. Every state transition is recorded in a text table. The table is
followed by summary statistics: throughput and the average turnaround, waiting
and response times.

## Scheduling policies

The `schedsim.scheduler.Policy` enum has three members:

- `EP`: external priorities. The ready process with the lowest PID is
  dispatched whenever the CPU is free. A running process is never preempted.
- `RR`: round robin. Ready processes are served first-in, first-out. A process
  that has run for a full time slice goes back to the ready queue.
- `EP_RR`: external priorities with preemption. Whenever a process arrives or
  finishes its I/O, or the running process uses up its time slice, the running
  process goes back to the ready queue. The CPU then goes to the ready process
  with the lowest PID.

The time slice is 100 time units by default.

## Memory

Memory has six fixed partitions, numbered 1 to 6, with sizes 40, 25, 15, 10, 8
and 2. An arriving process takes the smallest free partition that is large
enough for it. The partition is released when the process terminates. A
process for which no partition is free is still scheduled, with partition
number `-1`.

## Input format

There is one process per line, with fields separated by `", "`:

```
PID, size, arrival_time, processing_time, io_frequency, io_duration
```

For example:

```
10, 1, 0, 50, 20, 5
11, 12, 3, 120, 0, 0
```

- An I/O frequency of `0` means the process never performs I/O.
- Blank lines are ignored.
- Fields after the sixth are ignored.

A simulation is refused with `ValueError` in any of these cases:

- there are no processes;
- the time slice is not positive;
- an arrival time is negative;
- a processing time is not positive;
- an I/O parameter is negative;
- a process does I/O with a zero duration.

## Command line

```
schedsim input.txt
```

Options:

- `-p`, `--policy {EP,RR,EP_RR}`: the scheduling policy (default `EP`).
- `-t`, `--time-slice N`: the round-robin time slice (default `100`).
- `-o`, `--output-dir DIR`: the directory for the log (default `./output_files`).

The transition table and statistics are written to
`<output-dir>/execution_<input_file>_<policy>.txt`, where `<input_file>` is the
path exactly as it was given on the command line. The command does not create
the output directory, so it must already exist. On an unreadable or malformed
input file, on invalid process data or on a failure to write the output, the
command prints an error and exits with status 1.

## Library use

```python
from schedsim.scheduler import Policy, read_processes, run_simulation, write_output

processes = read_processes("input.txt")
log = run_simulation(processes, Policy.RR, 100)
print(log)
```

The modules and what each one provides:

- `schedsim.scheduler`
  - `Policy` and `run_simulation`. The policy may also be given as a string
    such as `"EP_RR"`. The PCBs passed in are not modified.
  - `read_processes` and `write_output`.
  - `main`, the entry point of the command.
- `schedsim.pcb`
  - `State`, the process states.
  - The `PCB` dataclass.
  - `MemoryPartition`.
  - `Memory`, with `assign` and `free`.
  - `parse_process`, which turns one input line into a `PCB`.
  - `all_terminated`.
- `schedsim.report`
  - The table formatters: `format_exec_header`, `format_exec_status`,
    `format_exec_footer` and `format_pcb_table`.
  - `calculate_averages`.

## Statistics

- Throughput is shown as `<number of processes>/<last simulated time>`.
- All averages are integers, truncated toward zero.
- Turnaround is termination time minus arrival time.
- Waiting time counts the ticks a process spent in the ready queue.
- Response time is based on the gaps between a process's arrival and the start
  of each of its I/O bursts. For each process, each gap is divided by the number
  of those time points and the results are added together. The sum over all
  processes is then divided by the number of processes.

## What it does not do

This is a single-CPU, tick-based model only.

- It does not simulate multiple processors or I/O devices.
- It has no memory swapping, and partitions cannot be resized.
- It has no interactive or graphical view.

## Tests

```
pip install .[test]
pytest
```