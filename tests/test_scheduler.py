import pytest

from schedsim.pcb import PCB, State, parse_process
from schedsim.report import format_exec_footer, format_exec_header
from schedsim.scheduler import (
    Policy,
    main,
    read_processes,
    run_simulation,
    write_output,
)


def _proc(pid, arrival, burst, io_freq=0, io_duration=0, size=1):
    return PCB(
        pid=pid,
        size=size,
        arrival_time=arrival,
        processing_time=burst,
        io_freq=io_freq,
        io_duration=io_duration,
        io_start_times=[arrival],
    )


def _transitions(text):
    rows = []
    for line in text.splitlines():
        cells = [cell.strip() for cell in line.strip("|").split("|")]
        if len(cells) == 4 and cells[0].isdigit():
            rows.append((int(cells[0]), int(cells[1]), cells[2], cells[3]))
    return rows


ALL_POLICIES = list(Policy)


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_single_process_without_io(policy):
    text = run_simulation([_proc(1, 0, 5)], policy)
    assert _transitions(text) == [
        (0, 1, "NEW", "READY"),
        (0, 1, "READY", "RUNNING"),
        (5, 1, "RUNNING", "TERMINATED"),
    ]


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_output_framing(policy):
    text = run_simulation([_proc(1, 0, 3), _proc(2, 1, 4)], policy)
    assert text.startswith(format_exec_header())
    assert format_exec_footer() in text
    assert text.endswith("\n")
    assert "Throughput: 2/" in text
    assert "Average TAT:" in text and "Average WT:" in text and "Average RT:" in text


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_every_process_terminates_once_in_time_order(policy):
    processes = [
        _proc(3, 0, 30, io_freq=7, io_duration=3),
        _proc(1, 2, 12, io_freq=5, io_duration=4),
        _proc(2, 4, 20),
    ]
    rows = _transitions(run_simulation(processes, policy, time_slice=6))
    terminated = [pid for _, pid, _, new in rows if new == "TERMINATED"]
    assert sorted(terminated) == [1, 2, 3]
    times = [time for time, *_ in rows]
    assert times == sorted(times)


def test_external_priority_prefers_lower_pid():
    rows = _transitions(run_simulation([_proc(2, 0, 3), _proc(1, 0, 3)], Policy.EP))
    first_run = next(pid for _, pid, _, new in rows if new == "RUNNING")
    assert first_run == 1


def test_round_robin_preempts_at_time_slice():
    rows = _transitions(run_simulation([_proc(1, 0, 150), _proc(2, 0, 150)], Policy.RR, 100))
    assert (0, 1, "READY", "RUNNING") in rows
    assert (100, 1, "RUNNING", "READY") in rows
    assert (100, 2, "READY", "RUNNING") in rows


def test_external_priority_does_not_preempt_on_time_slice():
    rows = _transitions(run_simulation([_proc(1, 0, 150), _proc(2, 0, 150)], Policy.EP, 100))
    assert not any(old == "RUNNING" and new == "READY" for _, _, old, new in rows)
    assert (150, 1, "RUNNING", "TERMINATED") in rows


def test_preemptive_priority_on_arrival():
    processes = [_proc(5, 0, 10), _proc(1, 3, 2)]
    rows = _transitions(run_simulation(processes, Policy.EP_RR))
    assert (3, 5, "RUNNING", "READY") in rows
    assert (3, 1, "READY", "RUNNING") in rows


def test_non_preemptive_priority_waits_for_running_process():
    processes = [_proc(5, 0, 10), _proc(1, 3, 2)]
    rows = _transitions(run_simulation(processes, Policy.EP))
    assert (10, 5, "RUNNING", "TERMINATED") in rows
    assert (10, 1, "READY", "RUNNING") in rows


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_io_returns_after_duration(policy):
    rows = _transitions(run_simulation([_proc(1, 0, 10, io_freq=4, io_duration=2)], policy))
    waits = [time for time, pid, _, new in rows if new == "WAITING"]
    assert waits and waits[0] == 4
    for start in waits:
        assert (start + 2, 1, "WAITING", "READY") in rows


def test_input_processes_are_not_modified():
    processes = [_proc(1, 0, 5), _proc(2, 1, 5)]
    run_simulation(processes, Policy.EP_RR)
    assert [p.state for p in processes] == [State.NOT_ASSIGNED, State.NOT_ASSIGNED]
    assert [p.remaining_time for p in processes] == [5, 5]


def test_late_arrival_after_all_terminated_is_not_simulated():
    text = run_simulation([_proc(1, 0, 2), _proc(2, 10, 2)], Policy.EP)
    pids = {pid for _, pid, _, _ in _transitions(text)}
    assert pids == {1}
    assert "Throughput: 1/" in text


def test_policy_accepts_string_value():
    processes = [_proc(1, 0, 150), _proc(2, 0, 150)]
    assert run_simulation(processes, "RR", 100) == run_simulation(processes, Policy.RR, 100)


@pytest.mark.parametrize(
    "processes, time_slice",
    [
        ([], 100),
        ([_proc(1, 0, 0)], 100),
        ([_proc(1, 0, 5, io_freq=2, io_duration=0)], 100),
        ([_proc(1, -1, 5)], 100),
        ([_proc(1, 0, 5)], 0),
    ],
)
def test_invalid_input_raises(processes, time_slice):
    with pytest.raises(ValueError):
        run_simulation(processes, Policy.RR, time_slice)


def test_unknown_policy_raises():
    with pytest.raises(ValueError):
        run_simulation([_proc(1, 0, 5)], "FCFS")


def test_read_processes_skips_blank_lines(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("1, 10, 0, 5, 2, 1\n\n2, 3, 4, 6, 0, 0\n", encoding="utf-8")
    processes = read_processes(path)
    assert processes == [parse_process("1, 10, 0, 5, 2, 1"), parse_process("2, 3, 4, 6, 0, 0")]


def test_read_processes_rejects_bad_line(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("1, 10, 0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_processes(path)


def test_read_processes_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_processes(tmp_path / "missing.txt")


def test_write_output_overwrites(tmp_path, capsys):
    path = tmp_path / "out.txt"
    path.write_text("old", encoding="utf-8")
    write_output("new content", path)
    assert path.read_text(encoding="utf-8") == "new content"
    assert "File content overwritten successfully." in capsys.readouterr().out


def test_write_output_missing_directory(tmp_path):
    with pytest.raises(OSError):
        write_output("text", tmp_path / "nowhere" / "out.txt")


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_main_writes_execution_file(tmp_path, monkeypatch, policy):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "output_files").mkdir()
    (tmp_path / "input.txt").write_text(
        "1, 10, 0, 150, 40, 5\n2, 5, 3, 120, 0, 0\n", encoding="utf-8"
    )
    assert main(["input.txt", "--policy", policy.value]) == 0
    written = (tmp_path / "output_files" / f"execution_input.txt_{policy.value}.txt").read_text(
        encoding="utf-8"
    )
    assert written == run_simulation(read_processes(tmp_path / "input.txt"), policy)


def test_main_missing_input(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["absent.txt"]) == 1
    assert "Unable to open file: absent.txt" in capsys.readouterr().err


def test_main_missing_output_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "input.txt").write_text("1, 10, 0, 5, 0, 0\n", encoding="utf-8")
    assert main(["input.txt"]) == 1
    assert "Error opening file!" in capsys.readouterr().err