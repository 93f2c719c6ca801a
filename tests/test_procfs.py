from datetime import datetime, timezone

import pytest

from sysprobe.linux.procfs import ProcFS, parse_pid_stat, parse_proc_stat

STAT = """cpu  300 10 50 4000 5 1 2 0 0 0
cpu0 100 4 20 2000 2 1 1 0 0 0
cpu1 200 6 30 2000 3 0 1 0 0 0
intr 12345 0 0
ctxt 987654
btime 1500000000
processes 4321
procs_running 2
procs_blocked 0
"""

PID_STAT = (
    "42 (my (odd) name) S 1 42 42 0 -1 4194560 100 0 0 0 250 75 0 0 "
    "20 0 1 0 12345 1048576 256 18446744073709551615 0 0"
)


@pytest.fixture
def proc(tmp_path):
    (tmp_path / "stat").write_text(STAT)
    (tmp_path / "loadavg").write_text("0.52 0.58 0.59 1/467 3217\n")
    for pid in ("100", "7", "1"):
        (tmp_path / pid).mkdir()
    (tmp_path / "42").mkdir()
    (tmp_path / "42" / "stat").write_text(PID_STAT)
    (tmp_path / "net").mkdir()
    (tmp_path / "self").write_text("")
    return tmp_path


def test_parse_proc_stat_fields():
    stat = parse_proc_stat(STAT)
    assert stat.boot_time == 1500000000
    assert stat.context_switches == 987654
    assert stat.processes == 4321
    assert sorted(stat.cpus) == [0, 1]


def test_parse_proc_stat_total_is_sum_of_cpus():
    stat = parse_proc_stat(STAT.encode())
    assert stat.cpu_total.user == pytest.approx(stat.cpus[0].user + stat.cpus[1].user)
    assert stat.cpu_total.system == pytest.approx(
        stat.cpus[0].system + stat.cpus[1].system
    )


def test_parse_proc_stat_rejects_bad_number():
    with pytest.raises(ValueError):
        parse_proc_stat("btime abc\n")


def test_parse_pid_stat():
    stat = parse_pid_stat(PID_STAT)
    assert stat.pid == 42
    assert stat.comm == "my (odd) name"
    assert stat.state == "S"
    assert stat.ppid == 1
    assert stat.utime == 250
    assert stat.stime == 75
    assert stat.starttime == 12345
    assert stat.virtual_memory() == 1048576
    assert stat.resident_memory(page_size=1) == stat.rss


def test_parse_pid_stat_truncated():
    with pytest.raises(ValueError):
        parse_pid_stat("42 (x) S 1 2 3")


def test_parse_pid_stat_without_parentheses():
    with pytest.raises(ValueError):
        parse_pid_stat("42 x S 1")


def test_path_joins_below_mount_point(proc):
    fs = ProcFS(proc)
    assert fs.path("net", "snmp") == str(proc / "net" / "snmp")
    assert fs.path(42, "stat") == str(proc / "42" / "stat")


def test_load_avg(proc):
    load = ProcFS(proc).load_avg()
    assert (load.one, load.five, load.fifteen) == (0.52, 0.58, 0.59)


def test_boot_time_is_cached(proc):
    fs = ProcFS(proc)
    first = fs.boot_time()
    assert first == datetime.fromtimestamp(1500000000, tz=timezone.utc)
    (proc / "stat").write_text("btime 1600000000\n")
    assert fs.boot_time() == first


def test_pids_lists_numeric_directories(proc):
    assert ProcFS(proc).pids() == [1, 7, 42, 100]


def test_pid_stat_reads_file(proc):
    assert ProcFS(proc).pid_stat(42).comm == "my (odd) name"


def test_pid_stat_missing_process(proc):
    with pytest.raises(FileNotFoundError):
        ProcFS(proc).pid_stat(9999)