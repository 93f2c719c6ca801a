"""Reading of the system-wide and per-process files under a procfs mount."""

from __future__ import annotations

import mmap
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from sysprobe.model import LoadAverageInfo

DEFAULT_MOUNT_POINT = "/proc"

# Clock ticks per second used by the kernel for the values it reports to user space.
USER_HZ = 100

Content = Union[str, bytes]

_CPU_FIELDS = (
    "user", "nice", "system", "idle", "iowait",
    "irq", "softirq", "steal", "guest", "guest_nice",
)


def _as_text(content: Content) -> str:
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8", errors="replace")
    return content


@dataclass
class CPUStat:
    """Time spent by a CPU in each state, in seconds."""

    user: float = 0.0
    nice: float = 0.0
    system: float = 0.0
    idle: float = 0.0
    iowait: float = 0.0
    irq: float = 0.0
    softirq: float = 0.0
    steal: float = 0.0
    guest: float = 0.0
    guest_nice: float = 0.0


@dataclass
class ProcStat:
    """System-wide statistics from the stat file."""

    boot_time: int = 0
    cpu_total: CPUStat = field(default_factory=CPUStat)
    cpus: dict[int, CPUStat] = field(default_factory=dict)
    context_switches: int = 0
    processes: int = 0
    procs_running: int = 0
    procs_blocked: int = 0


@dataclass
class PidStat:
    """Statistics of one process from its stat file."""

    pid: int = 0
    comm: str = ""
    state: str = ""
    ppid: int = 0
    pgrp: int = 0
    session: int = 0
    tty: int = 0
    tpgid: int = 0
    flags: int = 0
    minflt: int = 0
    cminflt: int = 0
    majflt: int = 0
    cmajflt: int = 0
    utime: int = 0
    stime: int = 0
    cutime: int = 0
    cstime: int = 0
    priority: int = 0
    nice: int = 0
    num_threads: int = 0
    starttime: int = 0
    vsize: int = 0
    rss: int = 0

    def resident_memory(self, page_size: Optional[int] = None) -> int:
        """Return the resident set size in bytes."""
        return self.rss * (page_size if page_size is not None else mmap.PAGESIZE)

    def virtual_memory(self) -> int:
        """Return the virtual memory size in bytes."""
        return self.vsize


def _parse_cpu(values: list[str]) -> CPUStat:
    seconds = [int(v) / USER_HZ for v in values[: len(_CPU_FIELDS)]]
    return CPUStat(**dict(zip(_CPU_FIELDS, seconds)))


def parse_proc_stat(content: Content) -> ProcStat:
    """Parse the contents of the system-wide stat file."""
    stat = ProcStat()
    for line in _as_text(content).splitlines():
        parts = line.split()
        if not parts:
            continue
        key, rest = parts[0], parts[1:]
        try:
            if key == "cpu":
                stat.cpu_total = _parse_cpu(rest)
            elif key.startswith("cpu") and key[3:].isdigit():
                stat.cpus[int(key[3:])] = _parse_cpu(rest)
            elif key == "btime":
                stat.boot_time = int(rest[0])
            elif key == "ctxt":
                stat.context_switches = int(rest[0])
            elif key == "processes":
                stat.processes = int(rest[0])
            elif key == "procs_running":
                stat.procs_running = int(rest[0])
            elif key == "procs_blocked":
                stat.procs_blocked = int(rest[0])
        except (ValueError, IndexError) as exc:
            raise ValueError(f"couldn't parse {line!r}: {exc}") from exc
    return stat


def parse_pid_stat(content: Content) -> PidStat:
    """Parse the contents of a process stat file."""
    text = _as_text(content)
    start = text.find("(")
    end = text.rfind(")")
    if start < 0 or end < start:
        raise ValueError(f"invalid stat format: {text!r}")

    fields = text[end + 1:].split()
    if len(fields) < 22:
        raise ValueError(f"too few fields in stat: {text!r}")

    try:
        return PidStat(
            pid=int(text[:start].strip()),
            comm=text[start + 1:end],
            state=fields[0],
            ppid=int(fields[1]),
            pgrp=int(fields[2]),
            session=int(fields[3]),
            tty=int(fields[4]),
            tpgid=int(fields[5]),
            flags=int(fields[6]),
            minflt=int(fields[7]),
            cminflt=int(fields[8]),
            majflt=int(fields[9]),
            cmajflt=int(fields[10]),
            utime=int(fields[11]),
            stime=int(fields[12]),
            cutime=int(fields[13]),
            cstime=int(fields[14]),
            priority=int(fields[15]),
            nice=int(fields[16]),
            num_threads=int(fields[17]),
            starttime=int(fields[19]),
            vsize=int(fields[20]),
            rss=int(fields[21]),
        )
    except ValueError as exc:
        raise ValueError(f"invalid stat format: {exc}") from exc


class ProcFS:
    """A procfs mount point."""

    def __init__(self, mount_point: Union[str, os.PathLike] = DEFAULT_MOUNT_POINT) -> None:
        self.mount_point = os.fspath(mount_point)
        self._boot_time: Optional[datetime] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"ProcFS({self.mount_point!r})"

    def path(self, *args: Union[str, int]) -> str:
        """Return the path of args below the mount point."""
        return os.path.join(self.mount_point, *(str(a) for a in args))

    def _read(self, *args: Union[str, int]) -> bytes:
        with open(self.path(*args), "rb") as fh:
            return fh.read()

    def stat(self) -> ProcStat:
        """Read the system-wide stat file."""
        return parse_proc_stat(self._read("stat"))

    def load_avg(self) -> LoadAverageInfo:
        """Read the load averages."""
        parts = _as_text(self._read("loadavg")).split()
        if len(parts) < 3:
            raise ValueError(f"malformed loadavg: {parts!r}")
        return LoadAverageInfo(
            one=float(parts[0]), five=float(parts[1]), fifteen=float(parts[2])
        )

    def boot_time(self) -> datetime:
        """Return the boot time, read once and then cached."""
        with self._lock:
            if self._boot_time is None:
                seconds = self.stat().boot_time
                self._boot_time = datetime.fromtimestamp(seconds, tz=timezone.utc)
            return self._boot_time

    def pids(self) -> list[int]:
        """Return the IDs of all processes, in ascending order."""
        return sorted(
            int(name) for name in os.listdir(self.mount_point) if name.isdigit()
        )

    def pid_stat(self, pid: int) -> PidStat:
        """Read the stat file of process pid."""
        return parse_pid_stat(self._read(pid, "stat"))