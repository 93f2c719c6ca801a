"""Data types shared by the host and process providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional


class SysinfoNotImplementedError(NotImplementedError):
    """Raised when a piece of information is not available on this platform."""

    def __init__(self, message: str = "unimplemented") -> None:
        super().__init__(message)


class MultiError(Exception):
    """Several errors collected while gathering information."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: list[BaseException] = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        joined = "; ".join(str(err) for err in self.errors)
        if len(self.errors) == 1:
            return f"1 error: {joined}"
        return f"{len(self.errors)} errors: {joined}"

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


@dataclass
class OSInfo:
    """Operating system details."""

    type: str = ""
    family: str = ""
    platform: str = ""
    name: str = ""
    version: str = ""
    major: int = 0
    minor: int = 0
    patch: int = 0
    build: str = ""
    codename: str = ""


@dataclass
class HostInfo:
    """Static information about a host."""

    architecture: str = ""
    boot_time: Optional[datetime] = None
    containerized: Optional[bool] = None
    hostname: str = ""
    ips: list[str] = field(default_factory=list)
    kernel_version: str = ""
    macs: list[str] = field(default_factory=list)
    os: Optional[OSInfo] = None
    timezone: str = ""
    timezone_offset_sec: int = 0
    unique_id: str = ""


@dataclass
class CPUTimes:
    """CPU time spent in each state, in seconds."""

    user: float = 0.0
    system: float = 0.0
    idle: float = 0.0
    iowait: float = 0.0
    irq: float = 0.0
    nice: float = 0.0
    softirq: float = 0.0
    steal: float = 0.0

    def total(self) -> float:
        """Return the sum of the time spent in all states."""
        return (
            self.user
            + self.system
            + self.idle
            + self.iowait
            + self.irq
            + self.nice
            + self.softirq
            + self.steal
        )


@dataclass
class HostMemoryInfo:
    """Host memory usage, in bytes."""

    total: int = 0
    used: int = 0
    available: int = 0
    free: int = 0
    virtual_total: int = 0
    virtual_used: int = 0
    virtual_free: int = 0
    metrics: dict[str, int] = field(default_factory=dict)


@dataclass
class LoadAverageInfo:
    """System load averages over one, five and fifteen minutes."""

    one: float = 0.0
    five: float = 0.0
    fifteen: float = 0.0


@dataclass
class ProcessInfo:
    """Static information about a process."""

    name: str = ""
    pid: int = 0
    ppid: int = 0
    cwd: str = ""
    exe: str = ""
    args: list[str] = field(default_factory=list)
    start_time: Optional[datetime] = None


@dataclass
class UserInfo:
    """Real, effective and saved user and group IDs of a process."""

    uid: str = ""
    euid: str = ""
    suid: str = ""
    gid: str = ""
    egid: str = ""
    sgid: str = ""


@dataclass
class MemoryInfo:
    """Process memory usage, in bytes."""

    resident: int = 0
    virtual: int = 0
    metrics: dict[str, int] = field(default_factory=dict)


@dataclass
class CapabilityInfo:
    """Capability sets of a process, as lists of capability names."""

    inheritable: Optional[list[str]] = None
    permitted: Optional[list[str]] = None
    effective: Optional[list[str]] = None
    bounding: Optional[list[str]] = None
    ambient: Optional[list[str]] = None


@dataclass
class SeccompInfo:
    """Seccomp state of a process."""

    mode: str = ""
    no_new_privs: Optional[bool] = None


@dataclass
class NetworkCountersInfo:
    """Network counters keyed by protocol section, then counter name."""

    snmp: dict[str, dict[str, int]] = field(default_factory=dict)
    netstat: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass
class VMStatInfo:
    """Virtual memory counters keyed by their names in /proc/vmstat."""

    counters: dict[str, int] = field(default_factory=dict)

    def __getitem__(self, key: str) -> int:
        return self.counters[key]

    def __contains__(self, key: object) -> bool:
        return key in self.counters

    def __len__(self) -> int:
        return len(self.counters)