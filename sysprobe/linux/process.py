"""Process information read from a procfs mount."""

from __future__ import annotations

import dataclasses
import os
from datetime import timedelta
from typing import Optional

from sysprobe.linux.capabilities import read_capabilities
from sysprobe.linux.procfs import USER_HZ, ProcFS
from sysprobe.linux.procnet import get_net_snmp_stats, get_netstat_stats
from sysprobe.linux.seccomp import read_seccomp_fields
from sysprobe.linux.util import parse_key_value
from sysprobe.model import (
    CapabilityInfo,
    CPUTimes,
    MemoryInfo,
    NetworkCountersInfo,
    ProcessInfo,
    SeccompInfo,
    UserInfo,
)


def ticks_to_seconds(ticks: int) -> float:
    """Convert clock ticks into seconds."""
    return ticks / USER_HZ


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class LinuxProcess:
    """A process whose data is read from a procfs mount.

    Raises FileNotFoundError if the process does not exist.
    """

    def __init__(self, pid: int, fs: ProcFS) -> None:
        self.pid = int(pid)
        self.fs = fs
        self._info: Optional[ProcessInfo] = None
        os.stat(self._path())

    def __repr__(self) -> str:
        return f"LinuxProcess(pid={self.pid}, fs={self.fs!r})"

    def _path(self, *parts: str) -> str:
        return self.fs.path(str(self.pid), *parts)

    def _read(self, *parts: str) -> bytes:
        with open(self._path(*parts), "rb") as fh:
            return fh.read()

    def _readlink(self, name: str) -> str:
        try:
            return os.readlink(self._path(name))
        except FileNotFoundError:
            return ""

    def _cmdline(self) -> list[str]:
        data = self._read("cmdline")
        if not data:
            return []
        return [_decode(part) for part in data.rstrip(b"\0").split(b"\0")]

    def parent(self) -> "LinuxProcess":
        """Return the parent process."""
        return LinuxProcess(self.info().ppid, self.fs)

    def cwd(self) -> str:
        """Return the working directory, or "" if it cannot be resolved."""
        return self._readlink("cwd")

    def info(self) -> ProcessInfo:
        """Return the static information about the process, read once."""
        if self._info is None:
            stat = self.fs.pid_stat(self.pid)
            exe = self._readlink("exe")
            args = self._cmdline()
            cwd = self.cwd()
            boot = self.fs.boot_time()
            self._info = ProcessInfo(
                name=stat.comm,
                pid=self.pid,
                ppid=stat.ppid,
                cwd=cwd,
                exe=exe,
                args=args,
                start_time=boot + timedelta(seconds=ticks_to_seconds(stat.starttime)),
            )
        return dataclasses.replace(self._info, args=list(self._info.args))

    def memory(self) -> MemoryInfo:
        """Return the resident and virtual memory size in bytes."""
        stat = self.fs.pid_stat(self.pid)
        return MemoryInfo(resident=stat.resident_memory(), virtual=stat.virtual_memory())

    def cpu_time(self) -> CPUTimes:
        """Return the user and system CPU time in seconds."""
        stat = self.fs.pid_stat(self.pid)
        return CPUTimes(
            user=ticks_to_seconds(stat.utime), system=ticks_to_seconds(stat.stime)
        )

    def _fds(self) -> list[str]:
        names = [n for n in os.listdir(self._path("fd")) if n.isdigit()]
        return sorted(names, key=int)

    def open_handles(self) -> list[str]:
        """Return the targets of the open file descriptors."""
        targets = []
        for fd in self._fds():
            try:
                targets.append(os.readlink(self._path("fd", fd)))
            except OSError:
                continue
        return targets

    def open_handle_count(self) -> int:
        """Return the number of open file descriptors."""
        return len(self._fds())

    def environment(self) -> dict[str, str]:
        """Return the environment the process was started with."""
        env: dict[str, str] = {}
        for pair in self._read("environ").split(b"\0"):
            key, found, value = pair.partition(b"=")
            if not found:
                continue
            key_text = _decode(key).strip()
            if not key_text:
                continue
            env[key_text] = _decode(value)
        return env

    def seccomp(self) -> SeccompInfo:
        """Return the seccomp state."""
        return read_seccomp_fields(self._read("status"))

    def capabilities(self) -> CapabilityInfo:
        """Return the capability sets."""
        return read_capabilities(self._read("status"))

    def user(self) -> UserInfo:
        """Return the real, effective and saved user and group IDs."""
        user = UserInfo()
        try:
            for key, value in parse_key_value(self._read("status"), ":"):
                ids = value.split("\t")
                if len(ids) < 3:
                    continue
                if key == "Uid":
                    user.uid, user.euid, user.suid = ids[:3]
                elif key == "Gid":
                    user.gid, user.egid, user.sgid = ids[:3]
        except ValueError:
            pass
        return user

    def network_counters(self) -> NetworkCountersInfo:
        """Return the network counters of the process's network namespace."""
        snmp = get_net_snmp_stats(self._read("net", "snmp"))
        netstat = get_netstat_stats(self._read("net", "netstat"))
        return NetworkCountersInfo(snmp=snmp, netstat=netstat)