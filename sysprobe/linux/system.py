"""Entry point to host and process information on Linux."""

from __future__ import annotations

import os
from typing import Union

from sysprobe.linux.host import LinuxHost, new_host
from sysprobe.linux.process import LinuxProcess
from sysprobe.linux.procfs import DEFAULT_MOUNT_POINT, ProcFS


class LinuxSystem:
    """Host and process provider backed by procfs.

    host_fs is the root of the host file system; "" means this system.
    """

    def __init__(self, host_fs: Union[str, os.PathLike] = "") -> None:
        root = os.fspath(host_fs)
        mount_point = os.path.join(root, "proc") if root else DEFAULT_MOUNT_POINT
        self.proc_fs = ProcFS(mount_point)

    def __repr__(self) -> str:
        return f"LinuxSystem({self.proc_fs!r})"

    def host(self) -> LinuxHost:
        """Return the host; see new_host for how errors are reported."""
        return new_host(self.proc_fs)

    def processes(self) -> list[LinuxProcess]:
        """Return all processes that currently exist."""
        found = []
        for pid in self.proc_fs.pids():
            try:
                found.append(LinuxProcess(pid, self.proc_fs))
            except FileNotFoundError:
                continue
        return found

    def process(self, pid: int) -> LinuxProcess:
        """Return process pid; raises FileNotFoundError if it does not exist."""
        return LinuxProcess(pid, self.proc_fs)

    def self(self) -> LinuxProcess:
        """Return the process the procfs mount names as its reader."""
        target = os.readlink(self.proc_fs.path("self"))
        return LinuxProcess(int(os.path.basename(target)), self.proc_fs)