"""Host information read from a procfs mount."""

from __future__ import annotations

import socket
import time
from typing import Optional

from sysprobe.linux.container import is_containerized
from sysprobe.linux.machine import architecture, kernel_version, machine_id
from sysprobe.linux.memory import parse_meminfo
from sysprobe.linux.osinfo import operating_system
from sysprobe.linux.procfs import ProcFS, ProcStat
from sysprobe.linux.procnet import get_net_snmp_stats, get_netstat_stats
from sysprobe.linux.vmstat import parse_vmstat
from sysprobe.model import (
    CPUTimes,
    HostInfo,
    HostMemoryInfo,
    LoadAverageInfo,
    MultiError,
    NetworkCountersInfo,
    VMStatInfo,
)


class LinuxHost:
    """A Linux host whose dynamic data is read from a procfs mount."""

    def __init__(
        self,
        fs: ProcFS,
        stat: Optional[ProcStat] = None,
        info: Optional[HostInfo] = None,
    ) -> None:
        self.fs = fs
        self.stat = stat if stat is not None else ProcStat()
        self.info = info if info is not None else HostInfo()

    def __repr__(self) -> str:
        return f"LinuxHost({self.fs!r})"

    def _read(self, *parts: str) -> bytes:
        with open(self.fs.path(*parts), "rb") as fh:
            return fh.read()

    def memory(self) -> HostMemoryInfo:
        """Return the current memory usage from meminfo."""
        return parse_meminfo(self._read("meminfo"))

    def vm_stat(self) -> VMStatInfo:
        """Return the virtual memory counters from vmstat."""
        return parse_vmstat(self._read("vmstat"))

    def load_average(self) -> LoadAverageInfo:
        """Return the load averages from loadavg."""
        return self.fs.load_avg()

    def network_counters(self) -> NetworkCountersInfo:
        """Return the counters from net/snmp and net/netstat."""
        snmp = get_net_snmp_stats(self._read("net", "snmp"))
        netstat = get_netstat_stats(self._read("net", "netstat"))
        return NetworkCountersInfo(snmp=snmp, netstat=netstat)

    def cpu_time(self) -> CPUTimes:
        """Return the total CPU time spent in each state, in seconds."""
        cpu = self.fs.stat().cpu_total
        return CPUTimes(
            user=cpu.user,
            system=cpu.system,
            idle=cpu.idle,
            iowait=cpu.iowait,
            irq=cpu.irq,
            nice=cpu.nice,
            softirq=cpu.softirq,
            steal=cpu.steal,
        )


def new_host(fs: ProcFS) -> LinuxHost:
    """Collect the static information about this host.

    Every piece that fails is collected; if any did, a MultiError is raised
    whose ``host`` attribute holds the host with what could be read.
    Information the platform does not provide is left unset silently.
    """
    host = LinuxHost(fs, fs.stat())
    info = host.info

    steps = (
        ("architecture", architecture),
        ("boot_time", fs.boot_time),
        ("containerized", is_containerized),
        ("hostname", lambda: socket.gethostname().lower()),
        ("kernel_version", kernel_version),
        ("os", operating_system),
    )

    errors: list[BaseException] = []

    def gather(attr, read) -> None:
        try:
            setattr(info, attr, read())
        except NotImplementedError:
            pass
        except (OSError, ValueError) as exc:
            errors.append(exc)

    for attr, read in steps:
        gather(attr, read)

    local = time.localtime()
    info.timezone = local.tm_zone
    info.timezone_offset_sec = local.tm_gmtoff

    gather("unique_id", machine_id)

    if errors:
        error = MultiError(errors)
        error.host = host
        raise error
    return host