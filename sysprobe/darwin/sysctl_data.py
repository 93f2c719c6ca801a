"""Decoding of raw sysctl and host statistics data on macOS."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from sysprobe.model import CPUTimes, LoadAverageInfo

# xsw_usage: four little-endian 64-bit counters.
_SWAP_USAGE = struct.Struct("<4Q")

# loadavg: three 32-bit loads, padding, then a 64-bit scale.
_LOAD_AVG = struct.Struct("<3I4xq")

_NANOS = 1_000_000_000


@dataclass
class SwapUsage:
    """Swap usage as reported by vm.swapusage, in bytes."""

    total: int = 0
    available: int = 0
    used: int = 0
    page_size: int = 0


@dataclass
class CPUUsage:
    """Host CPU load in clock ticks per state."""

    user: int = 0
    system: int = 0
    idle: int = 0
    nice: int = 0


def parse_swap_usage(data: bytes) -> SwapUsage:
    """Decode the raw vm.swapusage value."""
    if len(data) < _SWAP_USAGE.size:
        raise ValueError(
            f"swap usage data too short: {len(data)} < {_SWAP_USAGE.size} bytes"
        )
    return SwapUsage(*_SWAP_USAGE.unpack_from(data))


def parse_load_average(data: bytes) -> LoadAverageInfo:
    """Decode the raw vm.loadavg value into load averages."""
    if len(data) < _LOAD_AVG.size:
        raise ValueError(
            f"load average data too short: {len(data)} < {_LOAD_AVG.size} bytes"
        )
    one, five, fifteen, scale = _LOAD_AVG.unpack_from(data)
    if scale == 0:
        raise ValueError("invalid load average scale: 0")
    return LoadAverageInfo(one=one / scale, five=five / scale, fifteen=fifteen / scale)


def _ticks_to_seconds(ticks: int, ticks_per_second: int) -> float:
    return (ticks * _NANOS // ticks_per_second) / _NANOS


def cpu_times_from_ticks(usage: CPUUsage, ticks_per_second: int) -> CPUTimes:
    """Convert host CPU load ticks into CPU times in seconds."""
    if ticks_per_second <= 0:
        raise ValueError(f"invalid clock ticks per second: {ticks_per_second}")
    return CPUTimes(
        user=_ticks_to_seconds(usage.user, ticks_per_second),
        system=_ticks_to_seconds(usage.system, ticks_per_second),
        idle=_ticks_to_seconds(usage.idle, ticks_per_second),
        nice=_ticks_to_seconds(usage.nice, ticks_per_second),
    )