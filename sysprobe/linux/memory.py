"""Parsing of /proc/meminfo."""

from __future__ import annotations

from typing import Union

from sysprobe.linux.util import parse_bytes_or_number, parse_key_value
from sysprobe.model import HostMemoryInfo

_UINT64_MASK = (1 << 64) - 1


def parse_meminfo(content: Union[str, bytes]) -> HostMemoryInfo:
    """Parse the contents of /proc/meminfo into host memory usage."""
    info = HostMemoryInfo()
    has_available = False

    for key, value in parse_key_value(content, ":"):
        try:
            num = parse_bytes_or_number(value)
        except ValueError:
            continue

        if key == "MemTotal":
            info.total = num
        elif key == "MemAvailable":
            has_available = True
            info.available = num
        elif key == "MemFree":
            info.free = num
        elif key == "SwapTotal":
            info.virtual_total = num
        elif key == "SwapFree":
            info.virtual_free = num
        else:
            info.metrics[key] = num

    info.used = (info.total - info.free) & _UINT64_MASK
    info.virtual_used = (info.virtual_total - info.virtual_free) & _UINT64_MASK

    # MemAvailable only exists since kernel 3.14; use a simple estimate before that.
    if not has_available:
        info.available = (
            info.free + info.metrics.get("Buffers", 0) + info.metrics.get("Cached", 0)
        ) & _UINT64_MASK

    return info