"""Parsing of /proc/vmstat."""

from __future__ import annotations

from typing import Union

from sysprobe.linux.util import parse_bytes_or_number, parse_key_value
from sysprobe.model import VMStatInfo


def parse_vmstat(content: Union[str, bytes]) -> VMStatInfo:
    """Parse the contents of /proc/vmstat; unparseable values are skipped."""
    counters: dict[str, int] = {}
    for key, value in parse_key_value(content, " "):
        try:
            counters[key] = parse_bytes_or_number(value)
        except ValueError:
            continue
    return VMStatInfo(counters=counters)