"""Parsing of the protocol counters in /proc/net/snmp and /proc/net/netstat."""

from __future__ import annotations

import re
from typing import Union

_UINT64_MASK = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")

Content = Union[str, bytes]


def _parse_value(value: str, values: list[str]) -> int:
    # Signed values such as Tcp MaxConn are stored as unsigned 64-bit, as the kernel does.
    if "-" in value:
        if not _SIGNED.fullmatch(value) or not _INT64_MIN <= int(value) <= _INT64_MAX:
            raise ValueError(f"error parsing string to int in line: {values!r}")
        return int(value) & _UINT64_MASK
    if not _UNSIGNED.fullmatch(value) or int(value) > _UINT64_MASK:
        raise ValueError(f"error parsing string to int in line: {values!r}")
    return int(value)


def parse_entry(line1: str, line2: str) -> dict[str, int]:
    """Pair a line of counter names with the line of their values."""
    keys = line1.strip().split(" ")
    values = line2.strip().split(" ")
    if len(keys) != len(values):
        raise ValueError("key and value lines are mismatched")
    return {key: _parse_value(value, values) for key, value in zip(keys, values)}


def parse_net_file(body: Content) -> dict[str, dict[str, int]]:
    """Parse a whole file into counters keyed by protocol section."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    lines = body.strip().split("\n")
    if len(lines) % 2 != 0:
        raise ValueError(f"badly parsed body: {body}")

    metrics: dict[str, dict[str, int]] = {}
    for key_line, value_line in zip(lines[::2], lines[1::2]):
        keys = key_line.split(":")
        values = value_line.split(":")
        if len(keys) != 2 or len(values) != 2:
            raise ValueError(f"wrong number of keys: {keys!r}")
        try:
            metrics[values[0]] = parse_entry(keys[1], values[1])
        except ValueError as exc:
            raise ValueError(f"error parsing lines: {exc}") from exc
    return metrics


def get_net_snmp_stats(raw: Content) -> dict[str, dict[str, int]]:
    """Parse the contents of /proc/net/snmp."""
    try:
        return parse_net_file(raw)
    except ValueError as exc:
        raise ValueError(f"error parsing SNMP: {exc}") from exc


def get_netstat_stats(raw: Content) -> dict[str, dict[str, int]]:
    """Parse the contents of /proc/net/netstat."""
    try:
        return parse_net_file(raw)
    except ValueError as exc:
        raise ValueError(f"error parsing netstat: {exc}") from exc