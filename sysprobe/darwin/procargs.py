"""Decoding of the kern.procargs2 sysctl data and kernel name buffers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable


class InvalidProcargs2Data(ValueError):
    """Raised when kern.procargs2 data is too short to decode."""

    def __init__(self, message: str = "invalid kern.procargs2 data") -> None:
        super().__init__(message)


@dataclass
class ProcArgs:
    """Executable path, arguments and environment of a process."""

    exe: str = ""
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


def parse_kern_procargs2(data: bytes) -> ProcArgs:
    """Decode the argc, exe, argv and environment held in kern.procargs2 data."""
    if data is None or len(data) < 4:
        raise InvalidProcargs2Data()
    (argc,) = struct.unpack_from("<I", data)

    lines = bytes(data[4:]).decode("utf-8", errors="surrogateescape").split("\x00")
    result = ProcArgs(exe=lines[0])
    lines = lines[1:]

    # Skip nulls that may be appended after the exe.
    start = 0
    while start < len(lines) and lines[start] == "":
        start += 1
    lines = lines[start:]

    count = min(argc, len(lines))
    if count > 0:
        result.args = lines[:count]
        lines = lines[count:]

    for line in lines:
        if not line:
            break
        key, _, value = line.partition("=")
        result.env[key] = value

    return result


def int8_to_string(values: Iterable[int]) -> str:
    """Convert a NUL-terminated buffer of signed bytes to a string."""
    out = bytearray()
    for value in values:
        if value == 0:
            break
        out.append(value & 0xFF)
    return out.decode("utf-8", errors="replace")