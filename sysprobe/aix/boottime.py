"""Boot time of an AIX host, read from the utmp file."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Iterator, Union
import os

UTMP_FILE = "/etc/utmp"

TYPE_BOOT_TIME = 2

# Big-endian, packed utmp record as laid out on AIX ppc64.
_UTMP = struct.Struct(">256s14s64shihhqhh256si2i6i")


def _cstring(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


@dataclass
class UtmpRecord:
    """One entry of a utmp file."""

    user: str = ""
    id: str = ""
    line: str = ""
    pid: int = 0
    type: int = 0
    time: int = 0
    termination: int = 0
    exit: int = 0
    host: str = ""


def iter_utmp(stream: BinaryIO) -> Iterator[UtmpRecord]:
    """Yield the complete records of a utmp stream; a partial tail is ignored."""
    while True:
        chunk = stream.read(_UTMP.size)
        if len(chunk) < _UTMP.size:
            return
        fields = _UTMP.unpack(chunk)
        yield UtmpRecord(
            user=_cstring(fields[0]),
            id=_cstring(fields[1]),
            line=_cstring(fields[2]),
            pid=fields[4],
            type=fields[5],
            time=fields[7],
            termination=fields[8],
            exit=fields[9],
            host=_cstring(fields[10]),
        )


def boot_time(filename: Union[str, os.PathLike] = UTMP_FILE) -> datetime:
    """Return the time the machine was started, from its boot utmp record."""
    try:
        fh = open(filename, "rb")
    except OSError as exc:
        raise OSError(
            f"failed to get host uptime: cannot open {filename}: {exc}"
        ) from exc

    with fh:
        for record in iter_utmp(fh):
            if record.type == TYPE_BOOT_TIME:
                return datetime.fromtimestamp(record.time, tz=timezone.utc)

    raise ValueError("failed to get host uptime: no utmp record")