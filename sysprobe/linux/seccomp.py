"""Decoding of the seccomp fields in /proc/[pid]/status."""

from __future__ import annotations

import enum
import re
from typing import Optional, Union

from sysprobe.linux.util import parse_key_value
from sysprobe.model import SeccompInfo

_DECIMAL = re.compile(r"[0-9]+")
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class SeccompMode(enum.IntEnum):
    """Seccomp modes as reported by the kernel."""

    DISABLED = 0
    STRICT = 1
    FILTER = 2

    def __str__(self) -> str:
        return self.name.lower()


def _mode_name(value: int) -> str:
    try:
        return str(SeccompMode(value))
    except ValueError:
        return str(value)


def _parse_bool(value: str) -> Optional[bool]:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


def read_seccomp_fields(content: Union[str, bytes]) -> SeccompInfo:
    """Read the seccomp mode and no_new_privs flag from a status file."""
    info = SeccompInfo()
    for key, value in parse_key_value(content, ":"):
        if key == "Seccomp":
            if _DECIMAL.fullmatch(value) and int(value) <= 0xFF:
                info.mode = _mode_name(int(value))
        elif key == "NoNewPrivs":
            flag = _parse_bool(value)
            if flag is not None:
                info.no_new_privs = flag
    return info