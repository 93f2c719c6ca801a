"""Architecture, kernel release and machine ID of a Linux host."""

from __future__ import annotations

import os
from typing import Iterable, Union

from sysprobe.model import SysinfoNotImplementedError

# Current and historic locations of the machine-id file, searched in order.
MACHINE_ID_FILES = (
    "/etc/machine-id",
    "/var/lib/dbus/machine-id",
    "/var/db/dbus/machine-id",
)


def architecture() -> str:
    """Return the machine hardware name reported by uname."""
    return os.uname().machine


def kernel_version() -> str:
    """Return the kernel release reported by uname."""
    return os.uname().release


def machine_id(files: Iterable[Union[str, os.PathLike]] = MACHINE_ID_FILES) -> str:
    """Return the contents of the first machine-id file that exists."""
    for path in files:
        try:
            with open(path, "rb") as fh:
                contents = fh.read()
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise OSError(f"failed to read {path}: {exc}") from exc
        return contents.strip().decode("utf-8", errors="replace")
    raise SysinfoNotImplementedError("no machine-id file found")