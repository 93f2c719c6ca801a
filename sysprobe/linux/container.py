"""Detection of whether this system runs inside a container."""

from __future__ import annotations

import os
from typing import Union

PROC_ONE_CGROUP = "/proc/1/cgroup"

_MARKERS = (b"docker", b".slice", b"lxc", b"kubepods")


def is_containerized(path: Union[str, os.PathLike] = PROC_ONE_CGROUP) -> bool:
    """Return True if the cgroups of init show that this is a container."""
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except FileNotFoundError:
        return False
    return is_containerized_cgroup(data)


def is_containerized_cgroup(data: Union[str, bytes]) -> bool:
    """Return True if any line of cgroup data names a container runtime."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return any(
        marker in line for line in data.split(b"\n") for marker in _MARKERS
    )