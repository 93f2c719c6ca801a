"""Decoding of the capability sets in /proc/[pid]/status."""

from __future__ import annotations

from typing import Union

from sysprobe.linux.util import decode_bitmap, parse_key_value
from sysprobe.model import CapabilityInfo

# Capability names in the order of their numeric values, starting at 0.
_NAMES_IN_ORDER = """
    chown dac_override dac_read_search fowner fsetid kill setgid setuid
    setpcap linux_immutable net_bind_service net_broadcast net_admin net_raw
    ipc_lock ipc_owner sys_module sys_rawio sys_chroot sys_ptrace sys_pacct
    sys_admin sys_boot sys_nice sys_resource sys_time sys_tty_config mknod
    lease audit_write audit_control setfcap mac_override mac_admin syslog
    wake_alarm block_suspend audit_read perfmon bpf checkpoint_restore
""".split()

CAPABILITY_NAMES: dict[int, str] = dict(enumerate(_NAMES_IN_ORDER))

_STATUS_KEYS = {
    "CapInh": "inheritable",
    "CapPrm": "permitted",
    "CapEff": "effective",
    "CapBnd": "bounding",
    "CapAmb": "ambient",
}


def capability_name(num: int) -> str:
    """Return the name of capability num, or the number as text if unknown."""
    return CAPABILITY_NAMES.get(num, str(num))


def read_capabilities(content: Union[str, bytes]) -> CapabilityInfo:
    """Read the capability sets from the contents of a status file."""
    info = CapabilityInfo()
    for key, value in parse_key_value(content, ":"):
        attr = _STATUS_KEYS.get(key)
        if attr is None:
            continue
        try:
            names = decode_bitmap(value, capability_name)
        except ValueError:
            names = None
        setattr(info, attr, names)
    return info