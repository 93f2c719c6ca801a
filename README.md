# sysprobe

`sysprobe` reads information about a Linux machine and its processes from
`/proc`. It also has parsers for data that macOS and AIX expose. Most of the
work is done by plain functions over the text and binary data the operating
system provides, so they work as well on captured files as on live ones.

## What it covers

- **Linux** (`sysprobe.linux`)
  - `system.LinuxSystem` is the entry point. It offers `host()`,
    `processes()`, `process(pid)` and `self()`.
  - `host.LinuxHost` holds static details in `info` (a `model.HostInfo`).
    These are architecture, boot time, whether the host is containerised,
    hostname, kernel release, OS release, timezone and machine id. It also
    offers `memory()`, `vm_stat()`, `load_average()`, `network_counters()`
    and `cpu_time()`.
  - `process.LinuxProcess` offers `info()`, `parent()`, `cwd()`, `memory()`,
    `cpu_time()`, `open_handles()`, `open_handle_count()`, `environment()`,
    `seccomp()`, `capabilities()`, `user()` and `network_counters()`.
  - There are parsers for the individual files:
    - `memory.parse_meminfo`
    - `vmstat.parse_vmstat`
    - `procnet.get_net_snmp_stats` and `procnet.get_netstat_stats`
    - `capabilities.read_capabilities`
    - `seccomp.read_seccomp_fields`
    - `container.is_containerized_cgroup`
    - `osinfo.get_os_info` and `osinfo.parse_os_release`
    - `procfs.parse_proc_stat` and `procfs.parse_pid_stat`
- **macOS** (`sysprobe.darwin`)
  - `osinfo.get_os_info` parses `SystemVersion.plist` data.
  - `procargs.parse_kern_procargs2` decodes `kern.procargs2` data.
  - `sysctl_data.parse_swap_usage` and `sysctl_data.parse_load_average` decode
    raw `vm.swapusage` and `vm.loadavg` values.
  - `sysctl_data.cpu_times_from_ticks` converts CPU ticks to seconds.
- **AIX** (`sysprobe.aix`)
  - `boottime.boot_time` reads the boot record of a `utmp` file.
  - `boottime.iter_utmp` yields every record of such a file.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install .[test]
pytest
```

## Using it

Look up the running Linux system:

```python
from sysprobe.linux.system import LinuxSystem
from sysprobe.model import MultiError

system = LinuxSystem()
try:
    host = system.host()
except MultiError as err:
    host = err.host  # whatever could be read
print(host.info.os.name, host.info.kernel_version)
print(host.memory().total, host.load_average().one)

me = system.self()
print(me.info().name, me.user().uid)
```

You can also read a captured tree. Point `LinuxSystem` at a directory that
holds a `proc/` subdirectory taken from another machine:

```python
system = LinuxSystem("/path/to/captured/root")
```

Parse captured files directly:

```python
from sysprobe.linux.memory import parse_meminfo
from sysprobe.linux.osinfo import get_os_info
from sysprobe.aix.boottime import boot_time

with open("/proc/meminfo", "rb") as fh:
    mem = parse_meminfo(fh.read())
os_info = get_os_info("/path/to/captured/root")
booted = boot_time("/path/to/utmp")
```

`sysprobe.registry` keeps one host provider and one process provider. Use
`register(provider)`, `get_host_provider()` and `get_process_provider()` for
this. An object counts as a host provider if it has a `host()` method. It
counts as a process provider if it has `processes()`, `process()` and
`self()`. Registering a second provider of the same kind raises
`ProviderAlreadyRegisteredError`. Nothing is registered automatically.

## Errors

- A parser that meets malformed input raises `ValueError`.
- Missing files raise the usual `OSError` subclasses.
- `new_host` (and `LinuxSystem.host()`) gathers every part that failed into
  one `sysprobe.model.MultiError`. That error's `host` attribute holds what
  could be read.
- Something a platform cannot supply is reported with
  `SysinfoNotImplementedError`, such as a missing machine-id file. Host
  collection leaves that part unset rather than reporting it.

## What it does not do

- On Linux, host details do not include IP or MAC addresses or a fully
  qualified domain name.
- On macOS and AIX there is no host or process provider that queries the
  running system. Only the parsers listed above are available, apart from
  reading `SystemVersion.plist` with `darwin.osinfo.operating_system()`.
- There is no command-line tool. The package is used as a library.