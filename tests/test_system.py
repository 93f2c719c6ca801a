import os

import pytest

from sysprobe.linux.system import LinuxSystem
from sysprobe.model import MultiError


@pytest.fixture
def host_root(tmp_path):
    proc = tmp_path / "proc"
    proc.mkdir()
    (proc / "stat").write_text("cpu  1 2 3 4 0 0 0 0 0 0\nbtime 1500000000\n")
    (proc / "1").mkdir()
    (proc / "42").mkdir()
    (proc / "net").mkdir()
    (proc / "self").symlink_to("42")
    return tmp_path


def test_default_mount_point():
    assert LinuxSystem().proc_fs.mount_point == "/proc"


def test_host_fs_mount_point(host_root):
    system = LinuxSystem(host_root)
    assert system.proc_fs.mount_point == os.path.join(str(host_root), "proc")


def test_processes(host_root):
    pids = [p.pid for p in LinuxSystem(host_root).processes()]
    assert pids == [1, 42]


def test_process(host_root):
    assert LinuxSystem(host_root).process(42).pid == 42


def test_process_missing(host_root):
    with pytest.raises(FileNotFoundError):
        LinuxSystem(host_root).process(999)


def test_self(host_root):
    assert LinuxSystem(host_root).self().pid == 42


def test_host(host_root):
    try:
        host = LinuxSystem(host_root).host()
    except MultiError as exc:
        host = exc.host
    assert host.stat.boot_time == 1500000000
    assert host.info.boot_time.timestamp() == 1500000000


def test_host_without_proc(tmp_path):
    with pytest.raises(FileNotFoundError):
        LinuxSystem(tmp_path).host()