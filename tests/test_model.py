import pytest

from sysprobe.model import (
    CPUTimes,
    HostMemoryInfo,
    MultiError,
    VMStatInfo,
)


def test_cpu_times_total_single_field():
    assert CPUTimes(user=1.5).total() == 1.5


def test_cpu_times_total_default_is_zero():
    assert CPUTimes().total() == 0


def test_cpu_times_total_covers_every_field():
    names = ["user", "system", "idle", "iowait", "irq", "nice", "softirq", "steal"]
    for name in names:
        assert CPUTimes(**{name: 2.0}).total() == 2.0


def test_multi_error_iterates_errors_in_order():
    first = ValueError("first")
    second = OSError("second")
    err = MultiError([first, second])
    assert list(err) == [first, second]
    assert len(err) == 2


def test_multi_error_message_contains_each_error():
    err = MultiError([ValueError("alpha"), ValueError("beta")])
    text = str(err)
    assert "alpha" in text
    assert "beta" in text


def test_multi_error_single_error_message():
    err = MultiError([ValueError("only")])
    assert str(err) == "1 error: only"


def test_vmstat_getitem_returns_counter():
    info = VMStatInfo(counters={"pgfault": 46777498})
    assert info["pgfault"] == 46777498
    assert "pgfault" in info


def test_vmstat_getitem_missing_raises():
    info = VMStatInfo(counters={"pgfault": 1})
    assert "missing" not in info
    with pytest.raises(KeyError):
        info["missing"]


def test_host_memory_metrics_are_independent():
    a = HostMemoryInfo()
    b = HostMemoryInfo()
    a.metrics["Slab"] = 7
    assert "Slab" not in b.metrics