import pytest

from sysprobe.darwin.osinfo import get_os_info

SYSTEM_VERSION_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
<dict>
        <key>ProductBuildVersion</key>
        <string>16G1114</string>
        <key>ProductName</key>
        <string>Mac OS X</string>
        <key>ProductUserVisibleVersion</key>
        <string>10.12.6</string>
        <key>ProductVersion</key>
        <string>10.12.6</string>
</dict>
</plist>
"""


def _plist(entries):
    body = "".join(
        f"<key>{k}</key><string>{v}</string>" for k, v in entries.items()
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><plist version="1.0"><dict>{body}</dict></plist>'


def test_operating_system():
    info = get_os_info(SYSTEM_VERSION_PLIST.encode())
    assert info.type == "macos"
    assert info.family == "darwin"
    assert info.platform == "darwin"
    assert info.name == "Mac OS X"
    assert info.version == "10.12.6"
    assert info.major == 10
    assert info.minor == 12
    assert info.patch == 6
    assert info.build == "16G1114"


def test_accepts_text():
    info = get_os_info(SYSTEM_VERSION_PLIST)
    assert info.build == "16G1114"


def test_short_version():
    data = _plist(
        {"ProductName": "macOS", "ProductVersion": "11", "ProductBuildVersion": "20A1"}
    )
    info = get_os_info(data)
    assert (info.major, info.minor, info.patch) == (11, 0, 0)
    assert info.version == "11"


def test_non_numeric_parts_are_zero():
    data = _plist(
        {"ProductName": "macOS", "ProductVersion": "13.x.2", "ProductBuildVersion": "b"}
    )
    info = get_os_info(data)
    assert (info.major, info.minor, info.patch) == (13, 0, 2)


@pytest.mark.parametrize(
    "missing", ["ProductName", "ProductVersion", "ProductBuildVersion"]
)
def test_missing_key(missing):
    entries = {
        "ProductName": "macOS",
        "ProductVersion": "12.1",
        "ProductBuildVersion": "21C52",
    }
    del entries[missing]
    with pytest.raises(ValueError, match=f"plist key {missing} not found"):
        get_os_info(_plist(entries))


def test_invalid_data():
    with pytest.raises(ValueError, match="failed to unmarshal plist data"):
        get_os_info(b"not a plist")