"""Operating system information on macOS."""

from __future__ import annotations

import plistlib
from typing import Union
from xml.parsers.expat import ExpatError

from sysprobe.model import OSInfo

SYSTEM_VERSION_PLIST = "/System/Library/CoreServices/SystemVersion.plist"

PLIST_PRODUCT_NAME = "ProductName"
PLIST_PRODUCT_VERSION = "ProductVersion"
PLIST_PRODUCT_BUILD_VERSION = "ProductBuildVersion"


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def operating_system() -> OSInfo:
    """Return information about the running macOS system."""
    try:
        with open(SYSTEM_VERSION_PLIST, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise OSError(f"failed to read plist file: {exc}") from exc
    return get_os_info(data)


def get_os_info(data: Union[str, bytes]) -> OSInfo:
    """Build OSInfo from the contents of a SystemVersion.plist file."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        attrs = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError) as exc:
        raise ValueError(f"failed to unmarshal plist data: {exc}") from exc
    if not isinstance(attrs, dict):
        raise ValueError("failed to unmarshal plist data: not a dictionary")

    values = {}
    for key in (PLIST_PRODUCT_NAME, PLIST_PRODUCT_VERSION, PLIST_PRODUCT_BUILD_VERSION):
        if key not in attrs:
            raise ValueError(f"plist key {key} not found")
        value = attrs[key]
        if not isinstance(value, str):
            raise ValueError(f"failed to unmarshal plist data: {key} is not a string")
        values[key] = value

    version = values[PLIST_PRODUCT_VERSION]
    numbers = [_atoi(part) for part in version.split(".", 2)]
    numbers += [0] * (3 - len(numbers))
    major, minor, patch = numbers

    return OSInfo(
        type="macos",
        family="darwin",
        platform="darwin",
        name=values[PLIST_PRODUCT_NAME],
        version=version,
        major=major,
        minor=minor,
        patch=patch,
        build=values[PLIST_PRODUCT_BUILD_VERSION],
    )