"""Detection of the Linux distribution from the release files under /etc."""

from __future__ import annotations

import os
import re
from glob import glob
from typing import Optional, Union

from sysprobe.model import MultiError, OSInfo

OS_RELEASE = "/etc/os-release"
LSB_RELEASE = "/etc/lsb-release"
DISTRIB_RELEASE = "/etc/*-release"

_VERSION_GROK = (
    r"(?P<version>(?P<major>[0-9]+)\.?(?P<minor>[0-9]+)?\.?(?P<patch>\w+)?)"
    r"(?: \((?P<codename>[-\w ]+)\))?"
)

# Parses the first line of /etc/<distrib>-release.
_DISTRIB_RELEASE_RE = re.compile(r"(?P<name>[\w]+).* " + _VERSION_GROK, re.ASCII)

# Parses version numbers such as 6, 6.1, 6.1.0 or 6.1.0_20150102.
_VERSION_RE = re.compile(_VERSION_GROK, re.ASCII)

FAMILY_MAP: dict[str, tuple[str, ...]] = {
    "arch": ("arch", "antergos", "manjaro"),
    "redhat": (
        "redhat", "fedora", "centos", "scientific", "oraclelinux", "ol",
        "amzn", "rhel", "almalinux", "openeuler", "rocky",
    ),
    "debian": ("debian", "ubuntu", "raspbian", "linuxmint"),
    "suse": ("suse", "sles", "opensuse"),
}

_PLATFORM_TO_FAMILY: dict[str, str] = {
    platform: family
    for family, platforms in FAMILY_MAP.items()
    for platform in platforms
}

_SIMPLE_ESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r",
    "t": "\t", "v": "\v", "\\": "\\", '"': '"',
}

Content = Union[str, bytes]


def _as_text(content: Content) -> str:
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8", errors="replace")
    return content


def _join(base_dir: str, path: str) -> str:
    if not base_dir:
        return path
    return os.path.join(base_dir, path.lstrip("/"))


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _unescape_double(inner: str) -> Optional[str]:
    out: list[str] = []
    i = 0
    n = len(inner)
    while i < n:
        ch = inner[i]
        if ch == '"' or ch == "\n":
            return None
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            return None
        esc = inner[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
            continue
        width = {"x": 2, "u": 4, "U": 8}.get(esc)
        if width is not None:
            digits = inner[i + 2:i + 2 + width]
            if len(digits) != width or not re.fullmatch(r"[0-9a-fA-F]+", digits):
                return None
            code = int(digits, 16)
            if code > 0x10FFFF:
                return None
            out.append(chr(code))
            i += 2 + width
            continue
        digits = inner[i + 1:i + 4]
        if len(digits) == 3 and re.fullmatch(r"[0-7]{3}", digits):
            code = int(digits, 8)
            if code > 0xFF:
                return None
            out.append(chr(code))
            i += 4
            continue
        return None
    return "".join(out)


def _unquote(value: str) -> Optional[str]:
    """Remove quotes the way a quoted string literal is read, or return None."""
    if len(value) < 2 or value[0] != value[-1]:
        return None
    quote = value[0]
    inner = value[1:-1]
    if quote == "`":
        if "`" in inner:
            return None
        return inner.replace("\r", "")
    if quote == '"':
        return _unescape_double(inner)
    if quote == "'":
        if len(inner) == 1 and inner not in ("'", "\n"):
            return inner
        return None
    return None


def operating_system() -> OSInfo:
    """Return information about the running Linux distribution."""
    return get_os_info("")


def get_os_info(base_dir: str) -> OSInfo:
    """Read the distribution information from the files below base_dir."""
    try:
        info = _get_os_release(base_dir)
    except (OSError, ValueError):
        return find_distrib_release(base_dir)

    # os-release often lacks minor and patch numbers on the redhat family.
    if info.family != "redhat":
        return info

    dist = find_distrib_release(base_dir)
    info.major = dist.major
    info.minor = dist.minor
    info.patch = dist.patch
    info.codename = dist.codename
    return info


def _get_os_release(base_dir: str) -> OSInfo:
    try:
        with open(_join(base_dir, LSB_RELEASE), "rb") as fh:
            lsb = fh.read()
    except OSError:
        lsb = b""

    with open(_join(base_dir, OS_RELEASE), "rb") as fh:
        os_rel = fh.read()
    if not os_rel:
        raise ValueError(f"{OS_RELEASE} is empty")

    return parse_os_release(lsb + os_rel)


def parse_os_release(content: Content) -> OSInfo:
    """Parse KEY=value lines of os-release and lsb-release files."""
    fields: dict[str, str] = {}
    for raw in _as_text(content).split("\n"):
        raw = raw.removesuffix("\r")
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, found, val = raw.partition("=")
        if not found:
            continue
        key = key.strip()
        val = val.strip()
        unquoted = _unquote(val)
        fields[key] = unquoted.strip() if unquoted is not None else val
    return make_os_info(fields)


def _first_of(fields: dict[str, str], *keys: str) -> str:
    for key in keys:
        value = fields.get(key, "")
        if value:
            return value
    return ""


def make_os_info(fields: dict[str, str]) -> OSInfo:
    """Build OSInfo from the parsed fields of an os-release file."""
    info = OSInfo(
        type="linux",
        platform=_first_of(fields, "ID", "DISTRIB_ID"),
        name=_first_of(fields, "NAME", "PRETTY_NAME"),
        version=_first_of(fields, "VERSION", "VERSION_ID", "DISTRIB_RELEASE"),
        build=fields.get("BUILD_ID", ""),
        codename=_first_of(fields, "VERSION_CODENAME", "DISTRIB_CODENAME"),
    )

    if not info.codename:
        # Some systems use their own keys, such as UBUNTU_CODENAME.
        info.codename = next(
            (v for k, v in fields.items() if "CODENAME" in k), ""
        )

    if not info.platform:
        info.platform = info.name.split(" ", 1)[0]

    info.family = linux_family(info.platform)
    if not info.family:
        for like in fields.get("ID_LIKE", "").split():
            info.family = linux_family(like)
            if info.family:
                break

    if info.version:
        match = _VERSION_RE.search(info.version)
        if match:
            info.major = _atoi(match.group("major") or "")
            info.minor = _atoi(match.group("minor") or "")
            info.patch = _atoi(match.group("patch") or "")
            if not info.codename:
                info.codename = match.group("codename") or ""

    return info


def find_distrib_release(base_dir: str) -> OSInfo:
    """Read the first usable /etc/<distrib>-release file below base_dir."""
    errors: list[BaseException] = []
    for path in sorted(glob(_join(base_dir, DISTRIB_RELEASE))):
        if path.endswith(OS_RELEASE) or path.endswith(LSB_RELEASE):
            continue
        try:
            if not os.path.isfile(path) or os.path.getsize(path) == 0:
                continue
        except OSError:
            continue
        try:
            return _get_distrib_release(path)
        except (OSError, ValueError) as exc:
            errors.append(ValueError(f"in {path}: {exc}"))
    multi = MultiError(errors)
    raise ValueError(f"no valid /etc/<distrib>-release file found: {multi}") from multi


def _get_distrib_release(path: str) -> OSInfo:
    with open(path, "rb") as fh:
        text = _as_text(fh.read())
    first, found, _ = text.partition("\n")
    if not found:
        raise ValueError(f"failed to parse {path}")
    platform = os.path.basename(path).split("-", 1)[0].lower()
    return parse_distrib_release(platform, first)


def parse_distrib_release(platform: str, content: Content) -> OSInfo:
    """Parse the first line of a <distrib>-release file."""
    info = OSInfo(type="linux", platform=platform)
    match = _DISTRIB_RELEASE_RE.search(_as_text(content).strip())
    if match:
        codename = match.group("codename") or ""
        info.name = match.group("name") or ""
        info.version = (match.group("version") or "") + f" ({codename})"
        info.major = _atoi(match.group("major") or "")
        info.minor = _atoi(match.group("minor") or "")
        info.patch = _atoi(match.group("patch") or "")
        info.codename = codename
    info.family = linux_family(info.platform)
    return info


def linux_family(platform: str) -> str:
    """Return the distribution family of platform, or "" if unknown."""
    if not platform:
        return ""
    platform = platform.lower()
    family = _PLATFORM_TO_FAMILY.get(platform)
    if family is not None:
        return family
    for prefix, family in _PLATFORM_TO_FAMILY.items():
        if platform.startswith(prefix):
            return family
    return ""