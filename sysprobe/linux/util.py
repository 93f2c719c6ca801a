"""Parsing helpers for the text files found under /proc."""

from __future__ import annotations

import os
import re
from typing import Callable, Iterator, Union

Content = Union[str, bytes]

_UINT64_MAX = (1 << 64) - 1
_DECIMAL = re.compile(r"[0-9]+")
_HEX = re.compile(r"[0-9a-fA-F]+")


def _as_text(content: Content) -> str:
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8", errors="replace")
    return content


def _parse_uint64(text: str, pattern: re.Pattern, base: int) -> int:
    if not pattern.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text, base)
    if value > _UINT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def parse_key_value(content: Content, separator: str) -> Iterator[tuple[str, str]]:
    """Yield (key, value) pairs split on separator from each non-empty line.

    White-space is trimmed from the value. A non-empty line without the
    separator raises ValueError when it is reached.
    """
    for line in _as_text(content).split("\n"):
        if not line:
            continue
        key, found, value = line.partition(separator)
        if not found:
            raise ValueError(f"separator {separator!r} not found")
        yield key, value.strip()


def find_value(filename: Union[str, os.PathLike], separator: str, key: str) -> str:
    """Return the trimmed value of the first line in filename starting with key."""
    with open(filename, "rb") as fh:
        text = _as_text(fh.read())

    line = ""
    for candidate in text.split("\n"):
        candidate = candidate.removesuffix("\r")
        if candidate.startswith(key):
            line = candidate
            break
    if not line:
        raise ValueError(f"{key} not found")

    _, found, value = line.partition(separator)
    if not found:
        raise ValueError(f"unexpected line format for '{line}'")
    return value.strip()


def decode_bitmap(s: str, lookup_name: Callable[[int], str]) -> list[str]:
    """Return the names of the bits set in the hexadecimal 64-bit mask s."""
    mask = _parse_uint64(s, _HEX, 16)
    return [lookup_name(bit) for bit in range(64) if mask >> bit & 1]


def parse_bytes_or_number(data: Content) -> int:
    """Parse a number with an optional "kB" unit into a plain count or bytes."""
    parts = _as_text(data).split()
    if not parts:
        raise ValueError("empty value")

    try:
        number = _parse_uint64(parts[0], _DECIMAL, 10)
    except ValueError as exc:
        raise ValueError(f"failed to parse value: {exc}") from exc

    multiplier = 1
    if len(parts) >= 2:
        if parts[1] != "kB":
            raise ValueError(f"unhandled unit {parts[1]}")
        multiplier = 1024

    return (number * multiplier) & _UINT64_MAX