"""Parsing of Go-style duration strings (``5m``, ``90s``, ``1h30m``)."""

from __future__ import annotations

import re

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
# Longer unit names first so "ms" is not read as "m" followed by junk.
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Parse a duration string into seconds.

    Accepts a sequence of decimal numbers each followed by a unit, with an
    optional leading sign. A bare ``0`` is the only unitless value accepted.

    Raises:
        ValueError: If the string is empty or not a valid duration.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty duration")
    sign = 1.0
    if raw[0] in "+-":
        sign = -1.0 if raw[0] == "-" else 1.0
        raw = raw[1:]
    if raw == "0":
        return 0.0
    if not raw:
        raise ValueError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(raw):
        match = _COMPONENT.match(raw, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        pos = match.end()
    return sign * total
