"""Parsing of compact duration strings used in configuration (``15m``, ``7d``)."""

from __future__ import annotations

import re
from typing import Final

DEFAULT_DURATION_SECONDS: Final[int] = 3600

_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_UNIT_SECONDS: Final[dict[str, int]] = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str | None) -> int:
    """
    Convert a duration string into seconds.

    Accepts ``<digits><unit>`` where unit is one of ``s``, ``m``, ``h``, ``d``.
    Anything else (including ``None``) falls back to one hour.

    :param value: Duration such as ``"15m"`` or ``"7d"``.
    :type value: str | None
    :returns: Number of seconds.
    :rtype: int

    >>> parse_duration("15m")
    900
    >>> parse_duration("garbage")
    3600
    """
    if not isinstance(value, str):
        return DEFAULT_DURATION_SECONDS
    match = _DURATION_RE.match(value)
    if match is None:
        return DEFAULT_DURATION_SECONDS
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


__all__ = ["parse_duration", "DEFAULT_DURATION_SECONDS"]
