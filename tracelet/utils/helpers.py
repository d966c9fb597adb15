"""Helper functions for timestamp conversion."""

from __future__ import annotations

from typing import Optional


def nanos_to_micros(nanos: int) -> int:
    """
    Convert a nanosecond timestamp to microseconds.

    Args:
        nanos: Epoch nanoseconds (e.g. from time.time_ns())

    Returns:
        Epoch microseconds, truncated
    """
    return nanos // 1000


def micros_to_nanos(micros: Optional[int]) -> Optional[int]:
    """
    Convert a microsecond timestamp to nanoseconds.

    Args:
        micros: Epoch microseconds, or None when unset

    Returns:
        Epoch nanoseconds, or None if micros is None
    """
    if micros is None:
        return None
    return micros * 1000
