"""Microsecond time sources for span timestamps."""

from __future__ import annotations

import threading
import time
from typing import Protocol

from tracelet.utils.helpers import nanos_to_micros


class Clock(Protocol):
    """Anything that can report the current epoch time in microseconds."""

    def current_time_microseconds(self) -> int: ...


class SystemClock:
    """Wall clock backed by time.time_ns()."""

    def current_time_microseconds(self) -> int:
        return nanos_to_micros(time.time_ns())


class FixedClock:
    """
    Clock that returns a settable value.

    Useful for deterministic tests and for replaying recorded timings.
    """

    def __init__(self, micros: int = 0) -> None:
        self._micros = micros
        self._lock = threading.Lock()

    def set(self, micros: int) -> None:
        with self._lock:
            self._micros = micros

    def advance(self, micros: int) -> None:
        with self._lock:
            self._micros += micros

    def current_time_microseconds(self) -> int:
        with self._lock:
            return self._micros
