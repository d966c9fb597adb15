"""In-flight span state, accumulated until the span is reported."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, List, NamedTuple, Optional, Union

from tracelet.tracer.kind import Kind, kind_at, kind_ordinal

if TYPE_CHECKING:
    from tracelet.tracer.clock import Clock
    from tracelet.tracer.endpoint import Endpoint

logger = logging.getLogger(__name__)

UNSET_KIND = -1


class Annotation(NamedTuple):
    timestamp: int
    value: str


class Tag(NamedTuple):
    key: str
    value: str


Pair = Union[Annotation, Tag]


class MutableSpan:
    """
    Mutable state of one in-flight span.

    One of these is allocated per traced operation, so instances use
    ``__slots__`` and keep annotations and tags in a single ordered list.
    Every method may be called from any thread; a per-instance lock guards
    all fields, including the final ``write_to``.

    No method raises: unexpected or legacy input is accepted so that a
    tracing bug never fails the traced operation.
    """

    __slots__ = (
        "clock",
        "kind_index",
        "shared",
        "timestamp",
        "duration",
        "name",
        "remote_endpoint",
        "pairs",
        "_lock",
    )

    def __init__(self, clock: "Clock") -> None:
        self.clock = clock
        self.kind_index = UNSET_KIND
        self.shared = False
        self.timestamp = 0
        self.duration = 0
        self.name: Optional[str] = None
        self.remote_endpoint: Optional["Endpoint"] = None
        self.pairs: List[Pair] = []
        self._lock = threading.Lock()

    def start(self, timestamp: Optional[int] = None) -> None:
        """Record the start time, reading the clock when none is given."""
        if timestamp is None:
            timestamp = self.clock.current_time_microseconds()
        with self._lock:
            self.timestamp = timestamp

    def set_name(self, name: Optional[str]) -> None:
        with self._lock:
            self.name = name

    def set_kind(self, kind: Enum) -> None:
        with self._lock:
            self.kind_index = kind_ordinal(kind)

    def annotate(self, value: str, timestamp: Optional[int] = None) -> None:
        """
        Record a timestamped event.

        The legacy core annotations ("cs", "sr", "cr", "ss") are translated
        into kind and timing updates instead of being stored.

        Args:
            value: Annotation text
            timestamp: Epoch microseconds; defaults to the clock's current time
        """
        if timestamp is None:
            timestamp = self.clock.current_time_microseconds()
        with self._lock:
            if value == "cs":
                self.kind_index = kind_ordinal(Kind.CLIENT)
                self.timestamp = timestamp
            elif value == "sr":
                self.kind_index = kind_ordinal(Kind.SERVER)
                self.timestamp = timestamp
            elif value == "cr":
                self.kind_index = kind_ordinal(Kind.CLIENT)
                self._finish(timestamp)
            elif value == "ss":
                self.kind_index = kind_ordinal(Kind.SERVER)
                self._finish(timestamp)
            else:
                self.pairs.append(Annotation(timestamp, value))
                return
        logger.debug("Translated legacy annotation %r at %s", value, timestamp)

    def tag(self, key: str, value: str) -> None:
        """Append a tag. Repeated keys are kept, in order."""
        with self._lock:
            self.pairs.append(Tag(key, value))

    def set_remote_endpoint(self, endpoint: Optional["Endpoint"]) -> None:
        with self._lock:
            self.remote_endpoint = endpoint

    def set_shared(self) -> None:
        with self._lock:
            self.shared = True

    def finish(self, finish_timestamp: int) -> None:
        """Complete the span, computing its duration from the start time."""
        with self._lock:
            self._finish(finish_timestamp)

    def _finish(self, finish_timestamp: int) -> None:
        # caller holds the lock
        if self.timestamp != 0 and finish_timestamp != 0:
            self.duration = max(finish_timestamp - self.timestamp, 1)

    def write_to(self, builder) -> None:
        """
        Copy this span's state into an export builder.

        The builder receives the remote endpoint, name, timestamp, duration,
        kind (when set and known to ``builder.kind_type``), every annotation
        and tag in insertion order, and ``shared(True)`` only when shared.

        Args:
            builder: Export target, e.g. SpanRecordBuilder or OTelSpanBuilder
        """
        kind_type = getattr(builder, "kind_type", Kind)
        with self._lock:
            builder.remote_endpoint(self.remote_endpoint)
            builder.name(self.name)
            builder.timestamp(self.timestamp)
            builder.duration(self.duration)
            kind_index = self.kind_index
            kind = kind_at(kind_type, kind_index)
            # the exporter's enumeration may be older than the recorder's
            if kind is not None:
                builder.kind(kind)
            for pair in self.pairs:
                if isinstance(pair, Annotation):
                    builder.add_annotation(pair.timestamp, str(pair.value))
                else:
                    builder.put_tag(str(pair.key), str(pair.value))
            if self.shared:
                builder.shared(True)
        if kind is None and kind_index != UNSET_KIND:
            logger.debug(
                "Dropped kind index %s: %s declares %s kinds",
                kind_index,
                kind_type.__name__,
                len(kind_type),
            )

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"MutableSpan(name={self.name!r}, timestamp={self.timestamp}, "
                f"duration={self.duration}, kind_index={self.kind_index}, "
                f"pairs={len(self.pairs)}, shared={self.shared})"
            )
