"""Immutable record of a completed span, and the builder that assembles it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Type

from tracelet.tracer.endpoint import Endpoint
from tracelet.tracer.kind import Kind


@dataclass(frozen=True)
class SpanRecord:
    name: Optional[str] = None
    kind: Optional[Enum] = None
    timestamp: Optional[int] = None  # epoch microseconds
    duration: Optional[int] = None  # microseconds
    remote_endpoint: Optional[Endpoint] = None
    annotations: Tuple[Tuple[int, str], ...] = ()
    tags: Tuple[Tuple[str, str], ...] = ()
    shared: Optional[bool] = None

    def tag_values(self, key: str) -> List[str]:
        """All values recorded for ``key``, in insertion order."""
        return [value for tag_key, value in self.tags if tag_key == key]


@dataclass
class SpanRecordBuilder:
    """
    Collects span fields and produces a frozen SpanRecord.

    A timestamp or duration of 0 means unknown and is stored as None.
    Annotations and tags keep their insertion order; repeated tag keys are
    preserved.
    """

    kind_type: Type[Enum] = Kind
    _name: Optional[str] = None
    _kind: Optional[Enum] = None
    _timestamp: Optional[int] = None
    _duration: Optional[int] = None
    _remote_endpoint: Optional[Endpoint] = None
    _annotations: List[Tuple[int, str]] = field(default_factory=list)
    _tags: List[Tuple[str, str]] = field(default_factory=list)
    _shared: Optional[bool] = None

    def name(self, name: Optional[str]) -> "SpanRecordBuilder":
        self._name = name
        return self

    def kind(self, kind: Optional[Enum]) -> "SpanRecordBuilder":
        self._kind = kind
        return self

    def timestamp(self, timestamp: int) -> "SpanRecordBuilder":
        self._timestamp = timestamp or None
        return self

    def duration(self, duration: int) -> "SpanRecordBuilder":
        self._duration = duration or None
        return self

    def remote_endpoint(self, endpoint: Optional[Endpoint]) -> "SpanRecordBuilder":
        self._remote_endpoint = endpoint
        return self

    def add_annotation(self, timestamp: int, value: str) -> "SpanRecordBuilder":
        self._annotations.append((timestamp, value))
        return self

    def put_tag(self, key: str, value: str) -> "SpanRecordBuilder":
        self._tags.append((key, value))
        return self

    def shared(self, shared: Optional[bool]) -> "SpanRecordBuilder":
        self._shared = shared
        return self

    def build(self) -> SpanRecord:
        return SpanRecord(
            name=self._name,
            kind=self._kind,
            timestamp=self._timestamp,
            duration=self._duration,
            remote_endpoint=self._remote_endpoint,
            annotations=tuple(self._annotations),
            tags=tuple(self._tags),
            shared=self._shared,
        )
