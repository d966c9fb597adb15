"""Span recording components."""

from tracelet.tracer.clock import Clock, FixedClock, SystemClock
from tracelet.tracer.endpoint import Endpoint
from tracelet.tracer.kind import Kind, kind_at, kind_ordinal
from tracelet.tracer.mutable_span import Annotation, MutableSpan, Tag
from tracelet.tracer.span_record import SpanRecord, SpanRecordBuilder

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "Endpoint",
    "Kind",
    "kind_at",
    "kind_ordinal",
    "Annotation",
    "Tag",
    "MutableSpan",
    "SpanRecord",
    "SpanRecordBuilder",
]
