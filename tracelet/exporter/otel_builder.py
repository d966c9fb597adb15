"""Export target that turns a recorded span into an OpenTelemetry ReadableSpan."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import Event, ReadableSpan
from opentelemetry.sdk.util.instrumentation import InstrumentationScope
from opentelemetry.trace import SpanContext as OTelSpanContext
from opentelemetry.trace import SpanKind

from tracelet import runtime_config
from tracelet.tracer.endpoint import Endpoint
from tracelet.tracer.kind import Kind
from tracelet.utils.helpers import micros_to_nanos

SHARED_ATTRIBUTE = "tracelet.shared"

_SPAN_KINDS = {
    Kind.CLIENT: SpanKind.CLIENT,
    Kind.SERVER: SpanKind.SERVER,
    Kind.PRODUCER: SpanKind.PRODUCER,
    Kind.CONSUMER: SpanKind.CONSUMER,
}


class OTelSpanBuilder:
    """
    Builds an OTel ``ReadableSpan`` from MutableSpan.write_to().

    Microsecond timestamps become nanoseconds, annotations become span events
    and tags become attributes. OTel attributes are a mapping, so a repeated
    tag key keeps its last value. The remote endpoint is reported through the
    ``peer.service``, ``net.peer.ip`` and ``net.peer.port`` attributes.
    """

    kind_type = Kind

    def __init__(
        self,
        context: Optional[OTelSpanContext] = None,
        parent: Optional[OTelSpanContext] = None,
        resource: Optional[OTelResource] = None,
    ) -> None:
        """
        Args:
            context: Identity of the span being exported
            parent: Context of the parent span, if any
            resource: OTel resource; defaults to one naming the configured service
        """
        self._context = context
        self._parent = parent
        self._resource = resource
        self._name: Optional[str] = None
        self._kind = SpanKind.INTERNAL
        self._timestamp = 0
        self._duration = 0
        self._attributes: Dict[str, Any] = {}
        self._events: List[Event] = []

    def remote_endpoint(self, endpoint: Optional[Endpoint]) -> None:
        if endpoint is None:
            return
        if endpoint.service_name:
            self._attributes["peer.service"] = endpoint.service_name
        address = endpoint.address()
        if address:
            self._attributes["net.peer.ip"] = address
        if endpoint.port:
            self._attributes["net.peer.port"] = endpoint.port

    def name(self, name: Optional[str]) -> None:
        self._name = name

    def timestamp(self, timestamp: int) -> None:
        self._timestamp = timestamp

    def duration(self, duration: int) -> None:
        self._duration = duration

    def kind(self, kind: Kind) -> None:
        self._kind = _SPAN_KINDS.get(kind, SpanKind.INTERNAL)

    def add_annotation(self, timestamp: int, value: str) -> None:
        self._events.append(Event(name=value, timestamp=micros_to_nanos(timestamp)))

    def put_tag(self, key: str, value: str) -> None:
        self._attributes[key] = value

    def shared(self, shared: bool) -> None:
        if shared:
            self._attributes[SHARED_ATTRIBUTE] = True

    def build(self) -> ReadableSpan:
        start_time = micros_to_nanos(self._timestamp) if self._timestamp else None
        end_time = None
        if start_time is not None and self._duration:
            end_time = start_time + micros_to_nanos(self._duration)

        resource = self._resource
        if resource is None:
            resource = OTelResource.create(
                {"service.name": runtime_config.load_service_name()}
            )

        return ReadableSpan(
            name=self._name or "",
            context=self._context,
            parent=self._parent,
            resource=resource,
            attributes=dict(self._attributes),
            events=list(self._events),
            kind=self._kind,
            start_time=start_time,
            end_time=end_time,
            instrumentation_scope=InstrumentationScope(
                runtime_config.get_instrumentation_scope()
            ),
        )
