"""Console exporter for developer visibility."""

from __future__ import annotations

import sys
from typing import Iterable

from tracelet.tracer.span_record import SpanRecord


class ConsoleExporter:
    """Simple exporter that prints span records to stdout (or provided stream)."""

    def __init__(self, stream=None) -> None:
        self.stream = stream or sys.stdout

    def export(self, records: Iterable[SpanRecord]) -> bool:
        for record in records:
            kind = record.kind.name if record.kind is not None else None
            line = (
                f"[span] name={record.name} kind={kind} "
                f"timestamp={record.timestamp} duration_us={record.duration}"
            )
            if record.remote_endpoint is not None:
                line += f" remote={record.remote_endpoint.service_name}"
            if record.tags:
                line += f" tags={list(record.tags)}"
            if record.annotations:
                line += f" annotations={list(record.annotations)}"
            if record.shared:
                line += " shared=True"
            print(line, file=self.stream)
        return True

    def shutdown(self) -> None:
        return None
