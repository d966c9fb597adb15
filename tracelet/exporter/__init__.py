"""Exporters and export targets."""

from tracelet.exporter.console_exporter import ConsoleExporter
from tracelet.exporter.otel_builder import OTelSpanBuilder

__all__ = ["ConsoleExporter", "OTelSpanBuilder"]
