"""Conversions between SamplingFlags and OpenTelemetry trace flags."""

from __future__ import annotations

from opentelemetry.trace import SpanContext as OTelSpanContext
from opentelemetry.trace import TraceFlags

from tracelet.propagation.sampling_flags import SamplingFlags


def to_trace_flags(flags: SamplingFlags) -> TraceFlags:
    """
    Convert to W3C/OTel trace flags.

    OTel has no deferred or debug state: only ``sampled is True`` sets the
    sampled bit.
    """
    if flags.sampled is True:
        return TraceFlags(TraceFlags.SAMPLED)
    return TraceFlags(TraceFlags.DEFAULT)


def from_trace_flags(trace_flags: TraceFlags) -> SamplingFlags:
    """Map OTel trace flags onto the canonical decided instances."""
    return SamplingFlags.Builder.build_from(bool(trace_flags.sampled))


def sampling_flags_of(span_context: OTelSpanContext) -> SamplingFlags:
    """
    Sampling decision carried by an OTel span context.

    An invalid context carries no decision and yields EMPTY.
    """
    if span_context is None or not span_context.is_valid:
        return SamplingFlags.EMPTY
    return from_trace_flags(span_context.trace_flags)
