"""Tracelet: in-flight span recording and sampling decisions."""

from __future__ import annotations

import logging

from tracelet.errors import ConfigError, TraceletError
from tracelet.propagation import SamplingFlags, decode_debug, decode_sampled, sampling_flags_for
from tracelet.tracer import (
    Endpoint,
    FixedClock,
    Kind,
    MutableSpan,
    SpanRecord,
    SpanRecordBuilder,
    SystemClock,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "MutableSpan",
    "SpanRecord",
    "SpanRecordBuilder",
    "Endpoint",
    "Kind",
    "SystemClock",
    "FixedClock",
    "SamplingFlags",
    "sampling_flags_for",
    "decode_sampled",
    "decode_debug",
    "TraceletError",
    "ConfigError",
]
