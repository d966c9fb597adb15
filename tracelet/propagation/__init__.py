"""Sampling decisions and their propagation helpers."""

from tracelet.propagation.propagators import (
    from_trace_flags,
    sampling_flags_of,
    to_trace_flags,
)
from tracelet.propagation.sampling_flags import (
    FLAG_DEBUG,
    FLAG_SAMPLED,
    FLAG_SAMPLED_SET,
    SamplingFlags,
    decode_debug,
    decode_sampled,
    encode,
    sampling_flags_for,
)

__all__ = [
    "SamplingFlags",
    "sampling_flags_for",
    "decode_sampled",
    "decode_debug",
    "encode",
    "FLAG_SAMPLED",
    "FLAG_SAMPLED_SET",
    "FLAG_DEBUG",
    "to_trace_flags",
    "from_trace_flags",
    "sampling_flags_of",
]
