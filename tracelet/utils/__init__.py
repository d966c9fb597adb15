"""Utility functions for Tracelet."""

from tracelet.utils.helpers import micros_to_nanos, nanos_to_micros

__all__ = [
    "micros_to_nanos",
    "nanos_to_micros",
]
