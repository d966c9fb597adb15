"""Trace-scoped sampling decisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

FLAG_SAMPLED = 1 << 1
FLAG_SAMPLED_SET = 1 << 2
FLAG_DEBUG = 1 << 3


@dataclass(frozen=True)
class SamplingFlags:
    """
    Whether a trace's spans are reported.

    ``sampled`` is consistent for an entire trace:

    - True: the trace is reported, starting with the first span to set it
    - False: the trace is not reported
    - None: the decision is deferred to another span

    Once decided, the value is propagated and honored downstream. A new
    decision replaces the old value; instances are never mutated.

    ``debug`` requests that spans be stored even when policy would drop
    them, and always implies ``sampled is True``.

    Use the canonical instances (EMPTY, SAMPLED, NOT_SAMPLED, DEBUG), the
    ``Builder`` or ``sampling_flags_for`` rather than the constructor.
    """

    sampled: Optional[bool] = None
    debug: bool = False

    EMPTY: ClassVar["SamplingFlags"]
    SAMPLED: ClassVar["SamplingFlags"]
    NOT_SAMPLED: ClassVar["SamplingFlags"]
    DEBUG: ClassVar["SamplingFlags"]

    def __repr__(self) -> str:
        return f"SamplingFlags(sampled={self.sampled}, debug={self.debug})"

    class Builder:
        """Assembles SamplingFlags, enforcing that debug implies sampled."""

        __slots__ = ("_sampled", "_debug")

        def __init__(self) -> None:
            self._sampled: Optional[bool] = None
            self._debug = False

        def sampled(self, sampled: Optional[bool]) -> "SamplingFlags.Builder":
            self._sampled = sampled
            return self

        def debug(self, debug: bool) -> "SamplingFlags.Builder":
            self._debug = debug
            if debug:
                self._sampled = True
            return self

        @staticmethod
        def build_from(sampled: Optional[bool]) -> "SamplingFlags":
            """Flags for a plain sampling decision, without a builder instance."""
            if sampled is not None:
                return SamplingFlags.SAMPLED if sampled else SamplingFlags.NOT_SAMPLED
            return SamplingFlags.EMPTY

        def build(self) -> "SamplingFlags":
            if self._debug:
                return SamplingFlags.DEBUG
            return self.build_from(self._sampled)


SamplingFlags.EMPTY = SamplingFlags(None, False)
SamplingFlags.SAMPLED = SamplingFlags(True, False)
SamplingFlags.NOT_SAMPLED = SamplingFlags(False, False)
SamplingFlags.DEBUG = SamplingFlags(True, True)


def sampling_flags_for(sampled: Optional[bool]) -> SamplingFlags:
    return SamplingFlags.Builder.build_from(sampled)


def decode_sampled(flags: int) -> Optional[bool]:
    """
    Read the sampled decision from packed flags.

    Returns None unless FLAG_SAMPLED_SET is present, whatever FLAG_SAMPLED says.
    """
    if (flags & FLAG_SAMPLED_SET) == FLAG_SAMPLED_SET:
        return (flags & FLAG_SAMPLED) == FLAG_SAMPLED
    return None


def decode_debug(flags: int) -> bool:
    return (flags & FLAG_DEBUG) == FLAG_DEBUG


def encode(sampling_flags: SamplingFlags) -> int:
    """Pack ``sampling_flags`` into the bits read by decode_sampled/decode_debug."""
    flags = 0
    if sampling_flags.sampled is not None:
        flags |= FLAG_SAMPLED_SET
        if sampling_flags.sampled:
            flags |= FLAG_SAMPLED
    if sampling_flags.debug:
        flags |= FLAG_DEBUG
    return flags
