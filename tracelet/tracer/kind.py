"""Span kind enumeration."""

from enum import Enum
from typing import Type


class Kind(Enum):
    """Role of a span within a request."""

    CLIENT = 0
    SERVER = 1
    PRODUCER = 2
    CONSUMER = 3


def kind_ordinal(kind: Enum) -> int:
    """Return the declaration position of ``kind`` within its enumeration."""
    return list(type(kind)).index(kind)


def kind_at(kind_type: Type[Enum], index: int):
    """
    Resolve an ordinal against the current members of ``kind_type``.

    Returns None when the index is unset (negative) or beyond the members
    the enumeration currently declares.
    """
    members = list(kind_type)
    if 0 <= index < len(members):
        return members[index]
    return None
