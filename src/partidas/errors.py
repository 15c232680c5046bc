"""Failure kinds returned by the scheduling engine and the registry services.

Operations never raise across layers for domain faults. They return either
their result or a :class:`Failure`, and the transport edge decides how each
:class:`FailureKind` is presented to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    """Taxonomy of failures surfaced to callers."""

    INVALID = "INVALID"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class Failure:
    """A rejected operation together with a human-readable reason."""

    kind: FailureKind
    reason: str


Outcome = Union[T, Failure]


class StoreError(RuntimeError):
    """Raised by the persistence layer when a read or write cannot complete."""


class DuplicateError(StoreError):
    """Raised when a write is refused by a uniqueness or integrity constraint."""


def invalid(reason: str) -> Failure:
    return Failure(FailureKind.INVALID, reason)


def not_found(reason: str) -> Failure:
    return Failure(FailureKind.NOT_FOUND, reason)


def conflict(reason: str) -> Failure:
    return Failure(FailureKind.CONFLICT, reason)


def internal(reason: str = "Unexpected error while processing the request") -> Failure:
    return Failure(FailureKind.INTERNAL, reason)


__all__ = [
    "DuplicateError",
    "Failure",
    "FailureKind",
    "Outcome",
    "StoreError",
    "conflict",
    "internal",
    "invalid",
    "not_found",
]
