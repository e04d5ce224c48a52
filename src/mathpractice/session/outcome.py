"""
mathpractice.session.outcome

Classified result of one orchestrated call.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    none = "NONE"
    network = "NETWORK"  # no response received
    timeout = "TIMEOUT"  # wait bound exceeded, call aborted
    server = "SERVER"  # response received but reported a failure
    unknown = "UNKNOWN"  # anything else, including malformed payloads


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    payload: T | None = None
    error_kind: ErrorKind = ErrorKind.none
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is ErrorKind.none

    @classmethod
    def success(cls, payload: T) -> Outcome[T]:
        return cls(payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str | None = None) -> Outcome[T]:
        if kind is ErrorKind.none:
            raise ValueError("failure outcome needs a failure kind")
        return cls(error_kind=kind, message=message)
