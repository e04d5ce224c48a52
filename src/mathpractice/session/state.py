"""
mathpractice.session.state

Immutable interaction state owned by the session controller.

Responsibilities:
- Name the controller phases and the attempt kinds kept for retry.
- Provide the frozen snapshot handed to front ends.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mathpractice.grading import Number
from mathpractice.session.outcome import ErrorKind


class Phase(enum.StrEnum):
    idle = "IDLE"
    generating = "GENERATING"
    ready = "READY"
    submitting = "SUBMITTING"
    resolved = "RESOLVED"
    # Error sub-state: the last call failed before any transition past the failure point.
    failed = "FAILED"


IN_FLIGHT_PHASES = frozenset({Phase.generating, Phase.submitting})


class AttemptKind(enum.StrEnum):
    generate = "GENERATE"
    submit = "SUBMIT"


@dataclass(frozen=True, slots=True)
class ProblemSession:
    problem_text: str
    correct_answer: Number
    # Assigned by the session store; None until the session has been persisted.
    session_id: str | None = None


@dataclass(frozen=True, slots=True)
class Attempt:
    kind: AttemptKind
    # Submit attempts only; generate takes no input.
    session_id: str | None = None
    user_answer: Number | None = None


@dataclass(frozen=True, slots=True)
class InteractionState:
    phase: Phase = Phase.idle
    current: ProblemSession | None = None
    last_outcome: bool | None = None
    error_kind: ErrorKind = ErrorKind.none
    error_message: str | None = None
    last_attempt: Attempt | None = None
    user_answer: str = ""
    feedback_text: str = ""

    @property
    def in_error(self) -> bool:
        return self.error_kind is not ErrorKind.none

    @property
    def busy(self) -> bool:
        return self.phase in IN_FLIGHT_PHASES


# --- Module Notes -----------------------------------------------------------
# Snapshots are replaced wholesale (`dataclasses.replace`) on every transition, so a
# front end holding an old snapshot never observes a half-applied update.
