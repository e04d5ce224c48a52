"""
mathpractice.session.gate

Skip-confirmation gate for "generate a new problem" requests.

Responsibilities:
- Decide whether a generate request would discard an unanswered or
  incorrectly answered problem.
- Describe the pending confirmation for the front end.
"""

from __future__ import annotations

from dataclasses import dataclass

from mathpractice.session.state import InteractionState


@dataclass(frozen=True, slots=True)
class SkipConfirmation:
    """
    Returned instead of running a generate request. The front end shows a
    prompt and answers through `confirm_skip()` / `cancel_skip()`.
    """

    reason: str
    session_id: str | None
    last_outcome: bool | None


def should_intercept(state: InteractionState) -> bool:
    # Only a correctly answered problem may be skipped without asking.
    return state.current is not None and state.last_outcome is not True


def confirmation_for(state: InteractionState) -> SkipConfirmation | None:
    """Pending confirmation for `state`, or None when generate may proceed."""

    if state.current is None or not should_intercept(state):
        return None
    reason = "unanswered" if state.last_outcome is None else "answered_incorrectly"
    return SkipConfirmation(
        reason=reason,
        session_id=state.current.session_id,
        last_outcome=state.last_outcome,
    )
