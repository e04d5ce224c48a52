"""
mathpractice.client.render

Plain-text rendering of controller snapshots.
"""

from __future__ import annotations

from mathpractice.client.messages import error_message, skip_prompt
from mathpractice.session.controller import SessionController
from mathpractice.session.state import Phase


def render(controller: SessionController) -> list[str]:
    state = controller.state
    lines: list[str] = []

    if state.phase is Phase.generating:
        lines.append("Generating...")
    elif state.phase is Phase.submitting:
        lines.append("Checking...")

    if state.current is not None:
        lines.append(f"Problem: {state.current.problem_text}")
        if state.user_answer:
            lines.append(f"Your answer: {state.user_answer}")

    if state.feedback_text:
        lines.append("Correct!" if state.last_outcome else "Not quite right")
        lines.append(state.feedback_text)

    message = error_message(state.error_kind, state.error_message)
    if message is not None:
        lines.append(f"Oops! {message}")
        lines.append("Type 'retry' to try again.")

    if controller.pending_skip is not None:
        lines.append(skip_prompt(controller.pending_skip))
        lines.append("Type 'yes' to skip or 'no' to keep this problem.")

    return lines
