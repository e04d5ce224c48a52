"""
mathpractice.client.messages

User-facing text for each error kind and for the skip prompt.
"""

from __future__ import annotations

from mathpractice.session.gate import SkipConfirmation
from mathpractice.session.outcome import ErrorKind

ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.network: "Could not reach the server. Check your connection and try again.",
    ErrorKind.timeout: "The request took too long and was cancelled. Please try again.",
    ErrorKind.server: "The server reported a problem. Please try again.",
    ErrorKind.unknown: "Something unexpected went wrong. Please try again.",
}


def error_message(kind: ErrorKind, detail: str | None = None) -> str | None:
    if kind is ErrorKind.none:
        return None
    base = ERROR_MESSAGES[kind]
    if kind is ErrorKind.server and detail:
        return f"The server reported a problem: {detail}. Please try again."
    return base


def skip_prompt(confirmation: SkipConfirmation) -> str:
    if confirmation.reason == "unanswered":
        return "You haven't answered this problem yet. Skip it and generate a new one?"
    return "Your last answer wasn't correct. Skip this problem and generate a new one?"
