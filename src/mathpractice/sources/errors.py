"""
mathpractice.sources.errors

Domain exceptions raised by collaborator adapters.

Responsibilities:
- Express "the collaborator answered but reported a failure" without leaking
  library-specific exception types to callers.
"""

from __future__ import annotations


class UpstreamError(Exception):
    """
    A collaborator responded but reported a failure.
    `message` is safe to surface to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedProblemError(UpstreamError):
    # The problem source replied without a JSON object to parse.
    pass


class StoreError(UpstreamError):
    # A session store read or write failed.
    pass


class SessionNotFound(StoreError):
    def __init__(self, session_id: str) -> None:
        super().__init__("Session not found")
        self.session_id = session_id
