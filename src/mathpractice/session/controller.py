"""
mathpractice.session.controller

Session controller: the state machine behind one practice session at a time.

Responsibilities:
- Sequence problem generation, answer submission and retry through the
  request orchestrator.
- Route generate requests through the skip-confirmation gate.
- Own the only mutable interaction state and publish immutable snapshots.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

from mathpractice.grading import is_correct, parse_answer
from mathpractice.observability.logging import get_logger
from mathpractice.session.gate import SkipConfirmation, confirmation_for
from mathpractice.session.outcome import ErrorKind, Outcome
from mathpractice.session.request_orchestrator import RequestOrchestrator
from mathpractice.session.state import (
    Attempt,
    AttemptKind,
    InteractionState,
    Phase,
    ProblemSession,
)
from mathpractice.sources.base import FeedbackSource, ProblemSource, SessionStore

log = get_logger(__name__)

Listener = Callable[[InteractionState], None]

UNSAVED_SESSION_MESSAGE = "Problem was not saved"


class SessionController:
    """
    Transitions:
    - generate:  IDLE/READY/RESOLVED/FAILED -> GENERATING -> READY | FAILED
    - submit:    READY/RESOLVED/FAILED      -> SUBMITTING -> RESOLVED | FAILED
    - retry:     any state with an error    -> replays `last_attempt`

    Store write failures after a successful source call do not roll back:
    the machine advances and reports `ErrorKind.server`.
    """

    def __init__(
        self,
        *,
        problems: ProblemSource,
        feedback: FeedbackSource,
        store: SessionStore,
        orchestrator: RequestOrchestrator | None = None,
    ) -> None:
        self._problems = problems
        self._feedback = feedback
        self._store = store
        self._orchestrator = orchestrator or RequestOrchestrator()

        self._state = InteractionState()
        # UI-only flag, not part of InteractionState.
        self._pending_skip: SkipConfirmation | None = None
        self._listeners: list[Listener] = []

    # -- observation ---------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def pending_skip(self) -> SkipConfirmation | None:
        return self._pending_skip

    @property
    def awaiting_confirmation(self) -> bool:
        return self._pending_skip is not None

    @property
    def can_generate(self) -> bool:
        return not self._state.busy

    @property
    def can_submit(self) -> bool:
        if self._state.busy or self._state.current is None:
            return False
        try:
            parse_answer(self._state.user_answer)
        except ValueError:
            return False
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -- user intents --------------------------------------------------------

    def set_answer(self, text: str) -> None:
        # Answer input is locked while it is being checked.
        if self._state.phase is Phase.submitting:
            return
        self._set(user_answer=text)

    async def request_generate(self) -> SkipConfirmation | None:
        """
        Generate a new problem unless the gate intercepts.
        Returns the pending confirmation when intercepted, else None.
        """

        if not self.can_generate:
            log.info("generate.ignored", phase=self._state.phase.value)
            return None
        confirmation = confirmation_for(self._state)
        if confirmation is not None:
            self._pending_skip = confirmation
            log.info("generate.intercepted", reason=confirmation.reason)
            self._notify()
            return confirmation
        await self._generate()
        return None

    async def confirm_skip(self) -> None:
        if self._pending_skip is None:
            return
        if not self.can_generate:
            log.info("skip.ignored", phase=self._state.phase.value)
            return
        log.info("skip.confirmed")
        await self._generate()

    def cancel_skip(self) -> None:
        if self._pending_skip is None:
            return
        self._pending_skip = None
        log.info("skip.cancelled")
        self._notify()

    async def submit(self) -> bool:
        current = self._state.current
        if not self.can_submit or current is None:
            log.info("submit.ignored", phase=self._state.phase.value)
            return False
        attempt = Attempt(
            kind=AttemptKind.submit,
            session_id=current.session_id,
            user_answer=parse_answer(self._state.user_answer),
        )
        await self._submit(current, attempt)
        return True

    async def retry(self) -> bool:
        """Replay the last attempt verbatim after a failure."""

        attempt = self._state.last_attempt
        if not self._state.in_error or attempt is None or self._state.busy:
            return False
        current = self._state.current
        if attempt.kind is AttemptKind.submit and current is None:
            return False
        log.info("retry", kind=attempt.kind.value)
        self._set(error_kind=ErrorKind.none, error_message=None)
        if attempt.kind is AttemptKind.generate:
            await self._generate()
        elif current is not None:
            await self._submit(current, attempt)
        return True

    # -- transitions ---------------------------------------------------------

    async def _generate(self) -> None:
        # Starting any call answers an open skip prompt.
        self._pending_skip = None
        self._set(
            phase=Phase.generating,
            feedback_text="",
            last_outcome=None,
            error_kind=ErrorKind.none,
            error_message=None,
            last_attempt=Attempt(kind=AttemptKind.generate),
        )

        outcome = await self._orchestrator.execute(self._problems.generate)
        problem = outcome.payload
        if problem is None:
            failure = outcome if not outcome.ok else Outcome.failure(ErrorKind.unknown)
            log.warning("generate.failed", error_kind=failure.error_kind.value)
            self._fail(failure, current=None, user_answer="")
            return

        session = ProblemSession(
            problem_text=problem.problem_text,
            correct_answer=problem.final_answer,
        )

        stored = await self._orchestrator.execute(
            lambda: self._store.create_session(
                problem_text=session.problem_text,
                correct_answer=session.correct_answer,
            )
        )
        error_kind, error_message = ErrorKind.none, None
        if stored.ok:
            session = replace(session, session_id=stored.payload)
        else:
            # Durability degraded; the problem stays answerable.
            error_kind, error_message = ErrorKind.server, stored.message or UNSAVED_SESSION_MESSAGE
            log.warning("generate.persist_failed", error_kind=stored.error_kind.value)

        log.info("generate.ready", session_id=session.session_id)
        self._set(
            phase=Phase.ready,
            current=session,
            user_answer="",
            last_outcome=None,
            error_kind=error_kind,
            error_message=error_message,
        )

    async def _submit(self, current: ProblemSession, attempt: Attempt) -> None:
        session_id = attempt.session_id
        user_answer = attempt.user_answer
        if user_answer is None:
            log.info("submit.ignored", reason="no_answer")
            return

        self._pending_skip = None
        self._set(
            phase=Phase.submitting,
            feedback_text="",
            error_kind=ErrorKind.none,
            error_message=None,
            last_attempt=attempt,
        )

        outcome = await self._orchestrator.execute(
            lambda: self._feedback.explain(
                problem_text=current.problem_text,
                correct_answer=current.correct_answer,
                user_answer=user_answer,
            )
        )
        if not outcome.ok:
            log.warning(
                "submit.failed", session_id=session_id, error_kind=outcome.error_kind.value
            )
            self._fail(outcome)
            return

        correct = is_correct(user_answer, current.correct_answer)
        feedback_text = outcome.payload or ""

        error_kind, error_message = ErrorKind.none, None
        if session_id is None:
            error_kind, error_message = ErrorKind.server, UNSAVED_SESSION_MESSAGE
        else:
            recorded = await self._orchestrator.execute(
                lambda: self._store.record_submission(
                    session_id=session_id,
                    user_answer=user_answer,
                    is_correct=correct,
                    feedback_text=feedback_text,
                )
            )
            if not recorded.ok:
                error_kind = ErrorKind.server
                error_message = recorded.message or "Failed to save submission"
                log.warning("submit.persist_failed", error_kind=recorded.error_kind.value)

        log.info("submit.resolved", session_id=session_id, is_correct=correct)
        self._set(
            phase=Phase.resolved,
            last_outcome=correct,
            feedback_text=feedback_text,
            error_kind=error_kind,
            error_message=error_message,
        )

    def _fail(self, outcome: Outcome[Any], **changes: Any) -> None:
        self._set(
            phase=Phase.failed,
            error_kind=outcome.error_kind,
            error_message=outcome.message,
            **changes,
        )

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)


# --- Module Notes -----------------------------------------------------------
# The orchestrator call is the only suspension point. Between calls every transition
# is a single `_set`, so listeners always receive consistent snapshots.
