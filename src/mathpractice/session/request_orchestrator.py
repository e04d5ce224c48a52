"""
mathpractice.session.request_orchestrator

Single outbound call with a bounded wait and a classified outcome.

Responsibilities:
- Run one operation as a task and cancel it once the wait bound is exceeded.
- Map every failure onto an `ErrorKind`; never raise past this boundary
  (external cancellation of the caller is re-raised after cleanup).
- Release the in-flight handle on every exit path.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import httpx

from mathpractice.observability.logging import get_logger
from mathpractice.session.outcome import ErrorKind, Outcome
from mathpractice.sources.errors import UpstreamError

log = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 120.0


class RequestOrchestrator:
    """
    Holds at most one in-flight call. Callers serialize their use of it; the
    session controller never issues a second call while one is outstanding.
    """

    def __init__(self, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds
        self._inflight: asyncio.Task[Any] | None = None

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> Outcome[T]:
        async def _call() -> T:
            return await operation()

        task = asyncio.ensure_future(_call())
        self._inflight = task
        try:
            result = await asyncio.wait_for(task, timeout=self._timeout_seconds)
        except asyncio.CancelledError:
            log.info("request.cancelled")
            raise
        except Exception as e:
            return _classify_failure(e, timeout_seconds=self._timeout_seconds)
        finally:
            if not task.done():
                task.cancel()
            self._inflight = None

        if isinstance(result, httpx.Response):
            return _decode_response(result)
        return _check_payload(result)


def _classify_failure(exc: BaseException, *, timeout_seconds: float) -> Outcome[Any]:
    # Order matters: httpx timeouts are transport errors too.
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        log.warning("request.timeout", timeout_seconds=timeout_seconds)
        return Outcome.failure(ErrorKind.timeout)
    if isinstance(exc, httpx.HTTPStatusError):
        message = _error_message(exc.response)
        log.warning("request.server_error", status_code=exc.response.status_code, message=message)
        return Outcome.failure(ErrorKind.server, message)
    if isinstance(exc, httpx.TransportError):
        log.warning("request.network_error", error=type(exc).__name__)
        return Outcome.failure(ErrorKind.network)
    if isinstance(exc, UpstreamError):
        log.warning("request.server_error", message=exc.message)
        return Outcome.failure(ErrorKind.server, exc.message)
    log.error("request.unknown_error", error=type(exc).__name__, detail=str(exc))
    return Outcome.failure(ErrorKind.unknown)


def _decode_response(response: httpx.Response) -> Outcome[Any]:
    if not response.is_success:
        message = _error_message(response)
        log.warning("request.server_error", status_code=response.status_code, message=message)
        return Outcome.failure(ErrorKind.server, message)
    try:
        payload = response.json()
    except ValueError as e:
        log.error("request.undecodable", detail=str(e))
        return Outcome.failure(ErrorKind.unknown)
    return _check_payload(payload)


def _check_payload(payload: T) -> Outcome[T]:
    if isinstance(payload, Mapping) and payload.get("error"):
        message = _message_from_error_field(payload["error"])
        log.warning("request.server_error", message=message)
        return Outcome.failure(ErrorKind.server, message)
    return Outcome.success(payload)


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping) and "error" in body:
        return _message_from_error_field(body["error"])
    return None


def _message_from_error_field(error: Any) -> str | None:
    # Our API sends {"error": "..."}; Gemini sends {"error": {"message": "..."}}.
    if isinstance(error, str):
        return error
    if isinstance(error, Mapping) and isinstance(error.get("message"), str):
        return error["message"]
    return None
