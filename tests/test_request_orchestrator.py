"""
tests.test_request_orchestrator

Bounded-wait execution and failure classification.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from mathpractice.session.outcome import ErrorKind
from mathpractice.session.request_orchestrator import DEFAULT_TIMEOUT_SECONDS, RequestOrchestrator
from mathpractice.settings import Settings
from mathpractice.sources.errors import SessionNotFound

_REQUEST = httpx.Request("POST", "http://test/api/math-problem")


def _raising(exc: BaseException):
    async def op():
        raise exc

    return op


def _returning(value):
    async def op():
        return value

    return op


def test_default_wait_bound_is_two_minutes() -> None:
    assert DEFAULT_TIMEOUT_SECONDS == 120.0
    assert RequestOrchestrator().timeout_seconds == 120.0
    assert Settings().request_timeout_seconds == 120.0


@pytest.mark.asyncio
async def test_success_returns_payload_unchanged() -> None:
    orch = RequestOrchestrator()
    payload = {"problem_text": "What is 12+7?", "final_answer": 19, "session_id": "abc"}

    outcome = await orch.execute(_returning(payload))

    assert outcome.ok
    assert outcome.payload is payload
    assert not orch.in_flight


@pytest.mark.asyncio
async def test_timeout_cancels_call_and_releases_handle() -> None:
    orch = RequestOrchestrator(timeout_seconds=0.05)
    cancelled = asyncio.Event()

    async def never_resolves():
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.set()
            raise

    outcome = await orch.execute(never_resolves)

    assert outcome.error_kind is ErrorKind.timeout
    assert cancelled.is_set()
    assert not orch.in_flight


@pytest.mark.asyncio
async def test_in_flight_while_call_outstanding() -> None:
    orch = RequestOrchestrator()
    gate = asyncio.Event()

    async def op():
        await gate.wait()
        return "done"

    task = asyncio.create_task(orch.execute(op))
    await asyncio.sleep(0)
    assert orch.in_flight

    gate.set()
    outcome = await task
    assert outcome.payload == "done"
    assert not orch.in_flight


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, kind",
    [
        (httpx.ConnectError("connection refused", request=_REQUEST), ErrorKind.network),
        (httpx.ReadError("reset", request=_REQUEST), ErrorKind.network),
        (httpx.ReadTimeout("slow", request=_REQUEST), ErrorKind.timeout),
        (KeyError("candidates"), ErrorKind.unknown),
        (ValueError("bad json"), ErrorKind.unknown),
    ],
)
async def test_failure_classification(exc: BaseException, kind: ErrorKind) -> None:
    orch = RequestOrchestrator()

    outcome = await orch.execute(_raising(exc))

    assert outcome.error_kind is kind
    assert outcome.payload is None
    assert not orch.in_flight


@pytest.mark.asyncio
async def test_status_error_is_server_with_reported_message() -> None:
    response = httpx.Response(404, json={"error": "Session not found"}, request=_REQUEST)
    exc = httpx.HTTPStatusError("404", request=_REQUEST, response=response)

    outcome = await RequestOrchestrator().execute(_raising(exc))

    assert outcome.error_kind is ErrorKind.server
    assert outcome.message == "Session not found"


@pytest.mark.asyncio
async def test_gemini_style_error_body_message() -> None:
    response = httpx.Response(
        429, json={"error": {"code": 429, "message": "Quota exceeded"}}, request=_REQUEST
    )
    exc = httpx.HTTPStatusError("429", request=_REQUEST, response=response)

    outcome = await RequestOrchestrator().execute(_raising(exc))

    assert outcome.error_kind is ErrorKind.server
    assert outcome.message == "Quota exceeded"


@pytest.mark.asyncio
async def test_collaborator_failure_is_server() -> None:
    outcome = await RequestOrchestrator().execute(_raising(SessionNotFound("abc")))

    assert outcome.error_kind is ErrorKind.server
    assert outcome.message == "Session not found"


@pytest.mark.asyncio
async def test_raw_response_handling() -> None:
    orch = RequestOrchestrator()

    ok = await orch.execute(
        _returning(httpx.Response(200, json={"is_correct": True, "feedback_text": "Nice"}))
    )
    assert ok.payload == {"is_correct": True, "feedback_text": "Nice"}

    failed = await orch.execute(
        _returning(httpx.Response(500, json={"error": "Failed to generate problem"}))
    )
    assert failed.error_kind is ErrorKind.server
    assert failed.message == "Failed to generate problem"

    garbled = await orch.execute(_returning(httpx.Response(200, content=b"<html>")))
    assert garbled.error_kind is ErrorKind.unknown


@pytest.mark.asyncio
async def test_error_field_in_payload_is_server() -> None:
    outcome = await RequestOrchestrator().execute(_returning({"error": "Failed to save problem"}))

    assert outcome.error_kind is ErrorKind.server
    assert outcome.message == "Failed to save problem"


@pytest.mark.asyncio
async def test_external_cancellation_propagates_and_releases() -> None:
    orch = RequestOrchestrator()
    inner_cancelled = asyncio.Event()

    async def never_resolves():
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            inner_cancelled.set()
            raise

    task = asyncio.create_task(orch.execute(never_resolves))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert inner_cancelled.is_set()
    assert not orch.in_flight
