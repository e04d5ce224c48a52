"""
mathpractice.sources.gemini_http

HTTP boundary to the Gemini `generateContent` endpoint.

Responsibilities:
- Send a single-prompt request and extract the first candidate's text.
- Turn model replies into a `GeneratedProblem` (problem source) or feedback text
  (feedback source).
"""

from __future__ import annotations

import json
import re
from typing import Any

import httpx

from mathpractice.grading import Number
from mathpractice.observability.logging import get_logger
from mathpractice.settings import Settings
from mathpractice.sources.base import GeneratedProblem
from mathpractice.sources.errors import MalformedProblemError

log = get_logger(__name__)

PROBLEM_PROMPT = (
    "Generate a Primary 5 Singapore math word problem involving whole numbers. "
    'Reply ONLY in this JSON format: {"problem_text": "...", "final_answer": ...}'
)

FALLBACK_FEEDBACK = "Good try!"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def feedback_prompt(*, problem_text: str, correct_answer: Number, user_answer: Number) -> str:
    return (
        f'A student answered this math problem: "{problem_text}". '
        f"The correct answer is {correct_answer}. "
        f"The student's answer was {user_answer}. Give helpful feedback."
    )


class GeminiClient:
    """
    Thin client over a shared `httpx.AsyncClient`.
    Non-2xx responses raise `httpx.HTTPStatusError`; transport failures propagate as-is.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.gemini_api_key:
            headers["x-goog-api-key"] = self._settings.gemini_api_key
        return headers

    async def generate_text(self, prompt: str) -> str:
        r = await self._http.post(
            self._settings.gemini_api_url,
            headers=self._headers(),
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        r.raise_for_status()
        return _first_candidate_text(r.json())


def _first_candidate_text(data: Any) -> str:
    # candidates[0].content.parts[0].text, tolerating any missing level.
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiProblemSource:
    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def generate(self) -> GeneratedProblem:
        text = await self._client.generate_text(PROBLEM_PROMPT)
        return parse_problem_reply(text)


def parse_problem_reply(text: str) -> GeneratedProblem:
    """
    Extract the JSON object embedded in a model reply.

    No object at all is reported as a source failure (`MalformedProblemError`);
    an object that does not decode or has the wrong shape raises the underlying
    `json.JSONDecodeError` / `pydantic.ValidationError`.
    """

    match = _JSON_OBJECT.search(text)
    if match is None:
        log.warning("problem_reply.no_json", reply_chars=len(text))
        raise MalformedProblemError("AI did not return JSON")
    return GeneratedProblem.model_validate(json.loads(match.group(0)))


class GeminiFeedbackSource:
    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def explain(
        self, *, problem_text: str, correct_answer: Number, user_answer: Number
    ) -> str:
        text = await self._client.generate_text(
            feedback_prompt(
                problem_text=problem_text,
                correct_answer=correct_answer,
                user_answer=user_answer,
            )
        )
        if not text.strip():
            log.info("feedback_reply.empty", fallback=FALLBACK_FEEDBACK)
            return FALLBACK_FEEDBACK
        return text
