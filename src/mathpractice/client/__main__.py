"""
mathpractice.client.__main__

Interactive terminal loop via `python -m mathpractice.client`.

Responsibilities:
- Wire the Gemini sources and the SQL store into a session controller.
- Map typed commands onto controller intents and print each resulting snapshot.
"""

from __future__ import annotations

import asyncio
import sys

import httpx

from mathpractice.client.render import render
from mathpractice.db.init_db import init_db
from mathpractice.db.session import create_engine, create_sessionmaker
from mathpractice.observability.logging import configure_logging
from mathpractice.session.controller import SessionController
from mathpractice.session.request_orchestrator import RequestOrchestrator
from mathpractice.settings import Settings, get_settings
from mathpractice.sources.gemini_http import GeminiClient, GeminiFeedbackSource, GeminiProblemSource
from mathpractice.sources.sql_store import SqlSessionStore

HELP = "Commands: new | answer <number> | submit | retry | yes | no | quit"


async def handle_command(controller: SessionController, line: str) -> bool:
    """
    Apply one command. Returns False when the user asked to quit.
    """

    command, _, arg = line.strip().partition(" ")
    command = command.lower()

    if command in ("quit", "exit"):
        return False
    if controller.awaiting_confirmation and command in ("yes", "y"):
        await controller.confirm_skip()
    elif controller.awaiting_confirmation and command in ("no", "n"):
        controller.cancel_skip()
    elif command == "new":
        await controller.request_generate()
    elif command == "answer":
        controller.set_answer(arg)
        await controller.submit()
    elif command == "submit":
        await controller.submit()
    elif command == "retry":
        await controller.retry()
    else:
        print(HELP)
    return True


async def run(settings: Settings) -> None:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as http:
            gemini = GeminiClient(settings=settings, http=http)
            controller = SessionController(
                problems=GeminiProblemSource(gemini),
                feedback=GeminiFeedbackSource(gemini),
                store=SqlSessionStore(create_sessionmaker(engine)),
                orchestrator=RequestOrchestrator(
                    timeout_seconds=settings.request_timeout_seconds
                ),
            )
            print(HELP)
            while True:
                line = await asyncio.to_thread(input, "> ")
                if not await handle_command(controller, line):
                    break
                for out in render(controller):
                    print(out)
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    configure_logging(
        service_name=f"{settings.service_name}-client",
        level=settings.log_level,
        json_logs=False,
        stream=sys.stderr,
    )
    try:
        asyncio.run(run(settings))
    except (EOFError, KeyboardInterrupt):
        pass


if __name__ == "__main__":
    main()
