from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from modelhub.client.fallback import FallbackController
from modelhub.client.history import HistoryStore
from modelhub.client.session import AVAILABLE_MODELS, ChatSession
from modelhub.core.settings import ClientSettings, get_client_settings

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  /models          list known models
  /model NAME      switch model
  /system TEXT     set the system prompt
  /history         list saved exchanges
  /replay N        show saved exchange N without resending
  /clear           delete saved history and the transcript
  /quit            exit"""


def _print_history(session: ChatSession) -> None:
    entries = session.history
    if not entries:
        print("(no history)")
        return
    for i, entry in enumerate(entries, start=1):
        print(f"{i:2d}. {entry.query[:60]}")


def handle_command(session: ChatSession, line: str) -> bool:
    """Run a slash command. Returns False when the loop should stop."""
    command, _, arg = line.partition(" ")
    arg = arg.strip()

    if command in {"/quit", "/exit"}:
        return False
    if command == "/models":
        for name in AVAILABLE_MODELS:
            marker = "*" if name == session.model else " "
            print(f"{marker} {name}")
    elif command == "/model" and arg:
        session.select_model(arg)
        print(f"model: {session.model}")
    elif command == "/system":
        session.system_prompt = arg
        print("system prompt updated")
    elif command == "/history":
        _print_history(session)
    elif command == "/replay" and arg.isdigit():
        entries = session.history
        index = int(arg) - 1
        if 0 <= index < len(entries):
            session.replay(entries[index])
            for item in session.transcript:
                print(f"[{item.kind}] {item.text}")
        else:
            print("no such entry")
    elif command == "/clear":
        session.clear()
        print("history cleared")
    else:
        print(HELP_TEXT)
    return True


async def run_chat(settings: ClientSettings, model: str | None = None) -> None:
    history = HistoryStore.in_directory(
        settings.history_dir, capacity=settings.history_capacity
    )

    async with httpx.AsyncClient(
        base_url=settings.gateway_url, timeout=settings.timeout
    ) as http:
        controller = FallbackController(
            http,
            primary_route=settings.primary_route,
            backup_route=settings.backup_route,
        )
        session = ChatSession(
            controller,
            history,
            model=model or settings.default_model,
            system_prompt=settings.system_prompt,
        )

        print(f"Connected to {settings.gateway_url} using {session.model}. /help for commands.")
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break

            if line.startswith("/"):
                if not handle_command(session, line):
                    break
                continue

            reply = await session.send(line)
            if reply is not None:
                print(reply)


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with the model gateway.")
    parser.add_argument("--model", help="model identifier to start with")
    parser.add_argument("--gateway-url", help="override MODELHUB_GATEWAY_URL")
    args = parser.parse_args()

    settings = get_client_settings()
    if args.gateway_url:
        settings = settings.model_copy(update={"gateway_url": args.gateway_url})

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run_chat(settings, model=args.model))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
