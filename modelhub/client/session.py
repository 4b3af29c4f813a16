from __future__ import annotations

import logging

from modelhub.client.fallback import BothRoutesFailedError, FallbackController
from modelhub.client.history import HistoryStore
from modelhub.models.history import HistoryEntry, TranscriptEntry

logger = logging.getLogger(__name__)

BOTH_ROUTES_FAILED = (
    "An error occurred, Both Primary & Backup Models failed, Please try again later..."
)

AVAILABLE_MODELS = (
    "Llama-3.3-70b-versatile",
    "Llama-3.1-8b-instant",
    "Mixtral-8x7b-32768",
    "Llama3-70b-8192",
    "Llama3-8b-8192",
    "Qwen2.5-Coder-32B-Instruct",
    "gpt-4o-mini",
    "gpt-4o",
    "gemma2-9b-it",
    "gemini-1.5-flash",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro",
)

HISTORY_WINDOW = 1


class ChatSession:
    """
    Client-side conversation state.

    Holds the visible transcript, the selected model and system prompt, and
    composes each request as system prompt + history window + new user turn.
    """

    def __init__(
        self,
        controller: FallbackController,
        history: HistoryStore,
        model: str = "Llama-3.1-8b-instant",
        system_prompt: str = "",
    ):
        self._controller = controller
        self._history = history
        self.model = model
        self.system_prompt = system_prompt
        self._transcript: list[TranscriptEntry] = []

    @property
    def transcript(self) -> list[TranscriptEntry]:
        return list(self._transcript)

    @property
    def history(self) -> list[HistoryEntry]:
        return self._history.entries

    def select_model(self, model: str) -> None:
        if model not in AVAILABLE_MODELS:
            logger.warning("Model %s is not in the known model list", model)
        self.model = model

    def build_messages(self, user_input: str) -> list[dict[str, str]]:
        window: list[dict[str, str]] = []
        for entry in self._history.recent(HISTORY_WINDOW):
            window.append({"role": "user", "content": entry.query})
            window.append({"role": "assistant", "content": entry.response})

        return [
            {"role": "system", "content": self.system_prompt},
            *window,
            {"role": "user", "content": user_input},
        ]

    async def send(self, user_input: str) -> str | None:
        """Send one user turn; returns the text shown for the bot, or None if skipped."""
        if not user_input.strip():
            return None

        self._transcript.append(TranscriptEntry(kind="user", text=user_input))
        payload = {"messages": self.build_messages(user_input), "model": self.model}

        try:
            reply = await self._controller.fetch_reply(payload)
        except BothRoutesFailedError:
            logger.error("Error fetching response for model=%s", self.model)
            self._transcript.append(TranscriptEntry(kind="bot", text=BOTH_ROUTES_FAILED))
            return BOTH_ROUTES_FAILED

        self._transcript.append(TranscriptEntry(kind="bot", text=reply))
        self._history.append(user_input, reply)
        return reply

    def replay(self, entry: HistoryEntry) -> None:
        """Show a stored exchange without sending anything."""
        self._transcript = [
            TranscriptEntry(kind="user", text=entry.query),
            TranscriptEntry(kind="bot", text=entry.response),
        ]

    def clear(self) -> None:
        self._history.clear()
        self._transcript = []
