from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator

NO_RESPONSE = "No response generated."


async def drain_text(
    fragments: AsyncIterable[str | None],
    placeholder: str = NO_RESPONSE,
) -> str:
    """Consume a finite fragment stream to the end and join it in arrival order.

    Empty and ``None`` fragments are skipped. If nothing was collected the
    placeholder is returned instead of an empty string.
    """
    parts: list[str] = []
    async for fragment in fragments:
        if fragment:
            parts.append(fragment)
    return "".join(parts) or placeholder


async def delta_fragments(stream: AsyncIterable[Any]) -> AsyncIterator[str | None]:
    """Yield the incremental text of each chat-completion chunk."""
    async for chunk in stream:
        choices = getattr(chunk, "choices", None)
        if not choices:
            continue
        delta = getattr(choices[0], "delta", None)
        yield getattr(delta, "content", None)
