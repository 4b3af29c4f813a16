from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, TypeAdapter


class HistoryEntry(BaseModel):
    query: str
    response: str


class TranscriptEntry(BaseModel):
    kind: Literal["user", "bot"]
    text: str


HistoryList = TypeAdapter(list[HistoryEntry])
