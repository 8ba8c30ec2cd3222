from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class ChatMessage:
    role: str
    content: str
    sources: list[dict[str, Any]] | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Conversation:
    def __init__(self) -> None:
        self.messages: list[ChatMessage] = []

    def add(self, role: str, content: str, sources: list[dict[str, Any]] | None = None) -> ChatMessage:
        message = ChatMessage(role=role, content=content, sources=sources)
        self.messages.append(message)
        return message

    def history(self) -> list[dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in self.messages]

    def clear(self) -> None:
        self.messages = []

    def __len__(self) -> int:
        return len(self.messages)
