"""
Conversation state of an interactive session.

Holds the prior turns (sent with every follow-up question) and every
fragment retrieved during the session. Lives in memory only.
"""

from dataclasses import dataclass, field
from typing import Iterable

from providers.chat import ASSISTANT, USER, ChatMessage


@dataclass
class ConversationContext:
    history: list[ChatMessage] = field(default_factory=list)
    retrieved_chunks: list[str] = field(default_factory=list)

    def add_user_message(self, message: str) -> None:
        self.history.append(ChatMessage(role=USER, content=message))

    def add_assistant_message(self, message: str) -> None:
        self.history.append(ChatMessage(role=ASSISTANT, content=message))

    def add_retrieved_chunks(self, chunks: Iterable[str]) -> None:
        self.retrieved_chunks.extend(chunks)

    def clear(self) -> None:
        self.history.clear()
        self.retrieved_chunks.clear()

    @property
    def turns(self) -> int:
        return sum(1 for m in self.history if m.role == USER)
