"""
Messages exchanged with the chat-completion service.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from docchat.schemas.documents import RetrievalResult

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatExchange(BaseModel):
    """
    Ordered messages sent as one unit to the completion service.
    Built fresh for every request and never reused.
    """
    messages: list[ChatMessage] = Field(default_factory=list)

    def add(self, role: Role, content: str) -> "ChatExchange":
        self.messages.append(ChatMessage(role=role, content=content))
        return self

    def to_openai(self) -> list[dict]:
        return [m.model_dump() for m in self.messages]


class ChatResult(BaseModel):
    """Pipeline output for one /chat request."""
    answer: str
    retrieval: RetrievalResult
    stage_timings: dict[str, float] = Field(default_factory=dict)

    @property
    def context(self) -> str:
        return self.retrieval.context
