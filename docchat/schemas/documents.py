"""
Schemas for the retrieval stage.

Document is the uniform shape every search hit is mapped into;
RetrievalResult carries the filtered documents and the built
context into answer generation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Document(BaseModel):
    """Text of one search hit plus a human-readable origin label."""
    content: str
    source: str

    class Config:
        frozen = True


class RetrievalResult(BaseModel):
    """Complete output of the retrieval stage for one question."""
    query: str
    terms: list[str] = Field(default_factory=list)
    all_documents: list[Document] = Field(default_factory=list)
    relevant_documents: list[Document] = Field(default_factory=list)
    context: str = ""
