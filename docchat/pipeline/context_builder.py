"""
Bounded context assembly.

Concatenates filtered documents into one string for the completion
prompt. Documents are taken in order until the next segment would
overflow the character budget; then a truncation marker is appended
and the rest are dropped.
"""

from __future__ import annotations

from typing import Sequence

from docchat.schemas.documents import Document
from docchat.utils.logging import get_logger
from docchat.utils.text import normalize_whitespace

logger = get_logger("docchat.pipeline.context_builder")

TRUNCATION_MARKER = "... [content truncated due to length limit]"
NO_USABLE_CONTENT = (
    "Documents were found, but no meaningful answer could be extracted from them."
)
SEGMENT_TEMPLATE = 'Document "{source}": {content} --- '


def format_segment(document: Document) -> str:
    """Render one document; returns "" when its content is blank."""
    content = normalize_whitespace(document.content)
    if not content:
        return ""
    return SEGMENT_TEMPLATE.format(
        source=normalize_whitespace(document.source),
        content=content,
    )


def build_context(
    documents: Sequence[Document],
    max_length: int = 15000,
    truncation_marker: str = TRUNCATION_MARKER,
    no_usable_content: str = NO_USABLE_CONTENT,
) -> str:
    """
    Build the context string from ``documents``.

    Returns "" for no documents and ``no_usable_content`` when documents
    exist but every one of them is blank. The result never exceeds
    ``max_length + len(truncation_marker)``.
    """
    if not documents:
        return ""

    context = ""
    for doc in documents:
        segment = format_segment(doc)
        if not segment:
            continue
        if len(context) + len(segment) > max_length:
            context += truncation_marker
            logger.info("Context truncated at %d chars (budget %d)", len(context), max_length)
            break
        context += segment

    if not context.strip():
        return no_usable_content
    return context.strip()
