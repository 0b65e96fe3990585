"""
Substring relevance filtering of search hits.

A document (or line) is relevant when its lowercased text contains at
least one significant query term as a substring. Partial-word matches
count, so "pravil" would match "pravilnik". There is no notion of
relevance strength and no re-ranking: output order is input order.
"""

from __future__ import annotations

from typing import Sequence

from docchat.schemas.documents import Document
from docchat.utils.logging import get_logger

logger = get_logger("docchat.pipeline.relevance")

GRANULARITY_DOCUMENT = "document"
GRANULARITY_LINE = "line"


def _matches(text: str, terms: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in terms)


def filter_relevant_documents(
    terms: Sequence[str],
    documents: Sequence[Document],
) -> list[Document]:
    """Keep documents whose content contains any term. No terms keeps all."""
    if not terms:
        logger.info("No significant query terms; keeping all %d documents", len(documents))
        return list(documents)

    filtered = [doc for doc in documents if _matches(doc.content, terms)]
    logger.info("Filtered documents: %d out of %d", len(filtered), len(documents))
    return filtered


def filter_relevant_lines(terms: Sequence[str], text: str) -> list[str]:
    """Keep the lines of ``text`` that contain any term. No terms keeps all."""
    lines = (text or "").splitlines()
    if not terms:
        return lines
    return [line for line in lines if _matches(line, terms)]


def filter_documents(
    terms: Sequence[str],
    documents: Sequence[Document],
    granularity: str = GRANULARITY_DOCUMENT,
) -> list[Document]:
    """
    Apply the relevance filter at the configured granularity.

    ``document`` keeps or drops whole documents. ``line`` narrows every
    document to its matching lines and drops documents left empty.
    """
    if granularity == GRANULARITY_DOCUMENT:
        return filter_relevant_documents(terms, documents)
    if granularity != GRANULARITY_LINE:
        raise ValueError(f"Unknown filter granularity: {granularity!r}")

    if not terms:
        return list(documents)

    narrowed: list[Document] = []
    for doc in documents:
        lines = filter_relevant_lines(terms, doc.content)
        if lines:
            narrowed.append(Document(content="\n".join(lines), source=doc.source))
    logger.info("Line filter kept %d out of %d documents", len(narrowed), len(documents))
    return narrowed
