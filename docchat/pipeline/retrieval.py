"""
Pipeline stage 1: Retrieval.

1. Search the index for the top-N hits
2. Map raw hits into Documents
3. Substring relevance filter
4. Bounded context assembly

Search failures degrade to zero hits; they never reach the caller.
"""

from __future__ import annotations

from typing import Any, Sequence

from docchat.core.config import Settings
from docchat.schemas.documents import Document, RetrievalResult
from docchat.services.search import SearchClient, SearchServiceError
from docchat.pipeline.relevance import filter_documents
from docchat.pipeline.context_builder import build_context
from docchat.utils.logging import get_logger
from docchat.utils.text import preview, significant_terms

logger = get_logger("docchat.pipeline.retrieval")


def document_from_hit(
    hit: dict[str, Any],
    content_fields: Sequence[str],
    source_field: str,
    fallback_source: str,
) -> Document:
    """Join the hit's non-empty text fields; pick its storage name as source."""
    parts = [str(hit[f]) for f in content_fields if hit.get(f)]
    source = hit.get(source_field) or fallback_source
    return Document(content=" ".join(parts), source=str(source))


async def fetch_documents(
    query: str,
    search_client: SearchClient,
    settings: Settings,
) -> list[Document]:
    """Search and map hits. Any search failure yields an empty list."""
    try:
        hits = await search_client.search(
            query,
            top=settings.search_top,
            select=settings.search_select,
        )
    except SearchServiceError as e:
        logger.error("[RETRIEVAL] Search failed, continuing with no documents: %s", e)
        return []

    documents = [
        document_from_hit(
            hit,
            settings.search_content_fields,
            settings.search_source_field,
            settings.fallback_source_label,
        )
        for hit in hits
    ]
    for hit, doc in zip(hits, documents):
        logger.info(
            "[RETRIEVAL] Hit id=%s source=%s preview=%r",
            hit.get("id", "N/A"), doc.source, preview(doc.content),
        )
    return documents


async def retrieve(
    query: str,
    search_client: SearchClient,
    settings: Settings,
) -> RetrievalResult:
    query = query.strip()[: settings.max_query_length]

    logger.info("[RETRIEVAL] Searching for: %s", query[:80])
    all_documents = await fetch_documents(query, search_client, settings)
    logger.info("[RETRIEVAL] Search returned %d documents", len(all_documents))

    terms = significant_terms(query, settings.stopwords, settings.min_term_length)
    logger.info("[RETRIEVAL] Query terms for filtering: %s", terms)

    relevant = filter_documents(terms, all_documents, settings.filter_granularity)
    context = build_context(relevant, max_length=settings.context_max_length)

    logger.info(
        "[RETRIEVAL] %d relevant documents, context %d chars",
        len(relevant), len(context),
    )
    return RetrievalResult(
        query=query,
        terms=terms,
        all_documents=all_documents,
        relevant_documents=relevant,
        context=context,
    )
