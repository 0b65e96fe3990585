"""
Thin API route for /chat.

Validates the message, calls run_chat_pipeline() and shapes the
response. All retrieval and generation logic lives in the pipeline.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from docchat.api.deps import get_chat_client, get_search_client, get_settings
from docchat.core.config import Settings
from docchat.pipeline.orchestrator import run_chat_pipeline
from docchat.schemas.chat import ChatResult
from docchat.schemas.response import (
    ChatRequest,
    ChatResponse,
    DebugInfo,
    DocumentPreview,
)
from docchat.services.search import SearchClient
from docchat.utils.logging import get_logger
from docchat.utils.text import preview

logger = get_logger("docchat.api.chat")

router = APIRouter(tags=["Chat"])


def build_debug_info(result: ChatResult) -> DebugInfo:
    retrieval = result.retrieval
    return DebugInfo(
        user_query=retrieval.query,
        all_documents_found_by_search=[
            DocumentPreview(source=d.source, content_preview=preview(d.content))
            for d in retrieval.all_documents
        ],
        relevant_documents_used=[
            DocumentPreview(source=d.source, content_preview=preview(d.content))
            for d in retrieval.relevant_documents
        ],
        context_built=preview(retrieval.context, 500),
    )


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request: ChatRequest,
    settings: Settings = Depends(get_settings),
    search_client: SearchClient = Depends(get_search_client),
    chat_client: Any = Depends(get_chat_client),
):
    """Answer a question from the documents in the search index."""
    question = (request.message or "").strip()
    if not question:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required")

    logger.info("[CHAT] New question: %s", question[:80])

    try:
        result = await run_chat_pipeline(
            question,
            settings,
            search_client=search_client,
            chat_client=chat_client,
            history=request.history,
        )
    except Exception as e:
        logger.error("[CHAT] Error: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A server error occurred",
        )

    return ChatResponse(
        response=result.answer,
        context_length=len(result.context),
        documents_count=len(result.retrieval.relevant_documents),
        debug_info=build_debug_info(result) if settings.debug_info else None,
    )
