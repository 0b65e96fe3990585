"""
Chat pipeline entry point.

Runs retrieval and answer generation strictly in sequence; the
completion call never starts before the search call has finished.
The question is capped at ``max_query_length`` before either stage
sees it.
"""

from __future__ import annotations

from typing import Any, Sequence

from docchat.core.config import Settings
from docchat.pipeline.answer_generator import generate_answer
from docchat.pipeline.retrieval import retrieve
from docchat.schemas.chat import ChatMessage, ChatResult
from docchat.services.search import SearchClient
from docchat.utils.logging import get_logger
from docchat.utils.timing import Timer

logger = get_logger("docchat.pipeline.orchestrator")


async def run_chat_pipeline(
    question: str,
    settings: Settings,
    *,
    search_client: SearchClient,
    chat_client: Any,
    history: Sequence[ChatMessage] | None = None,
) -> ChatResult:
    # Search and the completion prompt both see the same capped query.
    question = question.strip()[: settings.max_query_length]
    logger.info("[PIPELINE] Started | question: %s", question[:80])

    async with Timer("retrieval") as t1:
        retrieval = await retrieve(question, search_client, settings)

    async with Timer("answer_generation") as t2:
        answer = await generate_answer(
            question, retrieval.context, chat_client, settings, history=history,
        )

    logger.info(
        "[PIPELINE] Done | retrieval=%.2fs generation=%.2fs documents=%d",
        t1.elapsed_s, t2.elapsed_s, len(retrieval.relevant_documents),
    )
    return ChatResult(
        answer=answer,
        retrieval=retrieval,
        stage_timings={"retrieval": t1.elapsed_s, "answer_generation": t2.elapsed_s},
    )
