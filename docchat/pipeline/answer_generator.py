"""
Pipeline stage 2: Answer generation.

Sends the system prompt, optional prior turns, and the context plus
question to the chat-completion service. Completion errors are mapped
to fixed user-facing messages; nothing is retried.
"""

from __future__ import annotations

from typing import Any, Sequence

import openai

from docchat.core.config import Settings
from docchat.pipeline.context_builder import NO_USABLE_CONTENT
from docchat.prompts.answer_generator import build_answer_prompt, build_system_prompt
from docchat.schemas.chat import ChatExchange, ChatMessage
from docchat.services.llm import CONTEXT_LENGTH_EXCEEDED, count_tokens
from docchat.utils.logging import get_logger

logger = get_logger("docchat.pipeline.answer_generator")

CANNOT_ANSWER = (
    "Based on the available documents, I cannot find an answer to that question."
)
CONTEXT_TOO_LONG = (
    "Unfortunately too much content was found to fit into the AI model. "
    "Please ask a more specific question."
)
GENERATION_FAILED = "An error occurred while generating the answer with AI."


def has_usable_context(context: str | None) -> bool:
    return bool(context and context.strip()) and context != NO_USABLE_CONTENT


def build_exchange(
    question: str,
    context: str,
    settings: Settings,
    history: Sequence[ChatMessage] | None = None,
) -> ChatExchange:
    exchange = ChatExchange()
    exchange.add("system", build_system_prompt(settings.response_language))

    if history and settings.max_history_messages > 0:
        for msg in list(history)[-settings.max_history_messages:]:
            if msg.role in ("user", "assistant") and msg.content.strip():
                exchange.add(msg.role, msg.content)

    exchange.add("user", build_answer_prompt(context, question))
    return exchange


def _first_choice_text(response: Any) -> str:
    if not response.choices:
        return ""
    return (response.choices[0].message.content or "").strip()


async def generate_answer(
    question: str,
    context: str,
    chat_client: Any,
    settings: Settings,
    history: Sequence[ChatMessage] | None = None,
) -> str:
    if not has_usable_context(context):
        logger.info("[ANSWER] No usable context; skipping completion call")
        return CANNOT_ANSWER

    exchange = build_exchange(question, context, settings, history)
    user_prompt = exchange.messages[-1].content
    logger.info(
        "[ANSWER] Sending %d messages (%d tokens); prompt preview: %s",
        len(exchange.messages),
        count_tokens("".join(m.content for m in exchange.messages)),
        user_prompt[:500].replace("\n", " "),
    )

    try:
        response = await chat_client.chat.completions.create(
            model=settings.azure_openai_deployment_name,
            messages=exchange.to_openai(),
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
    except openai.APIError as e:
        logger.error("[ANSWER] Azure OpenAI call failed: %s", e)
        if getattr(e, "code", None) == CONTEXT_LENGTH_EXCEEDED:
            return CONTEXT_TOO_LONG
        return GENERATION_FAILED

    answer = _first_choice_text(response)
    if not answer:
        logger.warning("[ANSWER] Completion returned no content")
        return GENERATION_FAILED

    logger.info("[ANSWER] Answer generated: %d chars", len(answer))
    return answer
