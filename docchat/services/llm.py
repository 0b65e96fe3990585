"""
Azure OpenAI chat-completion client and prompt token counting.

The client is created once by the app factory and shared across
requests. Retries are disabled: a failed completion is reported to
the user instead of being re-sent.
"""

from __future__ import annotations

import threading
from typing import Any

import httpx
import tiktoken
from openai import AsyncAzureOpenAI

from docchat.core.config import Settings
from docchat.utils.logging import get_logger

logger = get_logger("docchat.services.llm")

CONTEXT_LENGTH_EXCEEDED = "context_length_exceeded"
ENCODING_NAME = "cl100k_base"


def create_chat_client(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncAzureOpenAI:
    client = AsyncAzureOpenAI(
        azure_endpoint=settings.azure_openai_endpoint,
        api_key=settings.azure_openai_api_key,
        api_version=settings.azure_openai_api_version,
        max_retries=0,
        http_client=http_client,
    )
    logger.info(
        "Azure OpenAI client initialized (deployment=%s)",
        settings.azure_openai_deployment_name,
    )
    return client


# ── Token counting ──────────────────────────────────────────────────
_encoder_lock = threading.Lock()
_encoder: Any | None = None


def _get_encoder() -> Any:
    """Load the ``cl100k_base`` encoding once per process."""
    global _encoder
    if _encoder is not None:
        return _encoder

    with _encoder_lock:
        if _encoder is None:
            _encoder = tiktoken.get_encoding(ENCODING_NAME)
        return _encoder


def count_tokens(text: str) -> int:
    return len(_get_encoder().encode(text))
