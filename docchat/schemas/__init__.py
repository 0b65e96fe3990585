"""
Pydantic schemas for every pipeline boundary.
"""

from docchat.schemas.documents import Document, RetrievalResult
from docchat.schemas.chat import ChatMessage, ChatExchange, ChatResult
from docchat.schemas.response import (
    ChatRequest,
    ChatResponse,
    DebugInfo,
    DocumentPreview,
    UploadResponse,
    ErrorResponse,
)

__all__ = [
    # Retrieval
    "Document",
    "RetrievalResult",
    # Chat
    "ChatMessage",
    "ChatExchange",
    "ChatResult",
    # API
    "ChatRequest",
    "ChatResponse",
    "DebugInfo",
    "DocumentPreview",
    "UploadResponse",
    "ErrorResponse",
]
