"""
External API contract.

Field names on the wire are camelCase to stay compatible with the
existing web frontend; Python code uses the snake_case attributes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from docchat.schemas.chat import ChatMessage


class ChatRequest(BaseModel):
    message: str | None = None
    history: list[ChatMessage] | None = None


class DocumentPreview(BaseModel):
    source: str
    content_preview: str = Field(alias="contentPreview")

    class Config:
        populate_by_name = True


class DebugInfo(BaseModel):
    user_query: str = Field(alias="userQuery")
    all_documents_found_by_search: list[DocumentPreview] = Field(
        default_factory=list, alias="allDocumentsFoundBySearch",
    )
    relevant_documents_used: list[DocumentPreview] = Field(
        default_factory=list, alias="relevantDocumentsUsed",
    )
    context_built: str = Field("", alias="contextBuilt")

    class Config:
        populate_by_name = True


class ChatResponse(BaseModel):
    response: str
    context_length: int = Field(alias="contextLength")
    documents_count: int = Field(alias="documentsCount")
    debug_info: DebugInfo | None = Field(None, alias="debugInfo")

    class Config:
        populate_by_name = True


class UploadResponse(BaseModel):
    message: str
    blob_url: str = Field(alias="blobUrl")
    file_name: str = Field(alias="fileName")
    ocr_text: str | None = Field(None, alias="ocrText")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    error: str
