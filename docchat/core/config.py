from __future__ import annotations

import sys
from typing import Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from docchat.utils.logging import get_logger

logger = get_logger("docchat.core.config")

# Croatian stopwords used by the original deployment
DEFAULT_STOPWORDS: list[str] = [
    "i", "u", "na", "za", "je", "su", "se", "to", "od", "da", "ne", "a",
    "koji", "što", "kao", "ali", "ili", "pa", "ako", "te", "će",
]


class Settings(BaseSettings):
    app_name: str = "docchat"
    environment: str = "development"
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # ── Azure Cognitive Search (required) ───────────────────────────
    azure_search_endpoint: str
    azure_search_index: str
    azure_search_api_key: str
    azure_search_api_version: str = "2021-04-30-Preview"

    # ── Azure Blob Storage (required) ───────────────────────────────
    azure_storage_account_name: str
    azure_storage_account_key: str
    azure_storage_container_name: str

    # ── Azure OpenAI (required) ─────────────────────────────────────
    azure_openai_endpoint: str
    azure_openai_api_key: str
    azure_openai_deployment_name: str
    azure_openai_api_version: str = "2024-02-01"

    # ── Azure Computer Vision OCR (optional) ────────────────────────
    azure_cv_endpoint: str | None = None
    azure_cv_key: str | None = None
    ocr_on_image_upload: bool = True

    # ── Transport ───────────────────────────────────────────────────
    http_timeout_seconds: float = 60.0

    # ── Retrieval tuning ────────────────────────────────────────────
    search_top: int = 7
    search_select: list[str] = [
        "content", "ocrText", "extractedContent", "metadata_storage_name", "id",
    ]
    search_content_fields: list[str] = ["content", "ocrText", "extractedContent"]
    search_source_field: str = "metadata_storage_name"
    fallback_source_label: str = "Unknown source"
    max_query_length: int = 1000
    min_term_length: int = 3
    stopwords: list[str] = DEFAULT_STOPWORDS
    filter_granularity: Literal["document", "line"] = "document"
    context_max_length: int = 15000

    # ── Answer generation ───────────────────────────────────────────
    temperature: float = 0.7
    max_tokens: int = 1000
    response_language: str = "Croatian"
    max_history_messages: int = 6

    # Echo fetched/filtered document previews in /chat responses
    debug_info: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"
        frozen = True

    @property
    def ocr_configured(self) -> bool:
        return bool(self.azure_cv_endpoint and self.azure_cv_key)


def load_settings(**overrides) -> Settings:
    """
    Build the settings object once at startup.

    Exits the process with status 1 when required values are missing,
    so a misconfigured deployment never starts serving requests.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = [
            ".".join(str(p) for p in err["loc"]).upper()
            for err in exc.errors()
            if err["type"] == "missing"
        ]
        if missing:
            logger.error("Missing required environment variables: %s", ", ".join(missing))
            logger.error("Please set them in the environment or in your .env file.")
        else:
            logger.error("Invalid configuration: %s", exc)
        sys.exit(1)
