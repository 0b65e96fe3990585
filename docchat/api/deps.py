"""
FastAPI dependencies resolving the shared collaborators from app state.

The app factory stores one instance of each client on ``app.state``;
routes never construct clients themselves.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from docchat.core.config import Settings
from docchat.services.ocr import OcrClient
from docchat.services.search import SearchClient
from docchat.services.storage import BlobStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_search_client(request: Request) -> SearchClient:
    return request.app.state.search_client


def get_chat_client(request: Request) -> Any:
    return request.app.state.chat_client


def get_storage(request: Request) -> BlobStorage:
    return request.app.state.storage


def get_ocr_client(request: Request) -> OcrClient:
    return request.app.state.ocr_client
