"""
Shared outbound HTTP transport for the Azure collaborators.

One ``httpx.AsyncClient`` is created by the app factory and shared by the
search, OCR and OpenAI clients. TLS is pinned to 1.2–1.3 with certificate
verification on; there is no request deadline beyond the client timeout.
"""

from __future__ import annotations

import ssl

import httpx

from docchat.core.config import Settings


class ServiceError(Exception):
    """Base class for failures of an external collaborator."""


def build_ssl_context() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.maximum_version = ssl.TLSVersion.TLSv1_3
    return ctx


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        verify=build_ssl_context(),
        timeout=settings.http_timeout_seconds,
    )


def error_message(exc: Exception) -> str:
    """
    Best human-readable message for a failed call: the Azure
    ``{"error": {"message": ...}}`` body when there is one, else str(exc).
    """
    response = getattr(exc, "response", None)
    if isinstance(response, httpx.Response):
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
            if message:
                return str(message)
        return f"HTTP {response.status_code}"
    return str(exc) or exc.__class__.__name__
