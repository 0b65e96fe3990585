"""
Azure Computer Vision OCR client (v3.2 ``/ocr``).

Returns the recognized text rebuilt from the region → line → word
structure: words joined by spaces, one output line per OCR line.
OCR is best-effort; every failure yields "".
"""

from __future__ import annotations

from typing import Any

import httpx

from docchat.core.config import Settings
from docchat.services.http import error_message
from docchat.utils.logging import get_logger

logger = get_logger("docchat.services.ocr")


def text_from_ocr_result(result: dict[str, Any]) -> str:
    lines: list[str] = []
    for region in result.get("regions") or []:
        for line in region.get("lines") or []:
            words = [w.get("text", "") for w in line.get("words") or []]
            lines.append(" ".join(w for w in words if w))
    return "\n".join(lines).strip()


class OcrClient:
    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.endpoint = (settings.azure_cv_endpoint or "").rstrip("/")
        self.key = settings.azure_cv_key
        self._http = http_client

    @property
    def configured(self) -> bool:
        return bool(self.endpoint and self.key)

    async def extract_text(self, image: bytes) -> str:
        if not self.configured:
            logger.warning("[OCR] Computer Vision is not configured; skipping OCR")
            return ""

        try:
            response = await self._http.post(
                f"{self.endpoint}/vision/v3.2/ocr",
                params={"language": "unk", "detectOrientation": "true"},
                content=image,
                headers={
                    "Ocp-Apim-Subscription-Key": self.key,
                    "Content-Type": "application/octet-stream",
                },
            )
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("[OCR] Request failed: %s", error_message(e))
            return ""

        if not isinstance(result, dict):
            logger.error("[OCR] Unexpected response shape: %s", type(result).__name__)
            return ""

        text = text_from_ocr_result(result)
        logger.info("[OCR] Extracted %d chars", len(text))
        return text
