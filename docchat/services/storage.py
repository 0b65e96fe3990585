"""
Azure Blob Storage uploads.

The Blob SDK client is synchronous, so uploads run in the default
thread-pool executor to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import PurePath

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobServiceClient, ContentSettings

from docchat.core.config import Settings
from docchat.services.http import ServiceError
from docchat.utils.logging import get_logger

logger = get_logger("docchat.services.storage")


class StorageServiceError(ServiceError):
    """Upload to the blob container failed."""


@dataclass(frozen=True)
class StoredBlob:
    name: str
    url: str


def blob_name_for(filename: str, now_ms: int | None = None) -> str:
    """``<epoch-millis>-<basename>`` so repeated uploads never collide."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{PurePath(filename).name}"


def connection_string(settings: Settings) -> str:
    return (
        "DefaultEndpointsProtocol=https;"
        f"AccountName={settings.azure_storage_account_name};"
        f"AccountKey={settings.azure_storage_account_key};"
        "EndpointSuffix=core.windows.net"
    )


class BlobStorage:
    def __init__(self, settings: Settings):
        self._service = BlobServiceClient.from_connection_string(connection_string(settings))
        self._container = self._service.get_container_client(settings.azure_storage_container_name)

    async def upload(self, data: bytes, filename: str, content_type: str | None) -> StoredBlob:
        name = blob_name_for(filename)

        def _sync_upload() -> StoredBlob:
            blob = self._container.get_blob_client(name)
            blob.upload_blob(
                data,
                length=len(data),
                content_settings=ContentSettings(content_type=content_type),
            )
            return StoredBlob(name=name, url=blob.url)

        loop = asyncio.get_running_loop()
        try:
            stored = await loop.run_in_executor(None, _sync_upload)
        except AzureError as e:
            raise StorageServiceError(f"Upload of {name} failed: {e}") from e

        logger.info("[UPLOAD] Stored %s (%d bytes)", stored.name, len(data))
        return stored

    def close(self) -> None:
        self._service.close()
