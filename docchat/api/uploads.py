"""
Upload routes: store PDFs and images in the blob container.

Uploaded images can additionally be OCR-ed so the caller gets the
recognized text back with the upload receipt.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from docchat.api.deps import get_ocr_client, get_settings, get_storage
from docchat.core.config import Settings
from docchat.schemas.response import UploadResponse
from docchat.services.ocr import OcrClient
from docchat.services.storage import BlobStorage, StoredBlob, StorageServiceError
from docchat.utils.logging import get_logger

logger = get_logger("docchat.api.uploads")

router = APIRouter(tags=["Uploads"])


async def _store(file: UploadFile | None, storage: BlobStorage, kind: str) -> tuple[StoredBlob, bytes]:
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{kind.capitalize()} file is required",
        )

    data = await file.read()
    logger.info("[UPLOAD] Received %s %s (%d bytes)", kind, file.filename, len(data))
    try:
        stored = await storage.upload(data, file.filename, file.content_type)
    except StorageServiceError as e:
        logger.error("[UPLOAD] Blob upload failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload the {kind} to Azure Blob Storage",
        )
    return stored, data


@router.post("/upload-pdf", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_pdf(
    file: UploadFile | None = File(None),
    storage: BlobStorage = Depends(get_storage),
):
    stored, _ = await _store(file, storage, "PDF")
    return UploadResponse(
        message="PDF uploaded to Azure Blob Storage.",
        blob_url=stored.url,
        file_name=stored.name,
    )


@router.post("/upload-image", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_image(
    file: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    storage: BlobStorage = Depends(get_storage),
    ocr_client: OcrClient = Depends(get_ocr_client),
):
    stored, data = await _store(file, storage, "image")

    ocr_text = None
    if settings.ocr_on_image_upload and ocr_client.configured:
        ocr_text = await ocr_client.extract_text(data)

    return UploadResponse(
        message="Image uploaded to Azure Blob Storage.",
        blob_url=stored.url,
        file_name=stored.name,
        ocr_text=ocr_text,
    )
