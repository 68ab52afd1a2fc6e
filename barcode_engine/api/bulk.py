import asyncio
import io
import logging
from typing import List, Optional

import pandas as pd
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from barcode_engine.batch_processor import BatchProcessor
from barcode_engine.config import settings
from barcode_engine.dependencies import get_batch_processor, get_store
from barcode_engine.schemas import (
    BarcodeBatch,
    BarcodeFormatEnum,
    BarcodeGenerationError,
    BarcodeSettings,
    BatchSettings,
    BulkFileMetadata,
    BulkUploadResponse,
)
from barcode_engine.store import BarcodeStore
from barcode_engine.templates import settings_from_template

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bulk", tags=["Bulk Operations"])

ALLOWED_CONTENT_TYPES = [
    "text/plain",
    "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
]
CONTENT_COLUMNS = ("data", "content")


def _check_batch_size(count: int) -> None:
    if count > settings.BATCH_MAX_ITEMS:
        raise HTTPException(
            status_code=413,
            detail=f"Too many items. Maximum {settings.BATCH_MAX_ITEMS} items per batch.",
        )


def read_contents(content_type: str, file_content: bytes) -> List[str]:
    """
    Extract content items from an uploaded file.

    Plain text contributes one item per non-blank line. CSV and Excel files
    must carry a ``data`` or ``content`` column; blank cells are skipped.
    """
    if content_type == "text/plain":
        lines = file_content.decode("utf-8").splitlines()
        return [line.strip() for line in lines if line.strip()]

    if content_type == "text/csv":
        df = pd.read_csv(io.BytesIO(file_content), dtype=str)
    else:
        df = pd.read_excel(io.BytesIO(file_content), dtype=str)

    column = next((c for c in CONTENT_COLUMNS if c in df.columns), None)
    if column is None:
        raise ValueError("Missing 'data' or 'content' column in the file.")

    items = []
    for value in df[column]:
        if pd.isna(value) or str(value).strip() == "":
            continue
        items.append(str(value).strip())
    return items


@router.post("/generate", response_model=BarcodeBatch)
async def bulk_generate(
    batch_settings: BatchSettings,
    batch_processor: BatchProcessor = Depends(get_batch_processor),
    store: BarcodeStore = Depends(get_store),
) -> BarcodeBatch:
    _check_batch_size(len(batch_settings.content_list))
    batch = await asyncio.to_thread(batch_processor.run, batch_settings)
    store.extend(batch.results)
    return batch


@router.post("/generate_upload", response_model=BulkUploadResponse)
async def bulk_generate_upload(
    files: List[UploadFile] = File(...),
    format: BarcodeFormatEnum = Form(BarcodeFormatEnum.CODE128),
    template_id: Optional[str] = Form(None),
    naming_pattern: str = Form(""),
    batch_processor: BatchProcessor = Depends(get_batch_processor),
    store: BarcodeStore = Depends(get_store),
) -> BulkUploadResponse:
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded.")
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise HTTPException(
            status_code=413,
            detail=f"Too many files. Maximum {settings.MAX_UPLOAD_FILES} files allowed.",
        )

    if template_id:
        try:
            base_settings = settings_from_template(template_id, "")
        except BarcodeGenerationError as e:
            raise HTTPException(status_code=404, detail=e.message)
    else:
        base_settings = BarcodeSettings(content="", format=format)

    files_metadata_list: List[BulkFileMetadata] = []
    content_list: List[str] = []

    for file in files:
        metadata = BulkFileMetadata(
            filename=file.filename or "unknown",
            content_type=file.content_type or "unknown",
            item_count=0,
            status="Pending",
            message="",
        )

        if file.content_type not in ALLOWED_CONTENT_TYPES:
            metadata.status = "Failed"
            metadata.message = f"Invalid file type. Allowed types: {', '.join(ALLOWED_CONTENT_TYPES)}"
            files_metadata_list.append(metadata)
            continue

        try:
            items = read_contents(file.content_type, await file.read())
        except Exception as e:
            logger.warning(f"Could not read {file.filename}: {str(e)}")
            metadata.status = "Failed"
            metadata.message = str(e)
            files_metadata_list.append(metadata)
            continue

        metadata.item_count = len(items)
        metadata.status = "Uploaded"
        metadata.message = f"{len(items)} items queued for generation."
        files_metadata_list.append(metadata)
        content_list.extend(items)
        logger.info(f"Read {len(items)} items from {file.filename}")

    if not content_list:
        return BulkUploadResponse(files_processed=files_metadata_list)

    _check_batch_size(len(content_list))
    batch_settings = BatchSettings(
        content_list=content_list,
        base_settings=base_settings,
        naming_pattern=naming_pattern,
    )
    batch = await asyncio.to_thread(batch_processor.run, batch_settings)
    store.extend(batch.results)
    return BulkUploadResponse(files_processed=files_metadata_list, batch=batch)
