"""Upload proxy operation

Validates one uploaded file, derives its storage key and forwards the bytes
to object storage. Shared by POST /upload and the submission orchestrator.
Holds no state between calls and never retries.
"""

import logging
import time
from io import BytesIO
from typing import Optional

from ..domain.documents import (
    build_storage_path,
    parse_category,
    validate_file_size,
    validate_filename,
)
from ..domain.documents.ports.object_storage_port import ObjectStoragePort, StorageError
from ..domain.submissions.errors import ValidationError
from ..observability.metrics import upload_size_bytes, uploads_total

logger = logging.getLogger(__name__)


def current_timestamp_ms() -> int:
    """Current UTC time in epoch milliseconds"""
    return int(time.time() * 1000)


async def upload_document(
    storage: ObjectStoragePort,
    *,
    content: Optional[bytes],
    content_type: Optional[str],
    filename: Optional[str],
    folder: Optional[str],
    company_name: Optional[str],
    max_size_bytes: int,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Store one file under its category folder

    Args:
        storage: Object storage adapter
        content: File bytes
        content_type: MIME type reported by the client
        filename: Original filename reported by the client
        folder: Document category key
        company_name: Company name from the form
        max_size_bytes: Per-file size limit
        timestamp_ms: Key timestamp (default: now)

    Returns:
        str: Storage path, '{folder}/{company}_{base}_{timestamp}.{ext}'

    Raises:
        ValidationError: If a field is missing or invalid
        StorageError: If the backend rejects the write
    """
    if content is None or not filename or not folder or not company_name or not company_name.strip():
        raise ValidationError("Missing required fields")

    category = parse_category(folder)
    if category is None:
        raise ValidationError(f"Unknown document category: {folder}")

    is_valid, error_msg = validate_filename(filename)
    if not is_valid:
        raise ValidationError(error_msg or "Invalid filename")

    is_valid, error_msg = validate_file_size(len(content), max_size_bytes)
    if not is_valid:
        raise ValidationError(error_msg or "File size validation failed")

    if timestamp_ms is None:
        timestamp_ms = current_timestamp_ms()
    storage_key = build_storage_path(category.value, company_name, filename, timestamp_ms)

    try:
        stored = await storage.store_file(
            file=BytesIO(content),
            storage_key=storage_key,
            mime_type=content_type,
        )
    except StorageError:
        uploads_total.labels(category=category.value, status="error").inc()
        raise

    uploads_total.labels(category=category.value, status="success").inc()
    upload_size_bytes.labels(category=category.value).observe(stored.size_bytes)
    logger.info(
        f"Stored document: storage_key={stored.storage_key}, size={stored.size_bytes}",
        extra={"category": category.value, "storage_key": stored.storage_key},
    )
    return stored.storage_key
