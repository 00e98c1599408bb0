"""Upload API endpoint

Provides POST /upload: forwards one file to object storage under its
document category folder and returns the stored path.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..dependencies import get_storage
from ..domain.documents.ports.object_storage_port import ObjectStoragePort, StorageError
from ..domain.submissions.errors import ValidationError
from .schemas import UploadErrorResponse, UploadResponse
from .service import upload_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Uploads"])


@router.post(
    "",
    response_model=UploadResponse,
    responses={
        400: {"model": UploadErrorResponse, "description": "Missing or invalid fields"},
        500: {"model": UploadErrorResponse, "description": "Storage backend failure"},
    },
)
async def upload_file(
    storage: Annotated[ObjectStoragePort, Depends(get_storage)],
    file: Annotated[Optional[UploadFile], File()] = None,
    folder: Annotated[Optional[str], Form()] = None,
    company_name: Annotated[Optional[str], Form(alias="companyName")] = None,
):
    """Upload one document

    Accepts multipart/form-data with fields:
    - file: the document
    - folder: document category key (e.g. commercialInvoice)
    - companyName: company the document belongs to

    Example:
        curl -X POST http://localhost:8000/api/v1/upload \\
             -F "file=@Invoice #1.pdf" \\
             -F "folder=commercialInvoice" \\
             -F "companyName=Acme Co."
    """
    content = await file.read() if file is not None else None

    try:
        path = await upload_document(
            storage,
            content=content,
            content_type=file.content_type if file is not None else None,
            filename=file.filename if file is not None else None,
            folder=folder,
            company_name=company_name,
            max_size_bytes=get_settings().MAX_UPLOAD_SIZE_BYTES,
        )
    except ValidationError as e:
        logger.warning(f"Upload rejected: {e.message}", extra={"category": folder})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.message},
        )
    except StorageError as e:
        logger.error(f"Storage upload error: {e}", extra={"category": folder})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)},
        )

    return UploadResponse(path=path)
