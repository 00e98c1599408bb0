"""Submission API endpoints

POST /submissions takes a whole form (company name plus files under each
category key), GET /submissions lists stored submissions for review.
"""

import logging
from typing import Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from ..config import get_settings
from ..database import get_db
from ..dependencies import get_storage
from ..domain.documents import CATEGORY_LABELS, DocumentCategory, group_of
from ..domain.documents.ports.object_storage_port import ObjectStoragePort
from ..domain.submissions import SelectedFile, SubmissionForm
from .schemas import (
    DocumentCategoryResponse,
    FailedUploadResponse,
    SubmissionCreatedResponse,
    SubmissionErrorResponse,
    SubmissionListResponse,
    SubmissionView,
)
from .service import SubmissionService
from .viewer import get_submission, list_submissions, render_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["Submissions"])
categories_router = APIRouter(prefix="/document-categories", tags=["Submissions"])


async def _read_selected_files(form) -> Dict[DocumentCategory, List[SelectedFile]]:
    """Collect file parts per category key

    Parts without a filename are file inputs left empty and are ignored.
    """
    files: Dict[DocumentCategory, List[SelectedFile]] = {}
    for category in DocumentCategory:
        selected = []
        for part in form.getlist(category.value):
            if not isinstance(part, UploadFile) or not part.filename:
                continue
            selected.append(
                SelectedFile(
                    filename=part.filename,
                    content_type=part.content_type,
                    content=await part.read(),
                )
            )
        if selected:
            files[category] = selected
    return files


@router.post(
    "",
    response_model=SubmissionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": SubmissionErrorResponse, "description": "Invalid form or no document selected"},
        500: {"model": SubmissionErrorResponse, "description": "Record could not be saved"},
        502: {"model": SubmissionErrorResponse, "description": "Every selected document failed to upload"},
    },
)
async def create_submission(
    request: Request,
    db: Session = Depends(get_db),
    storage: ObjectStoragePort = Depends(get_storage),
):
    """Submit a company's documents

    multipart/form-data with a companyName field and any number of file
    parts under each category key (companyRegistration, tk10, msds, ...).
    Files that fail to upload are skipped and listed under `failed`.
    """
    async with request.form() as form:
        company_name = form.get("companyName")
        submission_form = SubmissionForm.create(
            company_name if isinstance(company_name, str) else None,
            await _read_selected_files(form),
        )

    logger.info(
        f"Received submission with {submission_form.file_count} file(s)",
        extra={"company_name": submission_form.company_name},
    )

    service = SubmissionService(db, storage, get_settings().MAX_UPLOAD_SIZE_BYTES)
    outcome = await service.submit(submission_form)

    submission = outcome.submission
    return SubmissionCreatedResponse(
        id=submission.id,
        company_name=submission.company_name,
        document_paths=submission.document_paths,
        uploaded_at=submission.uploaded_at,
        failed=[FailedUploadResponse(**failure.to_dict()) for failure in outcome.failed],
    )


@router.get("", response_model=SubmissionListResponse)
def list_submissions_endpoint(
    db: Session = Depends(get_db),
    storage: ObjectStoragePort = Depends(get_storage),
):
    """List all submissions, newest first"""
    submissions = list_submissions(db)
    return SubmissionListResponse(
        submissions=[render_submission(s, storage.get_public_url) for s in submissions],
        total=len(submissions),
    )


@router.get("/{submission_id}", response_model=SubmissionView)
def get_submission_endpoint(
    submission_id: UUID,
    db: Session = Depends(get_db),
    storage: ObjectStoragePort = Depends(get_storage),
):
    """Get one submission by ID"""
    submission = get_submission(db, submission_id)
    if submission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Submission {submission_id} not found",
        )
    return render_submission(submission, storage.get_public_url)


@categories_router.get("", response_model=List[DocumentCategoryResponse])
def list_document_categories():
    """List document categories in processing order, with labels and form sections"""
    return [
        DocumentCategoryResponse(key=category.value, label=CATEGORY_LABELS[category], group=group_of(category).value)
        for category in DocumentCategory
    ]
