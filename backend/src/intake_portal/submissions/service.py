"""Submission orchestrator

Fans one submission form out into per-file uploads through the upload proxy
operation, then fans the stored paths back in to a single DocumentSubmission
row. Partial success is allowed: a failed file is recorded and skipped, the
rest of the batch continues.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.documents import DocumentCategory, empty_document_paths
from ..domain.documents.ports.object_storage_port import ObjectStoragePort, StorageError
from ..domain.submissions import (
    PersistenceError,
    SubmissionForm,
    SubmissionOutcome,
    TotalFailureError,
    UploadError,
    ValidationError,
)
from ..models.submission import DocumentSubmission
from ..observability.metrics import submission_files_skipped_total, submissions_total
from ..uploads.service import current_timestamp_ms, upload_document

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionService:
    """Takes in one submission form per call

    Args:
        db: Request-scoped database session
        storage: Object storage adapter
        max_upload_bytes: Per-file size limit
        clock: Millisecond clock used for storage key timestamps
        now: Clock used for uploaded_at
    """

    def __init__(
        self,
        db: Session,
        storage: ObjectStoragePort,
        max_upload_bytes: int,
        clock: Callable[[], int] = current_timestamp_ms,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes
        self.clock = clock
        self.now = now

    async def submit(self, form: SubmissionForm) -> SubmissionOutcome:
        """Upload every selected file, then persist one submission record

        Categories are processed in DocumentCategory order, files within a
        category in selection order.

        Raises:
            TotalFailureError: If no file was stored (nothing is written)
            PersistenceError: If the record insert fails after files were stored
        """
        document_paths: Dict[str, List[str]] = empty_document_paths()
        failed: List[UploadError] = []
        stored_paths: List[str] = []
        last_timestamp: Optional[int] = None

        for category in DocumentCategory:
            for selected in form.files_for(category):
                # Strictly increasing within one submission
                timestamp = self.clock()
                if last_timestamp is not None and timestamp <= last_timestamp:
                    timestamp = last_timestamp + 1
                last_timestamp = timestamp

                try:
                    path = await upload_document(
                        self.storage,
                        content=selected.content,
                        content_type=selected.content_type,
                        filename=selected.filename,
                        folder=category.value,
                        company_name=form.company_name,
                        max_size_bytes=self.max_upload_bytes,
                        timestamp_ms=timestamp,
                    )
                except (ValidationError, StorageError, ValueError) as e:
                    message = e.message if isinstance(e, ValidationError) else str(e)
                    failure = UploadError(message, category=category.value, file_name=selected.filename)
                    failed.append(failure)
                    submission_files_skipped_total.labels(category=category.value).inc()
                    logger.warning(
                        f"Skipping {selected.filename} in {category.value}: {message}",
                        extra={"category": category.value, "company_name": form.company_name},
                    )
                    continue

                document_paths[category.value].append(path)
                stored_paths.append(path)

        if not stored_paths:
            submissions_total.labels(outcome="total_failure").inc()
            logger.error(
                f"No documents stored for submission ({len(failed)} failed)",
                extra={"company_name": form.company_name},
            )
            raise TotalFailureError("Could not upload any documents.", failed)

        submission = DocumentSubmission(
            company_name=form.company_name,
            document_paths=document_paths,
            uploaded_at=self.now(),
        )

        try:
            self.db.add(submission)
            self.db.commit()
            self.db.refresh(submission)
        except SQLAlchemyError as e:
            self.db.rollback()
            submissions_total.labels(outcome="persistence_error").inc()
            # Stored objects stay in the bucket without a record pointing at them
            logger.error(
                f"Failed to save submission: {e}",
                extra={"company_name": form.company_name, "orphaned_paths": stored_paths},
            )
            raise PersistenceError("Could not save document information.", stored_paths) from e

        submissions_total.labels(outcome="partial" if failed else "success").inc()
        logger.info(
            f"Submission saved: {len(stored_paths)} stored, {len(failed)} failed",
            extra={"submission_id": str(submission.id), "company_name": submission.company_name},
        )
        return SubmissionOutcome(submission=submission, failed=failed)
