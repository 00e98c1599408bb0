"""Submission viewer

Read-only: loads submission records newest first and turns each one into a
view with labelled per-category links to the stored files.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..domain.documents import DocumentCategory, format_category_label
from ..models.submission import DocumentSubmission
from .schemas import CategoryDocuments, StoredDocumentLink, SubmissionView

EMPTY_SUBMISSION_MESSAGE = "No documents found for this submission."


def list_submissions(db: Session) -> List[DocumentSubmission]:
    """Fetch all submissions, newest first"""
    stmt = select(DocumentSubmission).order_by(DocumentSubmission.uploaded_at.desc())
    return list(db.execute(stmt).scalars().all())


def get_submission(db: Session, submission_id: UUID) -> Optional[DocumentSubmission]:
    return db.get(DocumentSubmission, submission_id)


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_submitted_on(value: datetime) -> str:
    """Format a timestamp for display, in UTC

    Naive datetimes are taken to be UTC already.

    Example:
        >>> format_submitted_on(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))
        'November 14th, 2023 at 10:13:20 PM'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    hour = value.hour % 12 or 12
    return (
        f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year} at "
        f"{hour}:{value.minute:02d}:{value.second:02d} {'AM' if value.hour < 12 else 'PM'}"
    )


def _ordered_keys(document_paths: Dict[str, List[str]]) -> List[str]:
    known = [category.value for category in DocumentCategory]
    unknown = [key for key in document_paths if key not in known]
    return [key for key in known if key in document_paths] + unknown


def render_submission(
    submission: DocumentSubmission,
    resolve_url: Callable[[str], str],
) -> SubmissionView:
    """Build the view of one submission

    Args:
        submission: Stored submission record
        resolve_url: Maps a storage key to its public URL

    Returns:
        SubmissionView: Non-empty categories in category order, unknown
            stored keys after them
    """
    document_paths = submission.document_paths or {}
    documents = []
    for key in _ordered_keys(document_paths):
        paths = document_paths.get(key) or []
        if not paths:
            continue
        documents.append(
            CategoryDocuments(
                category=key,
                label=format_category_label(key),
                files=[
                    StoredDocumentLink(
                        name=path.rsplit("/", 1)[-1],
                        path=path,
                        url=resolve_url(path),
                    )
                    for path in paths
                ],
            )
        )

    uploaded_at = submission.uploaded_at
    if uploaded_at.tzinfo is None:
        uploaded_at = uploaded_at.replace(tzinfo=timezone.utc)

    return SubmissionView(
        id=submission.id,
        company_name=submission.company_name,
        uploaded_at=uploaded_at,
        submitted_on=format_submitted_on(uploaded_at),
        documents=documents,
        empty_message=None if documents else EMPTY_SUBMISSION_MESSAGE,
    )
