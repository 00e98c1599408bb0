"""Pydantic schemas for Submission API endpoints"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class StoredDocumentLink(BaseModel):
    """One stored file with its public link"""
    name: str = Field(..., description="File name (last path segment)")
    path: str = Field(..., description="Storage path")
    url: str = Field(..., description="Public URL of the stored file")


class CategoryDocuments(BaseModel):
    """Files stored for one document category"""
    category: str = Field(..., description="Category key, e.g. commercialInvoice")
    label: str = Field(..., description="Display label derived from the key")
    files: List[StoredDocumentLink]


class SubmissionView(BaseModel):
    """Submission as shown in the review listing"""
    id: UUID
    company_name: str
    uploaded_at: datetime
    submitted_on: str = Field(..., description="Formatted submission time (UTC)")
    documents: List[CategoryDocuments] = Field(default_factory=list)
    empty_message: Optional[str] = Field(
        None, description="Placeholder shown when no category has files"
    )


class SubmissionListResponse(BaseModel):
    """All submissions, newest first"""
    submissions: List[SubmissionView]
    total: int


class FailedUploadResponse(BaseModel):
    """A file that was skipped during a submission"""
    category: str
    file_name: Optional[str] = None
    error: str


class SubmissionCreatedResponse(BaseModel):
    """Response for a persisted submission"""
    id: UUID
    company_name: str
    document_paths: Dict[str, List[str]]
    uploaded_at: datetime
    failed: List[FailedUploadResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True


class SubmissionErrorResponse(BaseModel):
    """Error body for a rejected or failed submission"""
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")


class DocumentCategoryResponse(BaseModel):
    """One entry of the category table"""
    key: str
    label: str
    group: str
