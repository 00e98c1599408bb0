"""Document submission SQLAlchemy model

One row per company submission. The per-category storage paths live in a
single JSON column keyed by document category.
"""

import uuid

from sqlalchemy import Column, DateTime, Index, Text, Uuid

from .base import Base, PortableJSONB


class DocumentSubmission(Base):
    """A company's document upload, persisted once and never modified.

    document_paths always holds all twelve category keys; categories the
    company left empty map to an empty list.
    """
    __tablename__ = "document_submission"
    __table_args__ = (
        Index("ix_document_submission_uploaded_at", "uploaded_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_name = Column(Text, nullable=False)
    document_paths = Column(PortableJSONB, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)

