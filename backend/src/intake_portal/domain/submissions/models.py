"""Submission form and outcome types"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pydantic
from pydantic import BaseModel, Field

from ...models.submission import DocumentSubmission
from ..documents.categories import DocumentCategory
from .errors import UploadError, ValidationError


@dataclass(frozen=True)
class SelectedFile:
    """A file picked for one category of the form"""
    filename: str
    content_type: Optional[str]
    content: bytes


class SubmissionForm(BaseModel):
    """Validated submission form: company name plus files per category"""
    company_name: str = Field(..., min_length=2)
    files: Dict[DocumentCategory, List[SelectedFile]] = Field(default_factory=dict)

    class Config:
        str_strip_whitespace = True
        frozen = True

    @classmethod
    def create(
        cls,
        company_name: Optional[str],
        files: Optional[Dict[DocumentCategory, List[SelectedFile]]] = None,
    ) -> "SubmissionForm":
        """Build a form, turning schema errors into a user-facing ValidationError

        Raises:
            ValidationError: If the company name is missing or too short
        """
        try:
            return cls(company_name=company_name, files=files or {})
        except pydantic.ValidationError as e:
            fields = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            if "company_name" in fields:
                raise ValidationError("Company name is required") from e
            raise ValidationError("Invalid submission form") from e

    def files_for(self, category: DocumentCategory) -> List[SelectedFile]:
        return self.files.get(category, [])

    @property
    def file_count(self) -> int:
        return sum(len(selected) for selected in self.files.values())


@dataclass
class SubmissionOutcome:
    """Result of a submission that was persisted

    failed lists the individual uploads that were skipped.
    """
    submission: DocumentSubmission
    failed: List[UploadError] = field(default_factory=list)
