"""Errors raised while taking in a document submission

Every failure is scoped to one submission attempt; none is fatal to the
process.
"""

from typing import List, Optional, Sequence


class SubmissionError(Exception):
    """Base class for submission failures shown to the user"""
    code = "submission_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(SubmissionError):
    """A required field is missing or invalid; the user must correct it"""
    code = "validation_error"


class UploadError(SubmissionError):
    """One file could not be stored; the rest of the batch continues"""
    code = "upload_error"

    def __init__(self, message: str, category: str, file_name: Optional[str]):
        super().__init__(message)
        self.category = category
        self.file_name = file_name

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "file_name": self.file_name,
            "error": self.message,
        }


class TotalFailureError(SubmissionError):
    """No file of the submission was stored; nothing was written to the database"""
    code = "upload_failed"

    def __init__(self, message: str, failures: Sequence[UploadError] = ()):
        super().__init__(message)
        self.failures: List[UploadError] = list(failures)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["details"] = [failure.to_dict() for failure in self.failures]
        return data


class PersistenceError(SubmissionError):
    """The submission record could not be written after files were stored

    The stored objects are left in place. orphaned_paths lists them.
    """
    code = "persistence_error"

    def __init__(self, message: str, orphaned_paths: Sequence[str] = ()):
        super().__init__(message)
        self.orphaned_paths: List[str] = list(orphaned_paths)
