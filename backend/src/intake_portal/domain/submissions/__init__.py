"""Submissions domain module - form, outcome and error taxonomy"""

from .errors import (
    SubmissionError,
    ValidationError,
    UploadError,
    TotalFailureError,
    PersistenceError,
)
from .models import SelectedFile, SubmissionForm, SubmissionOutcome

__all__ = [
    "SubmissionError",
    "ValidationError",
    "UploadError",
    "TotalFailureError",
    "PersistenceError",
    "SelectedFile",
    "SubmissionForm",
    "SubmissionOutcome",
]
