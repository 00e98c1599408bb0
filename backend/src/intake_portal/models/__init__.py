"""SQLAlchemy Models for the intake portal"""

from .base import Base, PortableJSONB
from .submission import DocumentSubmission

__all__ = [
    "Base",
    "PortableJSONB",
    "DocumentSubmission",
]
