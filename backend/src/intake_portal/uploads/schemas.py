"""Upload API response schemas"""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response for a stored file"""
    path: str = Field(..., description="Storage path ({category}/{filename})")


class UploadErrorResponse(BaseModel):
    """Error response for a rejected or failed upload"""
    error: str = Field(..., description="Human-readable error message")
