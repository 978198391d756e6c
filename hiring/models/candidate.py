"""
Candidate and CV document models.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


@dataclass
class CandidateProfile:
    """The candidate as seen by the scoring pipeline: most recent CV wins."""
    candidate_id: UUID
    name: Optional[str]
    email: Optional[str]
    cv_text: str

    @classmethod
    def from_record(cls, row) -> "CandidateProfile":
        return cls(
            candidate_id=row["candidate_id"],
            name=row["candidate_name"],
            email=row["candidate_email"],
            cv_text=row["content_text"] or "",
        )


class CVUploadRequest(BaseModel):
    """Request model for uploading a CV document."""
    file_base64: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    content_type: str
    # Plain-text content of the CV; extracted from the PDF when omitted
    content_text: Optional[str] = None


class CVResponse(BaseModel):
    id: str
    file_name: str
    file_path: str
    content_type: str
    file_size: int
    created_at: datetime
