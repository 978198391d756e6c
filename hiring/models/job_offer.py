"""
Job offer models.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class JobRequirement(BaseModel):
    """Immutable snapshot of what a job asks for, taken at scoring time."""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, row) -> "JobRequirement":
        return cls(
            title=row["title"],
            description=row["description"] or "",
            required_skills=list(row["skills"] or []),
        )


class JobOfferCreateRequest(BaseModel):
    company_id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    skills: list[str] = []
    location: Optional[str] = None
    salary: Optional[str] = None
    deadline: Optional[datetime] = None


class JobOfferStatusRequest(BaseModel):
    is_active: bool


class JobOfferResponse(BaseModel):
    id: str
    company_id: str
    company_name: Optional[str] = None
    recruiter_id: str
    title: str
    description: str
    skills: list[str] = []
    location: Optional[str] = None
    salary: Optional[str] = None
    deadline: Optional[datetime] = None
    is_active: bool
    created_at: datetime


class JobOfferApplicationResponse(BaseModel):
    """One application as seen by the job's company."""
    id: str
    candidate_id: str
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    status: str
    cv_score: int
    test_status: Optional[str] = None
    test_score: Optional[float] = None
    created_at: datetime
