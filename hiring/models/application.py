"""
Application-related models.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class AnalysisSummary(BaseModel):
    """The part of the CV analysis shown to the candidate after applying."""
    matching_skills: list[str] = []
    missing_skills: list[str] = []
    recommendations: list[str] = []
    experience_level: str


class ApplyResponse(BaseModel):
    message: str
    application_id: str
    status: str  # pending (test to take) or rejected
    cv_score: int  # 0-100, frozen at application time
    has_test: bool
    analysis: AnalysisSummary


class CandidateApplicationResponse(BaseModel):
    """One of the candidate's own applications."""
    id: str
    job_offer_id: str
    job_title: str
    company_name: Optional[str] = None
    status: str
    cv_score: int
    has_test: bool = False
    test_status: Optional[str] = None
    test_score: Optional[float] = None
    created_at: datetime
