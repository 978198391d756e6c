"""
Company models.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CompanyCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    location: Optional[str] = None
    industry: Optional[str] = None


class CompanyResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    location: Optional[str] = None
    industry: Optional[str] = None
    created_at: datetime


class AddRecruiterRequest(BaseModel):
    recruiter_id: str
