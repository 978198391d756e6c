"""
Hiring backend API models.

This module re-exports all model classes for convenient importing.
"""

# Enums
from .enums import UserRole, ApplicationStatus, TechnicalTestStatus

# Job offer models
from .job_offer import (
    JobRequirement,
    JobOfferCreateRequest,
    JobOfferStatusRequest,
    JobOfferResponse,
    JobOfferApplicationResponse,
)

# Company models
from .company import (
    CompanyCreateRequest,
    CompanyResponse,
    AddRecruiterRequest,
)

# Candidate / CV models
from .candidate import (
    CandidateProfile,
    CVUploadRequest,
    CVResponse,
)

# Application models
from .application import (
    AnalysisSummary,
    ApplyResponse,
    CandidateApplicationResponse,
)

# Technical test models
from .technical_test import (
    PublicQuestion,
    TechnicalTestResponse,
    SubmitTestRequest,
    QuestionResult,
    SubmitTestResponse,
    TechnicalTestResultResponse,
)

__all__ = [
    # Enums
    "UserRole",
    "ApplicationStatus",
    "TechnicalTestStatus",
    # Job offer
    "JobRequirement",
    "JobOfferCreateRequest",
    "JobOfferStatusRequest",
    "JobOfferResponse",
    "JobOfferApplicationResponse",
    # Company
    "CompanyCreateRequest",
    "CompanyResponse",
    "AddRecruiterRequest",
    # Candidate
    "CandidateProfile",
    "CVUploadRequest",
    "CVResponse",
    # Application
    "AnalysisSummary",
    "ApplyResponse",
    "CandidateApplicationResponse",
    # Technical test
    "PublicQuestion",
    "TechnicalTestResponse",
    "SubmitTestRequest",
    "QuestionResult",
    "SubmitTestResponse",
    "TechnicalTestResultResponse",
]
