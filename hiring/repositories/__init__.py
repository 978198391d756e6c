"""
Repository layer for data access.
"""
from .company_repo import CompanyRepository
from .job_offer_repo import JobOfferRepository
from .cv_repo import CVRepository
from .application_repo import ApplicationRepository
from .technical_test_repo import TechnicalTestRepository

__all__ = [
    "CompanyRepository",
    "JobOfferRepository",
    "CVRepository",
    "ApplicationRepository",
    "TechnicalTestRepository",
]
