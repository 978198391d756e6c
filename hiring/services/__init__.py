"""
Service layer for business logic.
"""
from .application_service import ApplicationService
from .technical_test_service import TechnicalTestService
from .job_offer_service import JobOfferService
from .company_service import CompanyService
from .cv_service import CVService
from .cv_storage import LocalCVStorage, extract_pdf_text
from .grading import GradeResult, grade_answers

__all__ = [
    "ApplicationService",
    "TechnicalTestService",
    "JobOfferService",
    "CompanyService",
    "CVService",
    "LocalCVStorage",
    "extract_pdf_text",
    "GradeResult",
    "grade_answers",
]
