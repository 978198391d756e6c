"""
API routers for endpoint organization.
"""
from .health import router as health_router
from .companies import router as companies_router
from .job_offers import router as job_offers_router
from .applications import router as applications_router
from .cv import router as cv_router

__all__ = [
    "health_router",
    "companies_router",
    "job_offers_router",
    "applications_router",
    "cv_router",
]
