"""
FastAPI dependency injection factories.

This module provides dependency factories for repositories, services,
and other shared resources used across routers.
"""
import asyncpg
from typing import Optional
from fastapi import Depends

from cv_scorer import CVScorer
from quiz_generator import QuizGenerator

from hiring import config
from hiring.database import get_db_pool
from hiring.repositories import (
    ApplicationRepository,
    CompanyRepository,
    CVRepository,
    JobOfferRepository,
    TechnicalTestRepository,
)
from hiring.services import (
    ApplicationService,
    CompanyService,
    CVService,
    JobOfferService,
    LocalCVStorage,
    TechnicalTestService,
)


# Shared components (set during app startup)
_cv_scorer: Optional[CVScorer] = None
_quiz_generator: Optional[QuizGenerator] = None
_cv_storage: Optional[LocalCVStorage] = None


def set_components(scorer: CVScorer, generator: QuizGenerator, storage: LocalCVStorage):
    """Set the shared scoring, generation and storage components."""
    global _cv_scorer, _quiz_generator, _cv_storage
    _cv_scorer = scorer
    _quiz_generator = generator
    _cv_storage = storage


def get_cv_scorer() -> CVScorer:
    if _cv_scorer is None:
        raise RuntimeError("CVScorer not initialized. Call set_components() during app startup.")
    return _cv_scorer


def get_quiz_generator() -> QuizGenerator:
    if _quiz_generator is None:
        raise RuntimeError("QuizGenerator not initialized. Call set_components() during app startup.")
    return _quiz_generator


def get_cv_storage() -> LocalCVStorage:
    if _cv_storage is None:
        raise RuntimeError("CV storage not initialized. Call set_components() during app startup.")
    return _cv_storage


# =============================================================================
# Database Dependencies
# =============================================================================

async def get_pool() -> asyncpg.Pool:
    """Get the database connection pool."""
    return await get_db_pool()


# =============================================================================
# Repository Dependencies
# =============================================================================

async def get_company_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> CompanyRepository:
    """Get a CompanyRepository instance."""
    return CompanyRepository(pool)


async def get_job_offer_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> JobOfferRepository:
    """Get a JobOfferRepository instance."""
    return JobOfferRepository(pool)


async def get_cv_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> CVRepository:
    """Get a CVRepository instance."""
    return CVRepository(pool)


async def get_application_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> ApplicationRepository:
    """Get an ApplicationRepository instance."""
    return ApplicationRepository(pool)


async def get_technical_test_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> TechnicalTestRepository:
    """Get a TechnicalTestRepository instance."""
    return TechnicalTestRepository(pool)


# =============================================================================
# Service Dependencies
# =============================================================================

async def get_application_service(
    job_repo: JobOfferRepository = Depends(get_job_offer_repo),
    cv_repo: CVRepository = Depends(get_cv_repo),
    app_repo: ApplicationRepository = Depends(get_application_repo),
    scorer: CVScorer = Depends(get_cv_scorer),
    generator: QuizGenerator = Depends(get_quiz_generator),
) -> ApplicationService:
    """Get an ApplicationService instance."""
    return ApplicationService(job_repo, cv_repo, app_repo, scorer, generator)


async def get_technical_test_service(
    app_repo: ApplicationRepository = Depends(get_application_repo),
    test_repo: TechnicalTestRepository = Depends(get_technical_test_repo),
    company_repo: CompanyRepository = Depends(get_company_repo),
) -> TechnicalTestService:
    """Get a TechnicalTestService instance."""
    return TechnicalTestService(app_repo, test_repo, company_repo, enforce_deadline=config.ENFORCE_TEST_DEADLINE)


async def get_job_offer_service(
    job_repo: JobOfferRepository = Depends(get_job_offer_repo),
    company_repo: CompanyRepository = Depends(get_company_repo),
) -> JobOfferService:
    """Get a JobOfferService instance."""
    return JobOfferService(job_repo, company_repo)


async def get_company_service(
    company_repo: CompanyRepository = Depends(get_company_repo),
) -> CompanyService:
    """Get a CompanyService instance."""
    return CompanyService(company_repo)


async def get_cv_service(
    cv_repo: CVRepository = Depends(get_cv_repo),
    storage: LocalCVStorage = Depends(get_cv_storage),
) -> CVService:
    """Get a CVService instance."""
    return CVService(cv_repo, storage, max_size_bytes=config.MAX_CV_SIZE_BYTES)
