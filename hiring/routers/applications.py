"""
Application and technical test endpoints.
"""
import logging
from fastapi import APIRouter, Depends

from hiring.auth import Identity, require_role
from hiring.dependencies import get_application_service, get_technical_test_service
from hiring.exceptions import parse_uuid
from hiring.models import (
    ApplyResponse,
    CandidateApplicationResponse,
    SubmitTestRequest,
    SubmitTestResponse,
    TechnicalTestResponse,
    TechnicalTestResultResponse,
    UserRole,
)
from hiring.services import ApplicationService, TechnicalTestService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Applications"])


@router.post("/job-offers/{job_offer_id}/apply", response_model=ApplyResponse)
async def apply_to_job_offer(
    job_offer_id: str,
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: ApplicationService = Depends(get_application_service),
):
    """Apply with the latest uploaded CV. Scores the CV and, when admitted, creates the technical test."""
    job_uuid = parse_uuid(job_offer_id, field="job_offer_id")
    return await service.apply_to_job(identity, job_uuid)


@router.get("/candidate/applications", response_model=list[CandidateApplicationResponse])
async def list_my_applications(
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: ApplicationService = Depends(get_application_service),
):
    return await service.list_for_candidate(identity)


@router.get("/applications/{application_id}/test", response_model=TechnicalTestResponse)
async def get_technical_test(
    application_id: str,
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: TechnicalTestService = Depends(get_technical_test_service),
):
    """Get the test questions (without answers). The first call starts the time limit."""
    app_uuid = parse_uuid(application_id, field="application_id")
    return await service.get_test(identity, app_uuid)


@router.post("/applications/{application_id}/test", response_model=SubmitTestResponse)
async def submit_technical_test(
    application_id: str,
    request: SubmitTestRequest,
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: TechnicalTestService = Depends(get_technical_test_service),
):
    """Submit answers once. Grades the test and accepts or rejects the application."""
    app_uuid = parse_uuid(application_id, field="application_id")
    return await service.submit_test(identity, app_uuid, request.answers)


@router.get("/applications/{application_id}/test/result", response_model=TechnicalTestResultResponse)
async def get_technical_test_result(
    application_id: str,
    identity: Identity = Depends(require_role(UserRole.CANDIDATE, UserRole.COMPANY_OWNER, UserRole.RECRUITER)),
    service: TechnicalTestService = Depends(get_technical_test_service),
):
    app_uuid = parse_uuid(application_id, field="application_id")
    return await service.get_result(identity, app_uuid)
