"""
Job offer endpoints.
"""
from fastapi import APIRouter, Depends

from hiring.auth import Identity, require_role
from hiring.dependencies import get_job_offer_service
from hiring.exceptions import parse_uuid
from hiring.models import (
    JobOfferApplicationResponse,
    JobOfferCreateRequest,
    JobOfferResponse,
    JobOfferStatusRequest,
    UserRole,
)
from hiring.services import JobOfferService

router = APIRouter(tags=["Job Offers"])

_managers = require_role(UserRole.COMPANY_OWNER, UserRole.RECRUITER)


@router.post("/job-offers", response_model=JobOfferResponse, status_code=201)
async def create_job_offer(
    request: JobOfferCreateRequest,
    identity: Identity = Depends(_managers),
    service: JobOfferService = Depends(get_job_offer_service),
):
    """Publish a job offer for a company the caller owns or recruits for."""
    return await service.create(identity, request)


@router.get("/job-offers/public", response_model=list[JobOfferResponse])
async def list_public_job_offers(
    service: JobOfferService = Depends(get_job_offer_service),
):
    """Active job offers that are still open for applications."""
    return await service.list_public()


@router.get("/job-offers/{job_offer_id}", response_model=JobOfferResponse)
async def get_job_offer(
    job_offer_id: str,
    service: JobOfferService = Depends(get_job_offer_service),
):
    return await service.get(parse_uuid(job_offer_id, field="job_offer_id"))


@router.patch("/job-offers/{job_offer_id}/status", response_model=JobOfferResponse)
async def update_job_offer_status(
    job_offer_id: str,
    request: JobOfferStatusRequest,
    identity: Identity = Depends(_managers),
    service: JobOfferService = Depends(get_job_offer_service),
):
    return await service.set_active(identity, parse_uuid(job_offer_id, field="job_offer_id"), request.is_active)


@router.get("/job-offers/{job_offer_id}/applications", response_model=list[JobOfferApplicationResponse])
async def list_job_offer_applications(
    job_offer_id: str,
    identity: Identity = Depends(_managers),
    service: JobOfferService = Depends(get_job_offer_service),
):
    return await service.list_applications(identity, parse_uuid(job_offer_id, field="job_offer_id"))
