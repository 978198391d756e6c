"""
Company endpoints.
"""
from fastapi import APIRouter, Depends

from hiring.auth import Identity, require_role
from hiring.dependencies import get_company_service
from hiring.exceptions import parse_uuid
from hiring.models import AddRecruiterRequest, CompanyCreateRequest, CompanyResponse, UserRole
from hiring.services import CompanyService

router = APIRouter(tags=["Companies"])


@router.post("/companies", response_model=CompanyResponse, status_code=201)
async def create_company(
    request: CompanyCreateRequest,
    identity: Identity = Depends(require_role(UserRole.COMPANY_OWNER)),
    service: CompanyService = Depends(get_company_service),
):
    return await service.create(identity, request)


@router.get("/companies", response_model=list[CompanyResponse])
async def list_companies(
    identity: Identity = Depends(require_role(UserRole.COMPANY_OWNER, UserRole.RECRUITER)),
    service: CompanyService = Depends(get_company_service),
):
    return await service.list_for(identity)


@router.post("/companies/{company_id}/recruiters", status_code=204)
async def add_company_recruiter(
    company_id: str,
    request: AddRecruiterRequest,
    identity: Identity = Depends(require_role(UserRole.COMPANY_OWNER)),
    service: CompanyService = Depends(get_company_service),
):
    """Allow a recruiter to publish job offers for the company."""
    await service.add_recruiter(
        identity,
        parse_uuid(company_id, field="company_id"),
        parse_uuid(request.recruiter_id, field="recruiter_id"),
    )
