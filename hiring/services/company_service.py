"""
Company service - companies and the recruiters allowed to publish for them.
"""
import logging
import uuid

from hiring.auth.dependencies import Identity
from hiring.exceptions import ForbiddenError, NotFoundError
from hiring.models import CompanyCreateRequest, CompanyResponse, UserRole
from hiring.repositories import CompanyRepository

logger = logging.getLogger(__name__)


def company_response(row) -> CompanyResponse:
    return CompanyResponse(
        id=str(row["id"]),
        owner_id=str(row["owner_id"]),
        name=row["name"],
        location=row["location"],
        industry=row["industry"],
        created_at=row["created_at"],
    )


class CompanyService:
    """Service for company operations."""

    def __init__(self, company_repo: CompanyRepository):
        self.company_repo = company_repo

    async def create(self, identity: Identity, request: CompanyCreateRequest) -> CompanyResponse:
        row = await self.company_repo.create(
            owner_id=identity.user_id,
            name=request.name,
            location=request.location,
            industry=request.industry,
        )
        logger.info(f"Company '{request.name}' created by {identity.user_id}")
        return company_response(row)

    async def list_for(self, identity: Identity) -> list[CompanyResponse]:
        """Owners see the companies they own, recruiters the ones they're linked to."""
        if identity.role == UserRole.COMPANY_OWNER:
            rows = await self.company_repo.list_for_owner(identity.user_id)
        else:
            rows = await self.company_repo.list_for_recruiter(identity.user_id)
        return [company_response(row) for row in rows]

    async def add_recruiter(self, identity: Identity, company_id: uuid.UUID, recruiter_id: uuid.UUID) -> None:
        company = await self.company_repo.get_by_id(company_id)
        if not company:
            raise NotFoundError("Company", str(company_id))
        if company["owner_id"] != identity.user_id:
            raise ForbiddenError("Only the company owner can add recruiters")

        await self.company_repo.add_recruiter(company_id, recruiter_id)
        logger.info(f"Recruiter {recruiter_id} linked to company {company_id}")
