"""
Job offer service - publishing, listing and managing job offers.
"""
import logging
import uuid
from datetime import datetime, timezone

from hiring.auth.dependencies import Identity
from hiring.exceptions import ForbiddenError, NotFoundError, ValidationError, parse_uuid
from hiring.models import (
    JobOfferApplicationResponse,
    JobOfferCreateRequest,
    JobOfferResponse,
    UserRole,
)
from hiring.repositories import CompanyRepository, JobOfferRepository

logger = logging.getLogger(__name__)


def job_offer_response(row) -> JobOfferResponse:
    return JobOfferResponse(
        id=str(row["id"]),
        company_id=str(row["company_id"]),
        company_name=row["company_name"],
        recruiter_id=str(row["recruiter_id"]),
        title=row["title"],
        description=row["description"],
        skills=list(row["skills"] or []),
        location=row["location"],
        salary=row["salary"],
        deadline=row["deadline"],
        is_active=row["is_active"],
        created_at=row["created_at"],
    )


def clean_skills(skills: list[str]) -> list[str]:
    """Strip blanks and case-insensitive duplicates, keeping the declared order."""
    seen = set()
    cleaned = []
    for skill in skills:
        skill = skill.strip()
        if skill and skill.lower() not in seen:
            seen.add(skill.lower())
            cleaned.append(skill)
    return cleaned


class JobOfferService:
    """Service for job offer operations."""

    def __init__(self, job_repo: JobOfferRepository, company_repo: CompanyRepository):
        self.job_repo = job_repo
        self.company_repo = company_repo

    async def _can_manage(self, identity: Identity, company_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        if identity.role == UserRole.COMPANY_OWNER:
            return owner_id == identity.user_id
        if identity.role == UserRole.RECRUITER:
            return await self.company_repo.is_recruiter(company_id, identity.user_id)
        return False

    async def _get_managed(self, identity: Identity, job_offer_id: uuid.UUID):
        job = await self.job_repo.get_by_id(job_offer_id)
        if not job:
            raise NotFoundError("Job offer", str(job_offer_id))
        if not await self._can_manage(identity, job["company_id"], job["company_owner_id"]):
            raise ForbiddenError("You don't manage this job offer")
        return job

    async def create(self, identity: Identity, request: JobOfferCreateRequest) -> JobOfferResponse:
        company_id = parse_uuid(request.company_id, field="company_id")
        company = await self.company_repo.get_by_id(company_id)
        if not company:
            raise NotFoundError("Company", request.company_id)
        if not await self._can_manage(identity, company_id, company["owner_id"]):
            raise ForbiddenError("You can't publish job offers for this company")

        if request.deadline is not None:
            deadline = request.deadline
            if deadline.tzinfo is None:
                deadline = deadline.replace(tzinfo=timezone.utc)
            if deadline <= datetime.now(timezone.utc):
                raise ValidationError("Deadline must be in the future", field="deadline")
        else:
            deadline = None

        row = await self.job_repo.create(
            company_id=company_id,
            recruiter_id=identity.user_id,
            title=request.title.strip(),
            description=request.description,
            skills=clean_skills(request.skills),
            location=request.location,
            salary=request.salary,
            deadline=deadline,
        )
        logger.info(f"Job offer '{row['title']}' published for company {company_id}")
        return job_offer_response(row)

    async def get(self, job_offer_id: uuid.UUID) -> JobOfferResponse:
        job = await self.job_repo.get_by_id(job_offer_id)
        if not job:
            raise NotFoundError("Job offer", str(job_offer_id))
        return job_offer_response(job)

    async def list_public(self) -> list[JobOfferResponse]:
        rows = await self.job_repo.list_public(datetime.now(timezone.utc))
        return [job_offer_response(row) for row in rows]

    async def set_active(self, identity: Identity, job_offer_id: uuid.UUID, is_active: bool) -> JobOfferResponse:
        await self._get_managed(identity, job_offer_id)
        row = await self.job_repo.set_active(job_offer_id, is_active)
        if not row:
            raise NotFoundError("Job offer", str(job_offer_id))
        logger.info(f"Job offer {job_offer_id} is_active={is_active}")
        return job_offer_response(row)

    async def list_applications(
        self,
        identity: Identity,
        job_offer_id: uuid.UUID,
    ) -> list[JobOfferApplicationResponse]:
        await self._get_managed(identity, job_offer_id)
        rows = await self.job_repo.list_applications(job_offer_id)
        return [
            JobOfferApplicationResponse(
                id=str(row["id"]),
                candidate_id=str(row["candidate_id"]),
                candidate_name=row["candidate_name"],
                candidate_email=row["candidate_email"],
                status=row["status"],
                cv_score=row["cv_score"],
                test_status=row["test_status"],
                test_score=row["test_score"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
