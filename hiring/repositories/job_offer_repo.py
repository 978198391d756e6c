"""
Job offer repository - handles all job-offer-related database operations.
"""
import asyncpg
import uuid
from datetime import datetime
from typing import Optional

# Every job offer read joins its company for the name and the owner
_SELECT_JOB_OFFER = """
    SELECT j.id, j.company_id, c.name AS company_name, c.owner_id AS company_owner_id,
           j.recruiter_id, j.title, j.description, j.skills, j.location, j.salary,
           j.deadline, j.is_active, j.created_at, j.updated_at
    FROM job_offers j
    JOIN companies c ON c.id = j.company_id
"""


class JobOfferRepository:
    """Repository for job offer database operations."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def create(
        self,
        company_id: uuid.UUID,
        recruiter_id: uuid.UUID,
        title: str,
        description: str,
        skills: list[str],
        location: Optional[str] = None,
        salary: Optional[str] = None,
        deadline: Optional[datetime] = None,
    ) -> asyncpg.Record:
        job_offer_id = await self.pool.fetchval(
            """
            INSERT INTO job_offers (company_id, recruiter_id, title, description, skills,
                                    location, salary, deadline)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING id
            """,
            company_id, recruiter_id, title, description, skills, location, salary, deadline
        )
        return await self.get_by_id(job_offer_id)

    async def get_by_id(self, job_offer_id: uuid.UUID) -> Optional[asyncpg.Record]:
        return await self.pool.fetchrow(f"{_SELECT_JOB_OFFER} WHERE j.id = $1", job_offer_id)

    async def list_public(self, now: datetime) -> list[asyncpg.Record]:
        """Active offers whose deadline has not passed, soonest deadline first."""
        return await self.pool.fetch(
            f"""
            {_SELECT_JOB_OFFER}
            WHERE j.is_active = TRUE AND (j.deadline IS NULL OR j.deadline > $1)
            ORDER BY j.deadline ASC NULLS LAST, j.created_at DESC
            """,
            now
        )

    async def set_active(self, job_offer_id: uuid.UUID, is_active: bool) -> Optional[asyncpg.Record]:
        updated = await self.pool.fetchval(
            """
            UPDATE job_offers
            SET is_active = $2, updated_at = NOW()
            WHERE id = $1
            RETURNING id
            """,
            job_offer_id, is_active
        )
        if updated is None:
            return None
        return await self.get_by_id(job_offer_id)

    async def list_applications(self, job_offer_id: uuid.UUID) -> list[asyncpg.Record]:
        """Applications for a job offer with the candidate's latest CV identity and test outcome."""
        return await self.pool.fetch(
            """
            SELECT a.id, a.candidate_id, a.status, a.cv_score, a.created_at,
                   cv.candidate_name, cv.candidate_email,
                   t.status AS test_status, t.score AS test_score
            FROM applications a
            LEFT JOIN technical_tests t ON t.application_id = a.id
            LEFT JOIN LATERAL (
                SELECT candidate_name, candidate_email
                FROM cv_documents d
                WHERE d.candidate_id = a.candidate_id
                ORDER BY d.created_at DESC
                LIMIT 1
            ) cv ON TRUE
            WHERE a.job_offer_id = $1
            ORDER BY a.cv_score DESC, a.created_at ASC
            """,
            job_offer_id
        )
