"""
Application repository - handles all application-related database operations.
"""
import asyncpg
import logging
import uuid
from typing import Any, Optional

from hiring.exceptions import ConflictError

logger = logging.getLogger(__name__)


class ApplicationRepository:
    """Repository for application database operations."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def get_by_id(self, application_id: uuid.UUID) -> Optional[asyncpg.Record]:
        """Get an application together with its job offer and company."""
        return await self.pool.fetchrow(
            """
            SELECT a.id, a.candidate_id, a.job_offer_id, a.status, a.cv_score,
                   a.created_at, a.updated_at,
                   j.title AS job_title, j.company_id,
                   c.name AS company_name, c.owner_id AS company_owner_id
            FROM applications a
            JOIN job_offers j ON j.id = a.job_offer_id
            JOIN companies c ON c.id = j.company_id
            WHERE a.id = $1
            """,
            application_id
        )

    async def get_for_candidate_and_job(
        self,
        candidate_id: uuid.UUID,
        job_offer_id: uuid.UUID,
    ) -> Optional[asyncpg.Record]:
        return await self.pool.fetchrow(
            """
            SELECT id, candidate_id, job_offer_id, status, cv_score, created_at, updated_at
            FROM applications
            WHERE candidate_id = $1 AND job_offer_id = $2
            """,
            candidate_id, job_offer_id
        )

    async def create(
        self,
        candidate_id: uuid.UUID,
        job_offer_id: uuid.UUID,
        status: str,
        cv_score: int,
        job_title: str,
        analysis: dict[str, Any],
        questions: Optional[list[dict[str, Any]]] = None,
        time_limit: Optional[int] = None,
    ) -> asyncpg.Record:
        """
        Insert an application with its CV analysis, plus its technical test
        when questions are given.

        All rows are written in one transaction. The (candidate_id, job_offer_id)
        unique constraint is the authority on duplicates.

        Raises:
            ConflictError: If the candidate already applied to this job offer
        """
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """
                        INSERT INTO applications (candidate_id, job_offer_id, status, cv_score)
                        VALUES ($1, $2, $3, $4)
                        RETURNING id, candidate_id, job_offer_id, status, cv_score, created_at, updated_at
                        """,
                        candidate_id, job_offer_id, status, cv_score
                    )

                    if questions is not None:
                        await conn.execute(
                            """
                            INSERT INTO technical_tests (application_id, questions, status, time_limit)
                            VALUES ($1, $2, 'pending', $3)
                            """,
                            row["id"], questions, time_limit
                        )

                    await conn.execute(
                        """
                        INSERT INTO cv_analyses (candidate_id, job_offer_id, application_id, job_title,
                                                 score, analysis, analyzed_at)
                        VALUES ($1, $2, $3, $4, $5, $6, NOW())
                        ON CONFLICT (candidate_id, job_offer_id) DO UPDATE
                        SET application_id = EXCLUDED.application_id,
                            job_title = EXCLUDED.job_title,
                            score = EXCLUDED.score,
                            analysis = EXCLUDED.analysis,
                            analyzed_at = EXCLUDED.analyzed_at
                        """,
                        candidate_id, job_offer_id, row["id"], job_title, cv_score, analysis
                    )

                    return row
        except asyncpg.UniqueViolationError:
            logger.info(f"Duplicate application rejected: candidate={candidate_id} job_offer={job_offer_id}")
            raise ConflictError(
                "You have already applied to this job offer",
                details={"job_offer_id": str(job_offer_id)},
            )

    async def list_for_candidate(self, candidate_id: uuid.UUID) -> list[asyncpg.Record]:
        return await self.pool.fetch(
            """
            SELECT a.id, a.job_offer_id, a.status, a.cv_score, a.created_at,
                   j.title AS job_title, c.name AS company_name,
                   t.id AS test_id, t.status AS test_status, t.score AS test_score
            FROM applications a
            JOIN job_offers j ON j.id = a.job_offer_id
            JOIN companies c ON c.id = j.company_id
            LEFT JOIN technical_tests t ON t.application_id = a.id
            WHERE a.candidate_id = $1
            ORDER BY a.created_at DESC
            """,
            candidate_id
        )
