"""
Company repository - companies and their linked recruiters.
"""
import asyncpg
import uuid
from typing import Optional


class CompanyRepository:
    """Repository for company database operations."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        location: Optional[str] = None,
        industry: Optional[str] = None,
    ) -> asyncpg.Record:
        return await self.pool.fetchrow(
            """
            INSERT INTO companies (owner_id, name, location, industry)
            VALUES ($1, $2, $3, $4)
            RETURNING id, owner_id, name, location, industry, created_at
            """,
            owner_id, name, location, industry
        )

    async def get_by_id(self, company_id: uuid.UUID) -> Optional[asyncpg.Record]:
        return await self.pool.fetchrow(
            """
            SELECT id, owner_id, name, location, industry, created_at
            FROM companies
            WHERE id = $1
            """,
            company_id
        )

    async def list_for_owner(self, owner_id: uuid.UUID) -> list[asyncpg.Record]:
        return await self.pool.fetch(
            """
            SELECT id, owner_id, name, location, industry, created_at
            FROM companies
            WHERE owner_id = $1
            ORDER BY created_at DESC
            """,
            owner_id
        )

    async def list_for_recruiter(self, recruiter_id: uuid.UUID) -> list[asyncpg.Record]:
        return await self.pool.fetch(
            """
            SELECT c.id, c.owner_id, c.name, c.location, c.industry, c.created_at
            FROM companies c
            JOIN company_recruiters cr ON cr.company_id = c.id
            WHERE cr.recruiter_id = $1
            ORDER BY c.name
            """,
            recruiter_id
        )

    async def add_recruiter(self, company_id: uuid.UUID, recruiter_id: uuid.UUID) -> None:
        """Link a recruiter to a company (idempotent)."""
        await self.pool.execute(
            """
            INSERT INTO company_recruiters (company_id, recruiter_id)
            VALUES ($1, $2)
            ON CONFLICT (company_id, recruiter_id) DO NOTHING
            """,
            company_id, recruiter_id
        )

    async def is_recruiter(self, company_id: uuid.UUID, recruiter_id: uuid.UUID) -> bool:
        return await self.pool.fetchval(
            """
            SELECT EXISTS (
                SELECT 1 FROM company_recruiters
                WHERE company_id = $1 AND recruiter_id = $2
            )
            """,
            company_id, recruiter_id
        )
