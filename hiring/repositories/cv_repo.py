"""
CV repository - uploaded CV documents.
"""
import asyncpg
import uuid
from typing import Optional


class CVRepository:
    """Repository for uploaded CV documents."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def create_document(
        self,
        candidate_id: uuid.UUID,
        candidate_name: Optional[str],
        candidate_email: Optional[str],
        file_name: str,
        file_path: str,
        content_type: str,
        file_size: int,
        content_text: str,
    ) -> asyncpg.Record:
        return await self.pool.fetchrow(
            """
            INSERT INTO cv_documents (candidate_id, candidate_name, candidate_email, file_name,
                                      file_path, content_type, file_size, content_text)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING id, candidate_id, candidate_name, candidate_email, file_name, file_path,
                      content_type, file_size, content_text, created_at
            """,
            candidate_id, candidate_name, candidate_email, file_name,
            file_path, content_type, file_size, content_text
        )

    async def get_latest_document(self, candidate_id: uuid.UUID) -> Optional[asyncpg.Record]:
        """The candidate's most recent CV, or None."""
        return await self.pool.fetchrow(
            """
            SELECT id, candidate_id, candidate_name, candidate_email, file_name, file_path,
                   content_type, file_size, content_text, created_at
            FROM cv_documents
            WHERE candidate_id = $1
            ORDER BY created_at DESC
            LIMIT 1
            """,
            candidate_id
        )
