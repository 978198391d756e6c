"""
Technical test repository.

Completion is a conditional update inside a transaction: only a pending test
of a pending application can be completed, so a second submission can never
overwrite the first.
"""
import asyncpg
import uuid
from datetime import datetime
from typing import Any, Optional

from hiring.exceptions import InvalidStateError

_TEST_COLUMNS = """
    id, application_id, questions, status, score, time_limit, started_at, expires_at,
    completed_at, test_answers, submitted_late, created_at
"""


class TechnicalTestRepository:
    """Repository for technical test database operations."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def get_by_application(self, application_id: uuid.UUID) -> Optional[asyncpg.Record]:
        return await self.pool.fetchrow(
            f"SELECT {_TEST_COLUMNS} FROM technical_tests WHERE application_id = $1",
            application_id
        )

    async def mark_started(
        self,
        application_id: uuid.UUID,
        started_at: datetime,
        expires_at: datetime,
    ) -> Optional[asyncpg.Record]:
        """Start the clock on first fetch. Later fetches keep the original deadline."""
        row = await self.pool.fetchrow(
            f"""
            UPDATE technical_tests
            SET started_at = $2, expires_at = $3
            WHERE application_id = $1 AND started_at IS NULL
            RETURNING {_TEST_COLUMNS}
            """,
            application_id, started_at, expires_at
        )
        return row or await self.get_by_application(application_id)

    async def complete(
        self,
        application_id: uuid.UUID,
        score: float,
        test_answers: list[dict[str, Any]],
        completed_at: datetime,
        submitted_late: bool,
        application_status: str,
    ) -> bool:
        """
        Record the graded test and the application decision atomically.

        Returns:
            False if the test was no longer pending (lost a submission race)

        Raises:
            InvalidStateError: If the application already reached a terminal status
        """
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                test_id = await conn.fetchval(
                    """
                    UPDATE technical_tests
                    SET status = 'completed', score = $2, test_answers = $3,
                        completed_at = $4, submitted_late = $5
                    WHERE application_id = $1 AND status = 'pending'
                    RETURNING id
                    """,
                    application_id, score, test_answers, completed_at, submitted_late
                )
                if test_id is None:
                    return False

                updated = await conn.fetchval(
                    """
                    UPDATE applications
                    SET status = $2, updated_at = $3
                    WHERE id = $1 AND status = 'pending'
                    RETURNING id
                    """,
                    application_id, application_status, completed_at
                )
                if updated is None:
                    # Raising inside the transaction rolls the test update back
                    raise InvalidStateError(
                        "Application is no longer pending",
                        details={"application_id": str(application_id)},
                    )

                return True
