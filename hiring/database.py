"""
Database connection management and migrations.
"""
import json
import asyncpg
import logging
from typing import Optional
from hiring.config import DATABASE_URL

logger = logging.getLogger(__name__)

# Global connection pool
_db_pool: Optional[asyncpg.Pool] = None


async def _init_connection(conn: asyncpg.Connection):
    """Decode JSONB columns (questions, test answers) into Python objects."""
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


async def get_db_pool() -> asyncpg.Pool:
    """Get or create the database connection pool.

    - setup callback validates connections on acquire (like SQLAlchemy pool_pre_ping)
    - init callback registers the JSONB codec once per connection
    """
    global _db_pool
    if _db_pool is None:
        if not DATABASE_URL:
            raise RuntimeError("DATABASE_URL environment variable is required")

        # Convert SQLAlchemy URL to asyncpg format
        raw_url = DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")

        async def setup_connection(conn):
            """Validate connection on acquire - equivalent to pool_pre_ping."""
            await conn.execute("SELECT 1")

        _db_pool = await asyncpg.create_pool(
            raw_url,
            min_size=2,
            max_size=10,
            command_timeout=60,
            max_inactive_connection_lifetime=300.0,
            init=_init_connection,
            setup=setup_connection,
        )
        logger.info("Database connection pool created (min=2, max=10, idle_lifetime=300s)")
    return _db_pool


async def close_db_pool():
    """Close the database connection pool."""
    global _db_pool
    if _db_pool is not None:
        await _db_pool.close()
        _db_pool = None
        logger.info("Database connection pool closed")


async def run_schema_migrations(pool: asyncpg.Pool):
    """Create the tables the service needs if they don't exist yet."""
    try:
        await pool.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS companies (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                owner_id UUID NOT NULL,
                name TEXT NOT NULL,
                location TEXT,
                industry TEXT,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            );
        """)
        await pool.execute("CREATE INDEX IF NOT EXISTS idx_companies_owner ON companies(owner_id);")

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS company_recruiters (
                company_id UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
                recruiter_id UUID NOT NULL,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                PRIMARY KEY (company_id, recruiter_id)
            );
        """)
        logger.info("Company tables ensured")

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS job_offers (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                company_id UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
                recruiter_id UUID NOT NULL,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                skills TEXT[] NOT NULL DEFAULT '{}',
                location TEXT,
                salary TEXT,
                deadline TIMESTAMPTZ,
                is_active BOOLEAN NOT NULL DEFAULT TRUE,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            );
        """)
        await pool.execute("CREATE INDEX IF NOT EXISTS idx_job_offers_company ON job_offers(company_id);")
        logger.info("Job offer table ensured")

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS cv_documents (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                candidate_id UUID NOT NULL,
                candidate_name TEXT,
                candidate_email TEXT,
                file_name TEXT NOT NULL,
                file_path TEXT NOT NULL,
                content_type TEXT NOT NULL,
                file_size INTEGER NOT NULL,
                content_text TEXT NOT NULL DEFAULT '',
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            );
        """)
        await pool.execute(
            "CREATE INDEX IF NOT EXISTS idx_cv_documents_candidate ON cv_documents(candidate_id, created_at DESC);"
        )

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS cv_analyses (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                candidate_id UUID NOT NULL,
                job_offer_id UUID NOT NULL REFERENCES job_offers(id) ON DELETE CASCADE,
                application_id UUID,
                job_title TEXT NOT NULL,
                score INTEGER NOT NULL,
                analysis JSONB NOT NULL,
                analyzed_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                UNIQUE (candidate_id, job_offer_id)
            );
        """)
        logger.info("CV tables ensured")

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS applications (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                candidate_id UUID NOT NULL,
                job_offer_id UUID NOT NULL REFERENCES job_offers(id) ON DELETE CASCADE,
                status TEXT NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'accepted', 'rejected')),
                cv_score INTEGER NOT NULL,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                UNIQUE (candidate_id, job_offer_id)
            );
        """)

        await pool.execute("""
            CREATE TABLE IF NOT EXISTS technical_tests (
                id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                application_id UUID NOT NULL UNIQUE REFERENCES applications(id) ON DELETE CASCADE,
                questions JSONB NOT NULL,
                status TEXT NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'completed')),
                score DOUBLE PRECISION,
                time_limit INTEGER NOT NULL,
                started_at TIMESTAMPTZ,
                expires_at TIMESTAMPTZ,
                completed_at TIMESTAMPTZ,
                test_answers JSONB,
                submitted_late BOOLEAN NOT NULL DEFAULT FALSE,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            );
        """)
        logger.info("Application and technical test tables ensured")

    except Exception as e:
        logger.error(f"Schema migration failed: {e}")
        raise
