import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from google import genai

from cv_scorer import CVScorer
from quiz_generator import QuizGenerator

from hiring import config
from hiring.database import get_db_pool, close_db_pool, run_schema_migrations
from hiring.dependencies import set_components
from hiring.exceptions import register_exception_handlers
from hiring.routers import (
    health_router,
    companies_router,
    job_offers_router,
    applications_router,
    cv_router,
)
from hiring.services import LocalCVStorage

logger = logging.getLogger(__name__)


def create_quiz_generator() -> QuizGenerator:
    """Gemini-backed generator, or fallback-only when no API key is configured."""
    client = None
    if config.GOOGLE_API_KEY:
        client = genai.Client(api_key=config.GOOGLE_API_KEY)
        logger.info(f"Test generation with {config.GEMINI_MODEL} (timeout {config.GENERATION_TIMEOUT_SECONDS}s)")
    else:
        logger.warning("GOOGLE_API_KEY not set: technical tests will use the fallback question bank")
    return QuizGenerator(
        client=client,
        model=config.GEMINI_MODEL,
        timeout_seconds=config.GENERATION_TIMEOUT_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - database pool, migrations and shared components."""
    pool = await get_db_pool()
    await run_schema_migrations(pool)
    set_components(
        scorer=CVScorer(),
        generator=create_quiz_generator(),
        storage=LocalCVStorage(config.CV_UPLOAD_DIR),
    )
    logger.info(f"Hiring backend started ({config.ENVIRONMENT})")
    yield
    # Cleanup on shutdown
    await close_db_pool()


app = FastAPI(title="Hiring Backend", lifespan=lifespan)

# CORS middleware for cross-origin requests from the job board
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(companies_router)
app.include_router(job_offers_router)
app.include_router(applications_router)
app.include_router(cv_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
