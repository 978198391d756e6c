"""
Pytest fixtures for the hiring backend tests.

The API is exercised in-process through httpx's ASGI transport, with the
repository dependencies overridden by in-memory fakes and Gemini replaced by a
stub client (or no client at all, which forces the fallback question bank).
"""
import uuid

import httpx
import pytest

from hiring.auth import config as auth_config
from hiring import dependencies
from cv_scorer import CVScorer
from quiz_generator import QuizGenerator

from fakes import (
    BACKEND_SKILLS,
    FakeApplicationRepository,
    FakeCompanyRepository,
    FakeCVRepository,
    FakeCVStorage,
    FakeJobOfferRepository,
    FakePool,
    FakeStore,
    FakeTechnicalTestRepository,
    auth_headers,
)

@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setattr(auth_config, "JWT_SECRET", "test-secret")
    monkeypatch.setattr(auth_config, "JWT_AUDIENCE", "")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def generator() -> QuizGenerator:
    """No client configured: every test is built from the fallback bank."""
    return QuizGenerator(client=None)


@pytest.fixture
def cv_storage() -> FakeCVStorage:
    return FakeCVStorage()


@pytest.fixture
def api(store, generator, cv_storage):
    """The FastAPI app wired to in-memory repositories."""
    from app import app

    overrides = {
        dependencies.get_pool: lambda: FakePool(),
        dependencies.get_company_repo: lambda: FakeCompanyRepository(store),
        dependencies.get_job_offer_repo: lambda: FakeJobOfferRepository(store),
        dependencies.get_cv_repo: lambda: FakeCVRepository(store),
        dependencies.get_application_repo: lambda: FakeApplicationRepository(store),
        dependencies.get_technical_test_repo: lambda: FakeTechnicalTestRepository(store),
        dependencies.get_cv_scorer: lambda: CVScorer(),
        dependencies.get_quiz_generator: lambda: generator,
        dependencies.get_cv_storage: lambda: cv_storage,
    }
    app.dependency_overrides.update(overrides)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(api):
    """Async HTTP client for API calls."""
    transport = httpx.ASGITransport(app=api)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def candidate_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def owner_headers(owner_id) -> dict:
    return auth_headers(owner_id, "company_owner")


@pytest.fixture
def candidate_headers(candidate_id) -> dict:
    return auth_headers(candidate_id, "candidate", email="jane@example.com", name="Jane Doe")


@pytest.fixture
async def company(store, owner_id) -> dict:
    return await FakeCompanyRepository(store).create(owner_id, "Acme Corp", "Lyon", "Software")


@pytest.fixture
async def job_offer(store, company, owner_id) -> dict:
    """An active backend job requiring ten skills."""
    return await FakeJobOfferRepository(store).create(
        company_id=company["id"],
        recruiter_id=owner_id,
        title="Backend Engineer",
        description="Build and run our Python services.",
        skills=BACKEND_SKILLS,
    )

