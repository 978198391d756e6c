"""
Application service - the score-gated admission of candidates to a job offer.

A new application is scored against the job; from the admission threshold up
it stays pending with a generated technical test, below it is rejected at once.
"""
import logging
import uuid
from datetime import datetime, timezone

from cv_scorer import CVAnalysis, CVScorer
from cv_scorer.matcher import contains_keyword
from quiz_generator import CandidateSkillProfile, QuizGenerator

from hiring import config
from hiring.auth.dependencies import Identity
from hiring.exceptions import ConflictError, NotFoundError, PreconditionFailedError
from hiring.models import (
    AnalysisSummary,
    ApplicationStatus,
    ApplyResponse,
    CandidateApplicationResponse,
    CandidateProfile,
    JobRequirement,
)
from hiring.repositories import ApplicationRepository, CVRepository, JobOfferRepository

logger = logging.getLogger(__name__)

PROJECT_KEYWORDS = ["project", "projects", "projet", "projets"]
MAX_PROJECT_LINES = 5


def extract_project_lines(cv_text: str) -> list[str]:
    """CV lines that mention a project, used to personalise the test."""
    lines = []
    for line in cv_text.splitlines():
        stripped = line.strip(" \t-*•")
        if stripped and any(contains_keyword(stripped, k) for k in PROJECT_KEYWORDS):
            lines.append(stripped[:200])
        if len(lines) >= MAX_PROJECT_LINES:
            break
    return lines


def build_skill_profile(cv_text: str, analysis: CVAnalysis) -> CandidateSkillProfile:
    return CandidateSkillProfile(
        skills=list(analysis.cv_skills),
        experience=analysis.experience,
        projects=extract_project_lines(cv_text),
        matching_skills=list(analysis.matching_skills),
    )


class ApplicationService:
    """Service for application operations."""

    def __init__(
        self,
        job_repo: JobOfferRepository,
        cv_repo: CVRepository,
        app_repo: ApplicationRepository,
        scorer: CVScorer,
        generator: QuizGenerator,
    ):
        self.job_repo = job_repo
        self.cv_repo = cv_repo
        self.app_repo = app_repo
        self.scorer = scorer
        self.generator = generator

    async def apply_to_job(self, identity: Identity, job_offer_id: uuid.UUID) -> ApplyResponse:
        """
        Apply the candidate to a job offer.

        Raises:
            NotFoundError: If the job offer doesn't exist
            PreconditionFailedError: If the offer is closed or the candidate has no CV
            ConflictError: If the candidate already applied
        """
        job = await self.job_repo.get_by_id(job_offer_id)
        if not job:
            raise NotFoundError("Job offer", str(job_offer_id))

        if not job["is_active"]:
            raise PreconditionFailedError("This job offer is no longer active")
        deadline = job["deadline"]
        if deadline is not None and deadline < datetime.now(timezone.utc):
            raise PreconditionFailedError(
                "The application deadline for this job offer has passed",
                details={"deadline": deadline.isoformat()},
            )

        existing = await self.app_repo.get_for_candidate_and_job(identity.user_id, job_offer_id)
        if existing:
            raise ConflictError(
                "You have already applied to this job offer",
                details={"application_id": str(existing["id"])},
            )

        cv = await self.cv_repo.get_latest_document(identity.user_id)
        if not cv:
            raise PreconditionFailedError("Please upload your CV before applying")

        requirement = JobRequirement.from_record(job)
        candidate = CandidateProfile.from_record(cv)
        analysis = await self.scorer.analyze(candidate.cv_text, requirement)

        admitted = analysis.score >= config.ADMISSION_THRESHOLD
        questions = None
        if admitted:
            status = ApplicationStatus.PENDING
            skill_profile = build_skill_profile(candidate.cv_text, analysis)
            generated = await self.generator.generate(requirement, skill_profile, analysis.experience_level)
            questions = [q.model_dump(mode="json") for q in generated]
        else:
            status = ApplicationStatus.REJECTED

        logger.info(
            f"Application decision for candidate {identity.user_id} on '{requirement.title}': "
            f"score={analysis.score} threshold={config.ADMISSION_THRESHOLD} -> {status.value}"
            f"{' (degraded scoring)' if analysis.degraded else ''}"
        )

        app_row = await self.app_repo.create(
            candidate_id=identity.user_id,
            job_offer_id=job_offer_id,
            status=status.value,
            cv_score=analysis.score,
            job_title=requirement.title,
            analysis=analysis.model_dump(mode="json"),
            questions=questions,
            time_limit=config.TEST_TIME_LIMIT_MINUTES if admitted else None,
        )

        if admitted:
            message = "Application submitted. Your CV passed the first screening: take the technical test to continue."
        else:
            message = "Application submitted. Unfortunately your profile does not match this job offer closely enough."

        return ApplyResponse(
            message=message,
            application_id=str(app_row["id"]),
            status=status.value,
            cv_score=analysis.score,
            has_test=admitted,
            analysis=AnalysisSummary(
                matching_skills=analysis.matching_skills,
                missing_skills=analysis.missing_skills,
                recommendations=analysis.recommendations,
                experience_level=analysis.experience_level,
            ),
        )

    async def list_for_candidate(self, identity: Identity) -> list[CandidateApplicationResponse]:
        rows = await self.app_repo.list_for_candidate(identity.user_id)
        return [
            CandidateApplicationResponse(
                id=str(row["id"]),
                job_offer_id=str(row["job_offer_id"]),
                job_title=row["job_title"],
                company_name=row["company_name"],
                status=row["status"],
                cv_score=row["cv_score"],
                has_test=row["test_id"] is not None,
                test_status=row["test_status"],
                test_score=row["test_score"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
