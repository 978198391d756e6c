"""
Technical test service - serving, grading and single-attempt submission.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from quiz_generator import Question

from hiring import config
from hiring.auth.dependencies import Identity
from hiring.exceptions import (
    AlreadyCompletedError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    TestExpiredError,
)
from hiring.models import (
    ApplicationStatus,
    PublicQuestion,
    QuestionResult,
    SubmitTestResponse,
    TechnicalTestResponse,
    TechnicalTestResultResponse,
    TechnicalTestStatus,
    UserRole,
)
from hiring.repositories import ApplicationRepository, CompanyRepository, TechnicalTestRepository
from hiring.services.grading import grade_answers

logger = logging.getLogger(__name__)


class TechnicalTestService:
    """Service for technical test operations."""

    def __init__(
        self,
        app_repo: ApplicationRepository,
        test_repo: TechnicalTestRepository,
        company_repo: CompanyRepository,
        enforce_deadline: bool = config.ENFORCE_TEST_DEADLINE,
    ):
        self.app_repo = app_repo
        self.test_repo = test_repo
        self.company_repo = company_repo
        self.enforce_deadline = enforce_deadline

    async def _get_owned_application(self, identity: Identity, application_id: uuid.UUID):
        application = await self.app_repo.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", str(application_id))
        if application["candidate_id"] != identity.user_id:
            raise ForbiddenError("This application belongs to another candidate")
        return application

    async def _get_test(self, application_id: uuid.UUID):
        test = await self.test_repo.get_by_application(application_id)
        if not test:
            raise NotFoundError("Technical test", str(application_id))
        return test

    async def get_test(self, identity: Identity, application_id: uuid.UUID) -> TechnicalTestResponse:
        """
        Serve the questions without answers. The first fetch starts the clock.

        Raises:
            NotFoundError: If the application or its test doesn't exist
            ForbiddenError: If the application belongs to someone else
            AlreadyCompletedError: If the test was already submitted
        """
        application = await self._get_owned_application(identity, application_id)
        test = await self._get_test(application_id)

        if test["status"] == TechnicalTestStatus.COMPLETED.value:
            raise AlreadyCompletedError(str(application_id))

        if test["started_at"] is None:
            started_at = datetime.now(timezone.utc)
            expires_at = started_at + timedelta(minutes=test["time_limit"])
            test = await self.test_repo.mark_started(application_id, started_at, expires_at)
            logger.info(f"Technical test started for application {application_id}, expires at {expires_at.isoformat()}")

        return TechnicalTestResponse(
            application_id=str(application_id),
            job_title=application["job_title"],
            company_name=application["company_name"],
            status=test["status"],
            time_limit=test["time_limit"],
            started_at=test["started_at"],
            expires_at=test["expires_at"],
            questions=[
                PublicQuestion(
                    id=q["id"],
                    question=q["question"],
                    options=q["options"],
                    difficulty=q["difficulty"],
                    skill=q["skill"],
                )
                for q in test["questions"]
            ],
        )

    async def submit_test(
        self,
        identity: Identity,
        application_id: uuid.UUID,
        answers: list[Any],
    ) -> SubmitTestResponse:
        """
        Grade the answers and decide the application. Accepted at most once.

        Raises:
            NotFoundError: If the application or its test doesn't exist
            ForbiddenError: If the application belongs to someone else
            AlreadyCompletedError: If the test was already submitted
            InvalidStateError: If the application is already accepted or rejected
            TestExpiredError: If the deadline passed and deadlines are enforced
        """
        application = await self._get_owned_application(identity, application_id)
        test = await self._get_test(application_id)

        if test["status"] == TechnicalTestStatus.COMPLETED.value:
            raise AlreadyCompletedError(str(application_id))
        if ApplicationStatus(application["status"]).is_terminal:
            raise InvalidStateError(
                f"Application is already {application['status']}",
                details={"application_id": str(application_id)},
            )

        now = datetime.now(timezone.utc)
        expires_at = test["expires_at"]
        submitted_late = expires_at is not None and now > expires_at
        if submitted_late:
            if self.enforce_deadline:
                raise TestExpiredError(str(application_id), details={"expires_at": expires_at.isoformat()})
            logger.warning(f"Late test submission for application {application_id} (expired {expires_at.isoformat()})")

        questions = [Question.model_validate(q) for q in test["questions"]]
        grade = grade_answers(questions, answers)

        if grade.score >= config.PASS_THRESHOLD:
            new_status = ApplicationStatus.ACCEPTED
        else:
            new_status = ApplicationStatus.REJECTED

        completed = await self.test_repo.complete(
            application_id=application_id,
            score=grade.score,
            test_answers=grade.results,
            completed_at=now,
            submitted_late=submitted_late,
            application_status=new_status.value,
        )
        if not completed:
            raise AlreadyCompletedError(str(application_id))

        logger.info(
            f"Technical test completed for application {application_id}: "
            f"{grade.correct_count}/{grade.total_questions} ({grade.score:.1f}%) -> {new_status.value}"
        )

        return SubmitTestResponse(
            score=grade.rounded_score,
            correct_answers=grade.correct_count,
            total_questions=grade.total_questions,
            application_status=new_status.value,
            submitted_late=submitted_late,
            detailed_results=[QuestionResult(**r) for r in grade.results],
        )

    async def get_result(self, identity: Identity, application_id: uuid.UUID) -> TechnicalTestResultResponse:
        """
        Graded result for the candidate, the company owner or a linked recruiter.

        Raises:
            InvalidStateError: If the test hasn't been submitted yet
        """
        application = await self.app_repo.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", str(application_id))

        if identity.is_candidate:
            allowed = application["candidate_id"] == identity.user_id
        elif identity.role == UserRole.COMPANY_OWNER:
            allowed = application["company_owner_id"] == identity.user_id
        else:
            allowed = await self.company_repo.is_recruiter(application["company_id"], identity.user_id)
        if not allowed:
            raise ForbiddenError("You don't have access to this application")

        test = await self._get_test(application_id)
        if test["status"] != TechnicalTestStatus.COMPLETED.value:
            raise InvalidStateError(
                "Technical test has not been completed yet",
                details={"application_id": str(application_id)},
            )

        return TechnicalTestResultResponse(
            application_id=str(application_id),
            status=test["status"],
            score=test["score"],
            completed_at=test["completed_at"],
            submitted_late=test["submitted_late"],
            application_status=application["status"],
            detailed_results=[QuestionResult(**r) for r in test["test_answers"] or []],
        )
