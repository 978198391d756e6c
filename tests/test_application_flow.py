"""
End-to-end tests of the score-gated application flow:
apply -> CV scoring -> technical test -> grading -> final decision.
"""
import asyncio
import uuid
from datetime import datetime, timezone

import httpx

from hiring import config, dependencies
from quiz_generator import QuizGenerator

from fakes import (
    STRONG_CV,
    WEAK_CV,
    FakeApplicationRepository,
    FakeTechnicalTestRepository,
    Rendezvous,
    StubGenAIClient,
    add_cv,
    auth_headers,
)


async def apply(client, job_offer, headers):
    return await client.post(f"/job-offers/{job_offer['id']}/apply", headers=headers)


async def admitted_application(client, store, job_offer, candidate_id, candidate_headers) -> uuid.UUID:
    await add_cv(store, candidate_id, STRONG_CV)
    response = await apply(client, job_offer, candidate_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    return uuid.UUID(response.json()["application_id"])


def answers_with(store, application_id: uuid.UUID, correct: int) -> list[int]:
    """The first `correct` answers right, the rest wrong."""
    key = [q["correct_answer"] for q in store.technical_tests[application_id]["questions"]]
    return [answer if i < correct else (answer + 1) % 4 for i, answer in enumerate(key)]


# =============================================================================
# Applying
# =============================================================================

class TestApply:
    async def test_strong_cv_is_admitted_with_a_test(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, STRONG_CV)

        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "pending"
        assert data["cv_score"] == 82
        assert data["has_test"] is True
        assert data["analysis"]["missing_skills"] == ["GraphQL"]
        assert data["analysis"]["experience_level"] == "Mid-level"

        application_id = uuid.UUID(data["application_id"])
        test = store.technical_tests[application_id]
        assert len(test["questions"]) == 10
        assert test["time_limit"] == 30
        assert test["status"] == "pending"
        assert test["started_at"] is None
        assert store.cv_analyses[(candidate_id, job_offer["id"])]["score"] == 82

    async def test_weak_cv_is_rejected_without_a_test(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, WEAK_CV)

        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "rejected"
        assert data["cv_score"] == 21
        assert data["has_test"] is False
        assert store.technical_tests == {}
        assert store.cv_analyses[(candidate_id, job_offer["id"])]["analysis"]["matching_skills"] == ["Python"]

    async def test_duplicate_application(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, STRONG_CV)
        first = await apply(client, job_offer, candidate_headers)

        second = await apply(client, job_offer, candidate_headers)

        assert second.status_code == 409
        assert second.json()["details"]["application_id"] == first.json()["application_id"]
        assert len(store.applications) == 1

    async def test_no_cv(self, client, store, job_offer, candidate_headers):
        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 400
        assert "CV" in response.json()["error"]
        assert store.applications == {}

    async def test_inactive_job_offer(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, STRONG_CV)
        store.job_offers[job_offer["id"]]["is_active"] = False

        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 400
        assert store.applications == {}

    async def test_deadline_passed(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, STRONG_CV)
        store.job_offers[job_offer["id"]]["deadline"] = datetime(2020, 1, 1, tzinfo=timezone.utc)

        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 400
        assert "deadline" in response.json()["details"]

    async def test_unknown_job_offer(self, client, candidate_headers):
        response = await client.post(f"/job-offers/{uuid.uuid4()}/apply", headers=candidate_headers)

        assert response.status_code == 404
        assert set(response.json()) == {"error", "details"}

    async def test_malformed_job_offer_id(self, client, candidate_headers):
        response = await client.post("/job-offers/not-a-uuid/apply", headers=candidate_headers)
        assert response.status_code == 400

    async def test_latest_cv_is_scored(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, WEAK_CV)
        await add_cv(store, candidate_id, STRONG_CV)

        response = await apply(client, job_offer, candidate_headers)

        assert response.json()["cv_score"] == 82

    async def test_slow_generation_still_yields_a_test(self, api, client, store, job_offer, candidate_id, candidate_headers):
        slow = QuizGenerator(client=StubGenAIClient(text="[]", delay=1.0), timeout_seconds=0.01)
        api.dependency_overrides[dependencies.get_quiz_generator] = lambda: slow
        await add_cv(store, candidate_id, STRONG_CV)

        response = await apply(client, job_offer, candidate_headers)

        assert response.status_code == 200
        application_id = uuid.UUID(response.json()["application_id"])
        questions = store.technical_tests[application_id]["questions"]
        assert len(questions) == 10
        # Mid-level fallback answer for the experience question
        assert questions[0]["correct_answer"] == 2

    async def test_failed_analysis_write_leaves_no_application(
        self, api, client, store, job_offer, candidate_id, candidate_headers,
    ):
        await add_cv(store, candidate_id, STRONG_CV)
        store.failing_tables.add("cv_analyses")
        transport = httpx.ASGITransport(app=api, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as failing_client:
            response = await apply(failing_client, job_offer, candidate_headers)

        assert response.status_code == 500
        assert store.applications == {}
        assert store.technical_tests == {}
        assert store.cv_analyses == {}

        store.failing_tables.clear()
        retry = await apply(client, job_offer, candidate_headers)

        assert retry.status_code == 200
        application_id = uuid.UUID(retry.json()["application_id"])
        assert store.cv_analyses[(candidate_id, job_offer["id"])]["application_id"] == application_id

    async def test_concurrent_applications_store_one(self, api, client, store, job_offer, candidate_id, candidate_headers):
        rendezvous = Rendezvous(parties=2)
        api.dependency_overrides[dependencies.get_application_repo] = (
            lambda: FakeApplicationRepository(store, rendezvous=rendezvous)
        )
        await add_cv(store, candidate_id, STRONG_CV)

        responses = await asyncio.gather(
            apply(client, job_offer, candidate_headers),
            apply(client, job_offer, candidate_headers),
        )

        assert sorted(r.status_code for r in responses) == [200, 409]
        winner = next(r for r in responses if r.status_code == 200)
        application_id = uuid.UUID(winner.json()["application_id"])
        assert list(store.applications) == [application_id]
        assert list(store.technical_tests) == [application_id]
        assert store.cv_analyses[(candidate_id, job_offer["id"])]["application_id"] == application_id

    async def test_candidate_applications(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await client.get("/candidate/applications", headers=candidate_headers)

        assert response.status_code == 200
        [entry] = response.json()
        assert entry["id"] == str(application_id)
        assert entry["job_title"] == "Backend Engineer"
        assert entry["company_name"] == "Acme Corp"
        assert entry["has_test"] is True
        assert entry["test_status"] == "pending"

    async def test_cv_score_is_frozen(self, client, store, job_offer, candidate_id, candidate_headers):
        await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await add_cv(store, candidate_id, WEAK_CV)

        response = await client.get("/candidate/applications", headers=candidate_headers)

        assert response.json()[0]["cv_score"] == 82


# =============================================================================
# Taking the test
# =============================================================================

class TestTechnicalTest:
    async def test_questions_hide_answers(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await client.get(f"/applications/{application_id}/test", headers=candidate_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["job_title"] == "Backend Engineer"
        assert data["time_limit"] == 30
        assert len(data["questions"]) == 10
        for question in data["questions"]:
            assert "correct_answer" not in question
            assert "explanation" not in question
            assert len(question["options"]) == 4

    async def test_first_fetch_starts_the_clock(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        first = await client.get(f"/applications/{application_id}/test", headers=candidate_headers)
        second = await client.get(f"/applications/{application_id}/test", headers=candidate_headers)

        assert first.json()["expires_at"] is not None
        assert first.json()["started_at"] == second.json()["started_at"]
        assert first.json()["expires_at"] == second.json()["expires_at"]
        test = store.technical_tests[application_id]
        assert (test["expires_at"] - test["started_at"]).total_seconds() == 30 * 60

    async def test_other_candidate_is_forbidden(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        intruder = auth_headers(uuid.uuid4(), "candidate")

        get_response = await client.get(f"/applications/{application_id}/test", headers=intruder)
        post_response = await client.post(
            f"/applications/{application_id}/test", json={"answers": [0] * 10}, headers=intruder,
        )

        assert get_response.status_code == 403
        assert post_response.status_code == 403
        assert store.technical_tests[application_id]["status"] == "pending"

    async def test_rejected_application_has_no_test(self, client, store, job_offer, candidate_id, candidate_headers):
        await add_cv(store, candidate_id, WEAK_CV)
        application_id = (await apply(client, job_offer, candidate_headers)).json()["application_id"]

        response = await client.get(f"/applications/{application_id}/test", headers=candidate_headers)

        assert response.status_code == 404

    async def test_unknown_application(self, client, candidate_headers):
        response = await client.get(f"/applications/{uuid.uuid4()}/test", headers=candidate_headers)
        assert response.status_code == 404


# =============================================================================
# Submitting
# =============================================================================

class TestSubmitTest:
    async def submit(self, client, application_id, answers, headers):
        return await client.post(f"/applications/{application_id}/test", json={"answers": answers}, headers=headers)

    async def test_perfect_score_accepts(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 100
        assert data["correct_answers"] == 10
        assert data["total_questions"] == 10
        assert data["application_status"] == "accepted"
        assert data["submitted_late"] is False
        assert len(data["detailed_results"]) == 10
        assert store.applications[application_id]["status"] == "accepted"

    async def test_seventy_percent_accepts(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await self.submit(client, application_id, answers_with(store, application_id, 7), candidate_headers)

        assert response.json()["score"] == 70
        assert response.json()["application_status"] == "accepted"
        assert store.technical_tests[application_id]["score"] == 70

    async def test_fifty_percent_rejects(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await self.submit(client, application_id, answers_with(store, application_id, 5), candidate_headers)

        assert response.json()["score"] == 50
        assert response.json()["application_status"] == "rejected"
        assert store.applications[application_id]["status"] == "rejected"

    async def test_pass_threshold_is_inclusive(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await self.submit(client, application_id, answers_with(store, application_id, 6), candidate_headers)

        assert response.json()["score"] == 60
        assert response.json()["application_status"] == "accepted"

    async def test_short_answer_list_counts_missing_as_wrong(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        answers = answers_with(store, application_id, 10)[:6] + [None]

        response = await self.submit(client, application_id, answers, candidate_headers)

        data = response.json()
        assert data["correct_answers"] == 6
        assert data["detailed_results"][6]["user_answer"] == -1
        assert data["detailed_results"][9]["user_answer"] == -1

    async def test_second_submission_is_refused(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await self.submit(client, application_id, answers_with(store, application_id, 5), candidate_headers)

        retry = await self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers)

        assert retry.status_code == 409
        assert store.technical_tests[application_id]["score"] == 50
        assert store.applications[application_id]["status"] == "rejected"

    async def test_concurrent_submissions_grade_once(
        self, api, client, store, job_offer, candidate_id, candidate_headers,
    ):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        rendezvous = Rendezvous(parties=2)
        api.dependency_overrides[dependencies.get_technical_test_repo] = (
            lambda: FakeTechnicalTestRepository(store, rendezvous=rendezvous)
        )

        responses = await asyncio.gather(
            self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers),
            self.submit(client, application_id, answers_with(store, application_id, 5), candidate_headers),
        )

        assert sorted(r.status_code for r in responses) == [200, 409]
        winner = next(r for r in responses if r.status_code == 200).json()
        test = store.technical_tests[application_id]
        assert test["status"] == "completed"
        assert test["score"] == winner["score"]
        assert store.applications[application_id]["status"] == winner["application_status"]

    async def test_boolean_answers_count_as_unanswered(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await self.submit(client, application_id, [True] * 10, candidate_headers)

        assert response.status_code == 200
        data = response.json()
        assert [r["user_answer"] for r in data["detailed_results"]] == [-1] * 10
        assert data["correct_answers"] == 0
        assert data["application_status"] == "rejected"

    async def test_completed_test_cannot_be_fetched(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers)

        response = await client.get(f"/applications/{application_id}/test", headers=candidate_headers)

        assert response.status_code == 409

    async def test_late_submission_is_flagged(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await client.get(f"/applications/{application_id}/test", headers=candidate_headers)
        store.technical_tests[application_id]["expires_at"] = datetime(2020, 1, 1, tzinfo=timezone.utc)

        response = await self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers)

        assert response.status_code == 200
        assert response.json()["submitted_late"] is True
        assert store.technical_tests[application_id]["submitted_late"] is True

    async def test_late_submission_refused_when_enforced(
        self, monkeypatch, client, store, job_offer, candidate_id, candidate_headers,
    ):
        monkeypatch.setattr(config, "ENFORCE_TEST_DEADLINE", True)
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await client.get(f"/applications/{application_id}/test", headers=candidate_headers)
        store.technical_tests[application_id]["expires_at"] = datetime(2020, 1, 1, tzinfo=timezone.utc)

        response = await self.submit(client, application_id, answers_with(store, application_id, 10), candidate_headers)

        assert response.status_code == 410
        assert store.technical_tests[application_id]["status"] == "pending"
        assert store.applications[application_id]["status"] == "pending"

    async def test_decided_application_refuses_submission(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        store.applications[application_id]["status"] = "rejected"

        response = await self.submit(client, application_id, [0] * 10, candidate_headers)

        assert response.status_code == 409
        assert store.technical_tests[application_id]["status"] == "pending"


# =============================================================================
# Results
# =============================================================================

class TestTestResult:
    async def test_result_before_submission(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        response = await client.get(f"/applications/{application_id}/test/result", headers=candidate_headers)

        assert response.status_code == 409

    async def test_result_for_candidate_and_company(
        self, client, store, job_offer, company, candidate_id, candidate_headers, owner_headers,
    ):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)
        await client.post(
            f"/applications/{application_id}/test",
            json={"answers": answers_with(store, application_id, 8)},
            headers=candidate_headers,
        )
        recruiter_id = uuid.uuid4()
        store.company_recruiters.add((company["id"], recruiter_id))

        for headers in (candidate_headers, owner_headers, auth_headers(recruiter_id, "recruiter")):
            response = await client.get(f"/applications/{application_id}/test/result", headers=headers)
            assert response.status_code == 200
            data = response.json()
            assert data["score"] == 80
            assert data["application_status"] == "accepted"
            assert len(data["detailed_results"]) == 10

    async def test_result_hidden_from_outsiders(self, client, store, job_offer, candidate_id, candidate_headers):
        application_id = await admitted_application(client, store, job_offer, candidate_id, candidate_headers)

        for role in ("candidate", "company_owner", "recruiter"):
            response = await client.get(
                f"/applications/{application_id}/test/result",
                headers=auth_headers(uuid.uuid4(), role),
            )
            assert response.status_code == 403
