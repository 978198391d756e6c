"""
Tests for the CV Scoring Service.
"""
import pytest

from cv_scorer import (
    CVScorer,
    FALLBACK_SCORE,
    experience_level_for,
    neutral_score,
    score_for_ratio,
)
from hiring.models import JobRequirement

from fakes import BACKEND_SKILLS, STRONG_CV, WEAK_CV


def backend_job(skills=None) -> JobRequirement:
    return JobRequirement(
        title="Backend Engineer",
        description="Build and run our Python services.",
        required_skills=BACKEND_SKILLS if skills is None else skills,
    )


class TestScoreBands:
    @pytest.mark.parametrize("ratio,expected", [
        (1.0, 90),
        (0.9, 82),
        (0.8, 75),
        (0.7, 67),
        (0.6, 60),
        (0.4, 40),
        (0.1, 21),
        (0.0, 15),
    ])
    def test_band_interpolation(self, ratio, expected):
        assert score_for_ratio(ratio) == expected

    def test_scores_stay_inside_their_band(self):
        for step in range(101):
            ratio = step / 100
            score = score_for_ratio(ratio)
            if ratio >= 0.8:
                assert 75 <= score <= 90
            elif ratio >= 0.6:
                assert 60 <= score <= 74
            elif ratio >= 0.4:
                assert 40 <= score <= 59
            else:
                assert 15 <= score <= 39

    def test_out_of_range_ratio_is_clamped(self):
        assert score_for_ratio(1.5) == 90
        assert score_for_ratio(-0.2) == 15

    def test_neutral_score(self):
        assert neutral_score(0) == 20
        assert neutral_score(5) == 30
        assert neutral_score(50) == 40


class TestExperienceLevel:
    @pytest.mark.parametrize("score,level", [
        (95, "Senior"),
        (90, "Senior"),
        (89, "Mid-level"),
        (80, "Mid-level"),
        (79, "Junior"),
        (15, "Junior"),
    ])
    def test_thresholds(self, score, level):
        assert experience_level_for(score) == level


class TestCVScorer:
    async def test_strong_cv(self):
        analysis = await CVScorer().analyze(STRONG_CV, backend_job())

        assert analysis.score == 82
        assert analysis.missing_skills == ["GraphQL"]
        assert len(analysis.matching_skills) == 9
        assert analysis.experience_level == "Mid-level"
        assert analysis.degraded is False
        assert analysis.summary.startswith("Strong match")
        assert analysis.experience.startswith("Professional experience")
        assert analysis.education.startswith("Education")

    async def test_weak_cv(self):
        analysis = await CVScorer().analyze(WEAK_CV, backend_job())

        assert analysis.score == 21
        assert analysis.matching_skills == ["Python"]
        assert analysis.experience_level == "Junior"
        assert "Build experience with Django" in analysis.recommendations
        assert analysis.weaknesses

    async def test_no_required_skills_uses_neutral_score(self):
        analysis = await CVScorer().analyze(STRONG_CV, backend_job(skills=[]))

        assert 20 <= analysis.score <= 40
        assert analysis.score == neutral_score(len(analysis.cv_skills))
        assert analysis.matching_skills == []
        assert analysis.missing_skills == []

    async def test_empty_cv(self):
        analysis = await CVScorer().analyze("", backend_job())

        assert analysis.score == 15
        assert analysis.missing_skills == BACKEND_SKILLS
        assert analysis.cv_skills == []
        assert "List your technical and professional skills explicitly in the CV" in analysis.recommendations

    async def test_same_input_same_score(self):
        scorer = CVScorer()
        first = await scorer.analyze(STRONG_CV, backend_job())
        second = await scorer.analyze(STRONG_CV, backend_job())
        assert first == second

    async def test_matcher_failure_falls_back(self):
        class BrokenMatcher:
            def match(self, *args, **kwargs):
                raise RuntimeError("taxonomy unavailable")

        analysis = await CVScorer(matcher=BrokenMatcher()).analyze(STRONG_CV, backend_job())

        assert analysis.score == FALLBACK_SCORE
        assert analysis.degraded is True
        assert analysis.matching_skills == []
        assert analysis.missing_skills == BACKEND_SKILLS
        assert analysis.experience_level == "Junior"
