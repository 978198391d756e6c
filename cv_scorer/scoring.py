"""
CV Scoring Service.

Turns a Skill Matcher result into a 0-100 match score plus an advisory
narrative (summary, strengths, weaknesses, recommendations). The score is a
deterministic function of the match ratio: each ratio band maps linearly onto
its score band, so the same CV against the same job always scores the same.
"""

import logging
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from cv_scorer.matcher import SkillMatch, SkillMatcher, contains_keyword
from cv_scorer.taxonomy import EDUCATION_KEYWORDS, EXPERIENCE_KEYWORDS

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 45

# (minimum ratio, maximum ratio, minimum score, maximum score)
SCORE_BANDS: list[tuple[float, float, int, int]] = [
    (0.8, 1.0, 75, 90),
    (0.6, 0.8, 60, 74),
    (0.4, 0.6, 40, 59),
    (0.0, 0.4, 15, 39),
]

NEUTRAL_BASE_SCORE = 20
NEUTRAL_MAX_SCORE = 40
NEUTRAL_POINTS_PER_SKILL = 2


class JobLike(Protocol):
    title: str
    description: str
    required_skills: list[str]


# =============================================================================
# Result model
# =============================================================================

class CVAnalysis(BaseModel):
    """Scored analysis of one CV against one job."""
    score: int = Field(ge=0, le=100)
    matching_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    experience_level: str = "Junior"
    recommendations: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    summary: str = ""
    match_details: str = ""
    experience: str = ""
    education: str = ""
    cv_skills: list[str] = Field(default_factory=list)
    job_skills: list[str] = Field(default_factory=list)
    degraded: bool = False


def experience_level_for(score: float) -> str:
    """Senior from 90, Mid-level from 80, Junior below."""
    if score >= 90:
        return "Senior"
    if score >= 80:
        return "Mid-level"
    return "Junior"


def score_for_ratio(ratio: float) -> int:
    """Map a match ratio in [0, 1] onto its score band by linear interpolation."""
    ratio = min(max(ratio, 0.0), 1.0)
    for low_ratio, high_ratio, low_score, high_score in SCORE_BANDS:
        if ratio >= low_ratio:
            position = (ratio - low_ratio) / (high_ratio - low_ratio)
            score = low_score + position * (high_score - low_score)
            return int(min(max(round(score), low_score), high_score))
    return SCORE_BANDS[-1][2]


def neutral_score(detected_skill_count: int) -> int:
    """Score used when the job declares no required skills."""
    score = NEUTRAL_BASE_SCORE + NEUTRAL_POINTS_PER_SKILL * detected_skill_count
    return min(score, NEUTRAL_MAX_SCORE)


def _first_matching_line(text: str, keywords: list[str]) -> Optional[str]:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and any(contains_keyword(stripped, k) for k in keywords):
            return stripped[:200]
    return None


def describe_experience(cv_text: str) -> str:
    line = _first_matching_line(cv_text, EXPERIENCE_KEYWORDS)
    if line:
        return f"Professional experience mentioned: {line}"
    return "No explicit professional experience found in the CV."


def describe_education(cv_text: str) -> str:
    line = _first_matching_line(cv_text, EDUCATION_KEYWORDS)
    if line:
        return f"Education mentioned: {line}"
    return "No explicit education details found in the CV."


# =============================================================================
# Narrative
# =============================================================================

def _band_narrative(score: int, match: SkillMatch) -> tuple[str, str]:
    """Summary and match details for the band the score landed in."""
    matched = len(match.matching_skills)
    required = match.required_count

    if match.ratio is None:
        return (
            "The job offer declares no required skills; the CV was scored on its general skill profile.",
            f"{len(match.cv_skills)} recognised skill(s) detected in the CV.",
        )
    details = f"{matched} of {required} required skill(s) found in the CV."
    if score >= 75:
        return "Strong match: the profile covers most of the required skills.", details
    if score >= 60:
        return "Good match: the profile covers a majority of the required skills.", details
    if score >= 40:
        return "Partial match: several required skills are missing from the profile.", details
    return "Weak match: few of the required skills appear in the profile.", details


def _strengths(match: SkillMatch, experience: str, education: str) -> list[str]:
    strengths = []
    if match.matching_skills:
        strengths.append(f"Required skills present: {', '.join(match.matching_skills)}")
    if match.extra_cv_skills:
        strengths.append(f"Additional skills: {', '.join(match.extra_cv_skills[:5])}")
    if experience.startswith("Professional experience"):
        strengths.append("Relevant professional experience is described")
    if education.startswith("Education"):
        strengths.append("Education is documented")
    return strengths or ["Motivation to apply for the position"]


def _weaknesses(match: SkillMatch) -> list[str]:
    if match.missing_skills:
        return [f"Missing required skills: {', '.join(match.missing_skills)}"]
    if not match.cv_skills:
        return ["No recognised skills could be detected in the CV"]
    return []


def _recommendations(score: int, match: SkillMatch) -> list[str]:
    recommendations = [f"Build experience with {skill}" for skill in match.missing_skills[:3]]
    if score < 60:
        recommendations.append("Highlight concrete projects that use the job's core technologies")
    if not match.cv_skills:
        recommendations.append("List your technical and professional skills explicitly in the CV")
    if not recommendations:
        recommendations.append("Keep the CV up to date with recent projects and achievements")
    return recommendations


def fallback_analysis(required_skills: list[str]) -> CVAnalysis:
    """Fixed analysis returned when scoring itself fails."""
    return CVAnalysis(
        score=FALLBACK_SCORE,
        matching_skills=[],
        missing_skills=list(required_skills),
        experience_level=experience_level_for(FALLBACK_SCORE),
        recommendations=["Make sure the CV clearly lists your skills and experience"],
        strengths=[],
        weaknesses=[],
        summary="The CV could not be analysed automatically; a default score was assigned.",
        match_details="Automatic analysis unavailable.",
        experience="",
        education="",
        degraded=True,
    )


# =============================================================================
# Service
# =============================================================================

class CVScorer:
    """Scores a CV against a job requirement."""

    def __init__(self, matcher: Optional[SkillMatcher] = None):
        self.matcher = matcher or SkillMatcher()

    def _analyze(self, cv_text: str, job: JobLike) -> CVAnalysis:
        match = self.matcher.match(cv_text, job.title, job.description, list(job.required_skills))

        if match.ratio is None:
            score = neutral_score(len(match.cv_skills))
        else:
            score = score_for_ratio(match.ratio)

        summary, match_details = _band_narrative(score, match)
        experience = describe_experience(cv_text or "")
        education = describe_education(cv_text or "")

        return CVAnalysis(
            score=score,
            matching_skills=match.matching_skills,
            missing_skills=match.missing_skills,
            experience_level=experience_level_for(score),
            recommendations=_recommendations(score, match),
            strengths=_strengths(match, experience, education),
            weaknesses=_weaknesses(match),
            summary=summary,
            match_details=match_details,
            experience=experience,
            education=education,
            cv_skills=match.cv_skills,
            job_skills=match.job_skills,
        )

    async def analyze(self, cv_text: str, job: JobLike) -> CVAnalysis:
        """
        Score a CV against a job.

        Never raises: any failure while matching yields the fallback analysis
        with degraded=True.
        """
        try:
            analysis = self._analyze(cv_text, job)
        except Exception:
            logger.exception(f"CV scoring failed for job '{getattr(job, 'title', '?')}', using fallback score")
            return fallback_analysis(list(getattr(job, "required_skills", []) or []))

        logger.info(
            f"CV scored {analysis.score} for '{job.title}' "
            f"({len(analysis.matching_skills)} matching, {len(analysis.missing_skills)} missing)"
        )
        return analysis
