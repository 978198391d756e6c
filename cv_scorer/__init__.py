"""
CV scoring against job requirements.

This module provides functionality to:
1. Detect taxonomy skills in free text (CV or job offer)
2. Partition a job's required skills into matching / missing
3. Turn the match into a 0-100 score with an advisory narrative
"""

from .matcher import SkillMatch, SkillMatcher, detect_skills, has_skill
from .scoring import (
    CVAnalysis,
    CVScorer,
    FALLBACK_SCORE,
    experience_level_for,
    fallback_analysis,
    neutral_score,
    score_for_ratio,
)

__all__ = [
    "SkillMatch",
    "SkillMatcher",
    "detect_skills",
    "has_skill",
    "CVAnalysis",
    "CVScorer",
    "FALLBACK_SCORE",
    "experience_level_for",
    "fallback_analysis",
    "neutral_score",
    "score_for_ratio",
]
