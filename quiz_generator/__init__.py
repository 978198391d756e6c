"""
Technical test generator.

This module provides functionality to:
1. Generate a personalised 10-question multiple-choice test with Gemini
2. Validate and coerce the model output into well-formed questions
3. Fall back to a deterministic question bank when the model path fails
"""

from .agent import (
    GenerationDegraded,
    QuizGenerator,
    QUESTION_COUNT,
    parse_questions_payload,
    validate_questions,
)
from .fallback import build_fallback_questions
from .models import CandidateSkillProfile, Difficulty, Question

__all__ = [
    "GenerationDegraded",
    "QuizGenerator",
    "QUESTION_COUNT",
    "parse_questions_payload",
    "validate_questions",
    "build_fallback_questions",
    "CandidateSkillProfile",
    "Difficulty",
    "Question",
]
