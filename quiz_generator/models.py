"""
Data models for generated technical tests.
"""
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field, field_validator

OPTION_COUNT = 4


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Question(BaseModel):
    """One multiple-choice question: 4 options, exactly one correct."""
    id: int = Field(ge=1)
    question: str
    options: list[str]
    correct_answer: int = Field(ge=0, le=OPTION_COUNT - 1)
    explanation: str
    difficulty: Difficulty = Difficulty.MEDIUM
    skill: str

    @field_validator("options")
    @classmethod
    def _four_options(cls, v: list[str]) -> list[str]:
        if len(v) != OPTION_COUNT:
            raise ValueError(f"a question needs exactly {OPTION_COUNT} options, got {len(v)}")
        return v


@dataclass
class CandidateSkillProfile:
    """What the candidate claims, as extracted from their CV."""
    skills: list[str] = field(default_factory=list)      # taxonomy skills detected in the CV
    experience: str = ""                                 # experience hint line
    projects: list[str] = field(default_factory=list)    # CV lines mentioning projects
    matching_skills: list[str] = field(default_factory=list)
