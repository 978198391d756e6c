"""
Technical test generator.

Asks Gemini for 10 multiple-choice questions tailored to the job and to the
skills the candidate claims, validates and coerces the answer, and falls back
to a deterministic question bank whenever the model path cannot deliver.
"""

import asyncio
import json
import logging
import re
from typing import Any, Optional, Protocol

from google.genai import types

from quiz_generator.fallback import build_fallback_questions
from quiz_generator.models import OPTION_COUNT, CandidateSkillProfile, Difficulty, Question
from quiz_generator.prompts import SYSTEM_INSTRUCTION, build_test_prompt

logger = logging.getLogger(__name__)

QUESTION_COUNT = 10
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]


class GenerationDegraded(Exception):
    """The model path failed; the caller should use the fallback bank."""


class JobLike(Protocol):
    title: str
    description: str
    required_skills: list[str]


# =============================================================================
# Response parsing
# =============================================================================

def parse_questions_payload(response_text: str) -> list[Any]:
    """
    Extract the question list from a model response.

    Accepts a bare JSON array, an array inside a markdown code block, or an
    object carrying the array under "questions".
    """
    if not response_text or not response_text.strip():
        raise GenerationDegraded("empty response")

    candidates = [response_text.strip()]
    fence = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", response_text)
    if fence:
        candidates.append(fence.group(1))
    array = re.search(r"\[[\s\S]*\]", response_text)
    if array:
        candidates.append(array.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            parsed = parsed.get("questions")
        if isinstance(parsed, list):
            return parsed

    logger.error(f"Could not find a question array in response: {response_text[:500]}")
    raise GenerationDegraded("no JSON question array in response")


def coerce_question(
    raw: dict,
    position: int,
    job_title: str,
    candidate_skills: list[str],
    required_skills: list[str],
) -> Question:
    """Turn one model entry into a valid Question, substituting safe defaults."""
    text = raw.get("question")
    if not isinstance(text, str) or not text.strip():
        text = f"Question {position} for {job_title}"

    options = raw.get("options")
    if not (
        isinstance(options, list)
        and len(options) == OPTION_COUNT
        and all(isinstance(o, str) and o.strip() for o in options)
    ):
        options = list(DEFAULT_OPTIONS)

    correct = raw.get("correctAnswer", raw.get("correct_answer"))
    if isinstance(correct, bool) or not isinstance(correct, int) or not 0 <= correct < OPTION_COUNT:
        correct = 0

    explanation = raw.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = "No explanation available"

    try:
        difficulty = Difficulty(raw.get("difficulty"))
    except ValueError:
        difficulty = Difficulty.MEDIUM

    skill = raw.get("skill")
    if not isinstance(skill, str) or not skill.strip():
        if candidate_skills:
            skill = candidate_skills[0]
        elif required_skills:
            skill = required_skills[0]
        else:
            skill = "General"

    return Question(
        id=position,
        question=text,
        options=options,
        correct_answer=correct,
        explanation=explanation,
        difficulty=difficulty,
        skill=skill,
    )


def validate_questions(
    payload: list[Any],
    job_title: str,
    candidate_skills: list[str],
    required_skills: list[str],
) -> list[Question]:
    """Require exactly 10 object entries, then coerce each and renumber 1..10."""
    if len(payload) != QUESTION_COUNT:
        raise GenerationDegraded(f"model returned {len(payload)} questions instead of {QUESTION_COUNT}")
    if not all(isinstance(entry, dict) for entry in payload):
        raise GenerationDegraded("model returned non-object question entries")

    return [
        coerce_question(entry, position, job_title, candidate_skills, required_skills)
        for position, entry in enumerate(payload, start=1)
    ]


# =============================================================================
# Generator
# =============================================================================

class QuizGenerator:
    """
    Generates the 10-question technical test for an admitted candidate.

    The genai client is injected; with no client every call goes straight to
    the fallback bank.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def _call_model(self, prompt: str) -> str:
        if self.client is None:
            raise GenerationDegraded("no text-generation client configured")

        config = types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=0.3,
            max_output_tokens=4096,
            response_mime_type="application/json",
        )
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                    config=config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationDegraded(f"generation timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            raise GenerationDegraded(f"generation request failed: {e}") from e

        return getattr(response, "text", None) or ""

    async def generate_with_model(
        self,
        job: JobLike,
        profile: CandidateSkillProfile,
        level: str,
    ) -> list[Question]:
        """Model path only. Raises GenerationDegraded on any failure."""
        required_skills = list(job.required_skills)
        prompt = build_test_prompt(
            job_title=job.title,
            job_description=job.description,
            required_skills=required_skills,
            level=level,
            candidate_skills=profile.skills,
            experience=profile.experience,
            projects=profile.projects,
            matching_skills=profile.matching_skills,
        )
        response_text = await self._call_model(prompt)
        logger.debug(f"Raw generation response: {response_text[:500]}")
        payload = parse_questions_payload(response_text)
        return validate_questions(payload, job.title, profile.skills, required_skills)

    async def generate(
        self,
        job: JobLike,
        profile: Optional[CandidateSkillProfile] = None,
        level: str = "Junior",
    ) -> list[Question]:
        """Return exactly 10 questions. Never raises: degraded paths use the fallback bank."""
        profile = profile or CandidateSkillProfile()
        try:
            questions = await self.generate_with_model(job, profile, level)
            logger.info(f"Generated {len(questions)} questions with {self.model} for '{job.title}' ({level})")
            return questions
        except GenerationDegraded as e:
            logger.warning(f"Test generation degraded for '{job.title}': {e}. Using fallback questions")

        return build_fallback_questions(job.title, list(job.required_skills), level, profile)
