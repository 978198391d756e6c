"""Prompt templates for the technical test generator."""

SYSTEM_INSTRUCTION = """You are a technical expert who writes personalised multiple-choice tests.
You read the candidate's CV profile and write questions tailored to the skills they claim,
to verify how well they really master them. Reply only with valid JSON containing exactly 10 questions."""


TEST_PROMPT = """Create exactly 10 PERSONALISED technical questions for a multiple-choice test.

## JOB
Title: {job_title}
Description: {job_description}
Required skills: {required_skills}

## CANDIDATE PROFILE
Level: {level}
Declared skills: {candidate_skills}
Experience: {experience}
Projects mentioned: {projects}
Matching skills: {matching_skills}

## RULES
- Exactly 10 questions (no more, no less)
- 4 answer options per question (A, B, C, D)
- ONE correct answer per question, given as its index 0-3 in "correctAnswer"
- Questions based on the skills the candidate CLAIMS to have
- Test the depth of knowledge of the technologies mentioned in the CV
- Adapt the difficulty to the declared experience

## WEIGHTING
- 50% on the skills the candidate claims to master
- 30% on the skills required for the job
- 20% on practical situations related to the projects mentioned

## STRATEGY
- If the candidate mentions JavaScript, ask JavaScript-specific questions
- If the candidate mentions web projects, ask about web architecture
- If the candidate has experience, ask questions of the matching level
- Include subtle traps to check real mastery

Reply ONLY with a JSON array of exactly 10 questions in this format:
[
  {{
    "id": 1,
    "question": "Question based on the candidate's skills",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0,
    "explanation": "Detailed explanation",
    "difficulty": "easy|medium|hard",
    "skill": "Skill tested"
  }}
]"""


def _join(values: list[str], empty: str = "none") -> str:
    return ", ".join(values) if values else empty


def build_test_prompt(
    job_title: str,
    job_description: str,
    required_skills: list[str],
    level: str,
    candidate_skills: list[str],
    experience: str,
    projects: list[str],
    matching_skills: list[str],
) -> str:
    return TEST_PROMPT.format(
        job_title=job_title,
        job_description=job_description,
        required_skills=_join(required_skills),
        level=level,
        candidate_skills=_join(candidate_skills),
        experience=experience or "not specified",
        projects=_join(projects),
        matching_skills=_join(matching_skills),
    )
