"""
Deterministic fallback question bank.

Used whenever the LLM path cannot produce a valid test. Always returns exactly
10 questions with 4 options each, parameterized by the job title, the
candidate's primary/secondary skills and the experience level.
"""
from typing import Optional

from quiz_generator.models import CandidateSkillProfile, Difficulty, Question


def _experience_answer(level: str) -> int:
    if level == "Senior":
        return 3
    if level == "Mid-level":
        return 2
    return 1


def build_fallback_questions(
    job_title: str,
    required_skills: list[str],
    level: str,
    profile: Optional[CandidateSkillProfile] = None,
) -> list[Question]:
    candidate_skills = (profile.skills if profile and profile.skills else list(required_skills))
    primary = candidate_skills[0] if candidate_skills else (required_skills[0] if required_skills else "software development")
    secondary = candidate_skills[1] if len(candidate_skills) > 1 else None

    templates = [
        dict(
            question=f"Your CV says you master {primary}. What is your practical experience with it?",
            options=["Academic projects only", "A few personal projects", "Professional projects", "Advanced expertise"],
            correct_answer=_experience_answer(level),
            explanation="This question checks how the experience claimed in the CV matches real practice.",
            difficulty=Difficulty.EASY,
            skill=primary,
        ),
        dict(
            question=f"You mention projects in {secondary or 'software development'}. How do you handle complexity?",
            options=["Keep everything simple", "Basic patterns", "Modular architecture", "Advanced design patterns"],
            correct_answer=2,
            explanation="A modular architecture is essential to keep complex projects manageable.",
            difficulty=Difficulty.MEDIUM,
            skill=secondary or "Architecture",
        ),
        dict(
            question="Given the skills you declared, how do you approach debugging?",
            options=["Print statements only", "Integrated debugger", "Unit tests", "A systematic approach"],
            correct_answer=3,
            explanation="A systematic approach combines every available tool.",
            difficulty=Difficulty.MEDIUM,
            skill="Debugging",
        ),
        dict(
            question="In your development projects, how do you manage deadlines?",
            options=["Stress and urgency", "Basic planning", "Project management", "Agile methodology"],
            correct_answer=3,
            explanation="Agile methodologies make deadlines predictable through short iterations.",
            difficulty=Difficulty.EASY,
            skill="Project Management",
        ),
        dict(
            question="Given the skills you declared, how do you optimize performance?",
            options=["No optimization", "Basic optimizations", "Profiling and monitoring", "Optimize everything upfront"],
            correct_answer=2,
            explanation="Profiling and monitoring show where optimization actually pays off.",
            difficulty=Difficulty.HARD,
            skill="Performance",
        ),
        dict(
            question="Does your testing approach match your declared level?",
            options=["No tests", "Manual tests", "Automated tests", "TDD/BDD"],
            correct_answer=3 if level == "Senior" else 2,
            explanation="Automated tests are essential for quality.",
            difficulty=Difficulty.MEDIUM,
            skill="Testing",
        ),
        dict(
            question=f"How do you document your {primary} projects?",
            options=["No documentation", "Basic comments", "Technical documentation", "Complete documentation"],
            correct_answer=3,
            explanation="Complete documentation eases maintenance and collaboration.",
            difficulty=Difficulty.MEDIUM,
            skill="Documentation",
        ),
        dict(
            question=f"Which vision of the {job_title} role best fits today's challenges?",
            options=["Purely technical focus", "Traditional approach", "Modern vision", "Innovation and adaptation"],
            correct_answer=3,
            explanation="Innovation and adaptation are key in modern development.",
            difficulty=Difficulty.HARD,
            skill="Strategic Vision",
        ),
        dict(
            question=f"With {primary}, what is the best practice for data security?",
            options=["Client-side validation", "Escaping data", "Prepared statements", "Simple encryption"],
            correct_answer=2,
            explanation="Prepared statements prevent SQL injection.",
            difficulty=Difficulty.MEDIUM,
            skill="Security",
        ),
        dict(
            question=f"Which architecture would you recommend for a {job_title} project?",
            options=["Simple monolith", "Classic MVC", "Complex microservices", "Hexagonal architecture"],
            correct_answer=1,
            explanation="MVC fits most projects of this kind.",
            difficulty=Difficulty.MEDIUM,
            skill="Architecture",
        ),
    ]

    return [Question(id=index, **template) for index, template in enumerate(templates, start=1)]
