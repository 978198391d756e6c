"""
Skill Matcher: keyword-boundary skill detection over the fixed taxonomy.

Pure and deterministic - identical inputs always produce identical matches.
"""
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from cv_scorer.taxonomy import SKILL_INDEX


@dataclass(frozen=True)
class SkillMatch:
    """Skills detected on both sides plus the partition of the required skills."""
    cv_skills: list[str]
    job_skills: list[str]
    matching_skills: list[str]
    missing_skills: list[str]
    ratio: Optional[float]  # None when the job declares no required skills
    required_count: int = 0
    extra_cv_skills: list[str] = field(default_factory=list)


@lru_cache(maxsize=1024)
def _keyword_pattern(keyword: str) -> re.Pattern:
    # Plain \b breaks on symbols ("c++", "c#", "ci/cd"), so guard both ends explicitly
    return re.compile(
        rf"(?<![\w+#.]){re.escape(keyword.strip().lower())}(?![\w+#])",
        re.IGNORECASE,
    )


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive keyword-boundary search."""
    if not text or not keyword or not keyword.strip():
        return False
    return _keyword_pattern(keyword).search(text) is not None


def _canonical_entry(skill: str) -> Optional[str]:
    """Find the taxonomy entry a declared skill refers to, if any."""
    needle = skill.strip().lower()
    for name, aliases in SKILL_INDEX.items():
        if needle == name.lower() or needle in aliases:
            return name
    return None


def skill_aliases(skill: str) -> tuple[str, ...]:
    """The declared skill itself plus every alias of its taxonomy entry."""
    entry = _canonical_entry(skill)
    aliases = SKILL_INDEX.get(entry, ()) if entry else ()
    return tuple(dict.fromkeys([skill.strip().lower(), *aliases]))


def detect_skills(text: str) -> list[str]:
    """Return canonical taxonomy skills mentioned in the text, in taxonomy order."""
    if not text:
        return []
    return [
        name
        for name, aliases in SKILL_INDEX.items()
        if any(contains_keyword(text, alias) for alias in aliases)
    ]


def has_skill(text: str, skill: str) -> bool:
    """True if the text mentions the skill or one of its taxonomy aliases."""
    return any(contains_keyword(text, alias) for alias in skill_aliases(skill))


class SkillMatcher:
    """Matches a CV's free text against a job's title, description and required skills."""

    def match(
        self,
        cv_text: str,
        job_title: str,
        job_description: str,
        required_skills: list[str],
    ) -> SkillMatch:
        cv_text = cv_text or ""
        job_text = " ".join([job_title or "", job_description or "", " ".join(required_skills)])

        # Drop blanks and case-insensitive duplicates, keep the declared order
        seen: set[str] = set()
        required: list[str] = []
        for skill in required_skills:
            key = skill.strip().lower()
            if key and key not in seen:
                seen.add(key)
                required.append(skill.strip())

        matching = [skill for skill in required if has_skill(cv_text, skill)]
        missing = [skill for skill in required if skill not in matching]

        cv_skills = detect_skills(cv_text)
        job_skills = detect_skills(job_text)

        ratio = len(matching) / len(required) if required else None

        return SkillMatch(
            cv_skills=cv_skills,
            job_skills=job_skills,
            matching_skills=matching,
            missing_skills=missing,
            ratio=ratio,
            required_count=len(required),
            extra_cv_skills=[s for s in cv_skills if s not in job_skills],
        )
