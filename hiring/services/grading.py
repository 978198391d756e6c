"""
Test grading: compare submitted answers with the stored correct answers.
"""
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from quiz_generator.models import Question

UNANSWERED = -1


@dataclass
class GradeResult:
    score: float  # percentage, not rounded
    correct_count: int
    total_questions: int
    results: list[dict[str, Any]]

    @property
    def rounded_score(self) -> int:
        return round(self.score)


def normalize_answers(answers: Sequence[Optional[Any]], question_count: int) -> list[int]:
    """
    Align answers with the questions.

    Pads missing answers and drops extra ones. Anything that is not an int in
    [0, 3] (None, bools, out-of-range values) counts as unanswered.
    """
    normalized = []
    for index in range(question_count):
        value = answers[index] if index < len(answers) else None
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 3:
            value = UNANSWERED
        normalized.append(value)
    return normalized


def grade_answers(questions: Sequence[Question], answers: Sequence[Optional[Any]]) -> GradeResult:
    """Score = 100 * correct / number of questions (0 for an empty test)."""
    normalized = normalize_answers(answers, len(questions))

    results = []
    correct_count = 0
    for question, answer in zip(questions, normalized):
        is_correct = answer == question.correct_answer
        if is_correct:
            correct_count += 1
        results.append({
            "question": question.question,
            "user_answer": answer,
            "correct_answer": question.correct_answer,
            "is_correct": is_correct,
            "explanation": question.explanation,
            "skill": question.skill,
        })

    total = len(questions)
    score = 100 * correct_count / total if total else 0.0
    return GradeResult(score=score, correct_count=correct_count, total_questions=total, results=results)
