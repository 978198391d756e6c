"""
Tests for technical test grading.
"""
from quiz_generator import build_fallback_questions
from hiring.services.grading import UNANSWERED, grade_answers, normalize_answers


QUESTIONS = build_fallback_questions("Backend Engineer", ["Python"], "Junior")
ANSWER_KEY = [q.correct_answer for q in QUESTIONS]


def wrong(index: int) -> int:
    return (ANSWER_KEY[index] + 1) % 4


class TestNormalizeAnswers:
    def test_pads_missing_answers(self):
        assert normalize_answers([0, 1], 4) == [0, 1, UNANSWERED, UNANSWERED]

    def test_drops_extra_answers(self):
        assert normalize_answers([0, 1, 2, 3, 0], 3) == [0, 1, 2]

    def test_invalid_values_count_as_unanswered(self):
        assert normalize_answers([None, True, 4, -1, "2", 2.0, 3], 7) == [UNANSWERED] * 6 + [3]


class TestGradeAnswers:
    def test_all_correct(self):
        grade = grade_answers(QUESTIONS, ANSWER_KEY)

        assert grade.score == 100
        assert grade.correct_count == 10
        assert all(r["is_correct"] for r in grade.results)

    def test_partial(self):
        answers = [a if i < 7 else wrong(i) for i, a in enumerate(ANSWER_KEY)]
        grade = grade_answers(QUESTIONS, answers)

        assert grade.correct_count == 7
        assert grade.rounded_score == 70
        assert grade.results[8]["user_answer"] == wrong(8)
        assert grade.results[8]["correct_answer"] == ANSWER_KEY[8]
        assert grade.results[8]["is_correct"] is False

    def test_unanswered_is_wrong(self):
        grade = grade_answers(QUESTIONS, [])

        assert grade.score == 0
        assert grade.total_questions == 10
        assert all(r["user_answer"] == UNANSWERED for r in grade.results)

    def test_results_carry_explanations(self):
        grade = grade_answers(QUESTIONS, ANSWER_KEY)

        assert grade.results[0]["question"] == QUESTIONS[0].question
        assert grade.results[0]["explanation"] == QUESTIONS[0].explanation
        assert grade.results[0]["skill"] == "Python"

    def test_empty_test(self):
        grade = grade_answers([], [1, 2])

        assert grade.score == 0
        assert grade.total_questions == 0
        assert grade.results == []
