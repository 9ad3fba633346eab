"""
Quiz grader - scores a learner's answer sheet for a topic quiz.
"""

import math
from typing import Dict, List, Optional

from pydantic import BaseModel

from knowledge_tree.engines.roadmap.types import Quiz
from knowledge_tree.exceptions import QuizGradingError

PASS_THRESHOLD = 80


class QuestionResult(BaseModel):
    """Outcome for one question."""

    question_id: str
    selected_index: int
    correct_index: int
    correct: bool
    explanation: str = ""


class QuizResult(BaseModel):
    """Graded quiz. score is a whole percentage."""

    score: int
    correct_count: int
    total: int
    passed: bool
    results: List[QuestionResult]


class QuizGrader:
    """
    Grades multiple-choice quizzes. Every question must be answered;
    score = correct / total as a percentage rounded half up.
    """

    @classmethod
    def grade(
        cls,
        quiz: Optional[Quiz],
        answers: Dict[str, int],
        pass_threshold: int = PASS_THRESHOLD,
    ) -> QuizResult:
        if quiz is None or not quiz.questions:
            raise QuizGradingError("Quiz has no questions")

        missing = [q.id for q in quiz.questions if q.id not in answers]
        if missing:
            raise QuizGradingError(f"Unanswered questions: {', '.join(missing)}")

        results = []
        for question in quiz.questions:
            selected = answers[question.id]
            results.append(
                QuestionResult(
                    question_id=question.id,
                    selected_index=selected,
                    correct_index=question.correct_index,
                    correct=selected == question.correct_index,
                    explanation=question.explanation,
                )
            )

        correct_count = sum(1 for r in results if r.correct)
        score = cls.score_percentage(correct_count, len(results))
        return QuizResult(
            score=score,
            correct_count=correct_count,
            total=len(results),
            passed=score >= pass_threshold,
            results=results,
        )

    @staticmethod
    def score_percentage(correct: int, total: int) -> int:
        """Whole percentage, halves rounded up (1 of 8 -> 13)."""
        return math.floor(correct * 100 / total + 0.5)
