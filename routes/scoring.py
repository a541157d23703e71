# routes/scoring.py
import math
from typing import Dict, List, Optional

from models.exam import Answer, ExamResult, ResultItem
from config import PASSING_PERCENTAGE

NOT_ANSWERED = "Not answered"
UNKNOWN_OPTION = "Unknown"


def percentage_of(score: int, total: int) -> int:
    """Whole-number percentage, rounding halves up. Zero when there is nothing to score."""
    if total <= 0:
        return 0
    return int(math.floor(score / total * 100 + 0.5))


def find_correct_option(question: dict) -> Optional[dict]:
    return next((opt for opt in question.get("options", []) if opt.get("isCorrect")), None)


def score_answers(answers: List[Answer], questions: List[dict], passing_percentage: int = PASSING_PERCENTAGE) -> ExamResult:
    """
    Score a batch of answers against the stored questions.

    Answers whose questionId is not among `questions` are skipped and do not
    count toward the total. A repeated questionId keeps only its last answer.
    """
    by_id: Dict[str, dict] = {q["id"]: q for q in questions}

    latest: Dict[str, Answer] = {}
    for answer in answers:
        if answer.questionId in by_id:
            latest.pop(answer.questionId, None)
            latest[answer.questionId] = answer

    score = 0
    results = []
    for question_id, answer in latest.items():
        question = by_id[question_id]
        correct = find_correct_option(question)
        selected = next(
            (opt for opt in question.get("options", []) if opt.get("id") == answer.selectedOptionId),
            None,
        )
        is_correct = correct is not None and correct.get("id") == answer.selectedOptionId
        if is_correct:
            score += 1
        results.append(ResultItem(
            questionId=question_id,
            questionText=question.get("text", ""),
            selectedOptionText=selected["text"] if selected else NOT_ANSWERED,
            correctOptionText=correct["text"] if correct else UNKNOWN_OPTION,
            isCorrect=is_correct,
        ))

    total = len(latest)
    percentage = percentage_of(score, total)
    return ExamResult(
        score=score,
        totalQuestions=total,
        percentage=percentage,
        passed=percentage >= passing_percentage,
        results=results,
    )
