# models/exam.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

class Answer(BaseModel):
    questionId: str
    selectedOptionId: Optional[str] = None

class ExamSubmission(BaseModel):
    answers: List[Answer]

class ResultItem(BaseModel):
    questionId: str
    questionText: str
    selectedOptionText: str
    correctOptionText: str
    isCorrect: bool

class ExamResult(BaseModel):
    score: int
    totalQuestions: int
    percentage: int
    passed: bool
    results: List[ResultItem] = []

class ExamAttempt(BaseModel):
    examId: str
    score: int
    totalQuestions: int
    completedAt: datetime

class AttemptHistory(BaseModel):
    attempts: List[ExamAttempt] = []
