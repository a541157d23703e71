# client/models.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, List, Literal, Union

class ClientUser(BaseModel):
    id: str
    username: str
    email: str

class Session(BaseModel):
    token: str
    user: ClientUser

class ExamOption(BaseModel):
    id: str
    text: str

class ExamQuestion(BaseModel):
    id: str
    text: str
    options: List[ExamOption]
    category: str = "General"
    difficulty: str = "Medium"

class ExamSettings(BaseModel):
    questionLimit: int
    durationSeconds: int
    passingPercentage: int

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

    @property
    def incorrect(self) -> int:
        return self.totalQuestions - self.score

class Attempt(BaseModel):
    examId: str
    score: int
    totalQuestions: int
    completedAt: datetime

# What the runner hands to the results stage
class ExamSubmitted(BaseModel):
    status: Literal["submitted"] = "submitted"
    result: ExamResult
    timedOut: bool = False

class ExamFailed(BaseModel):
    status: Literal["failed"] = "failed"
    message: str
    answered: int = 0

ExamOutcome = Annotated[Union[ExamSubmitted, ExamFailed], Field(discriminator="status")]
