# models/question.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

DIFFICULTY_PATTERN = "^(Easy|Medium|Hard)$"

class Option(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None  # UUID as string
    text: str = Field(..., min_length=1)
    isCorrect: bool = False

class Question(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None  # UUID as string
    text: str = Field(..., min_length=1)
    options: List[Option] = []
    category: str = "General"
    difficulty: str = Field("Medium", pattern=DIFFICULTY_PATTERN)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    def correct_options(self) -> List[Option]:
        return [opt for opt in self.options if opt.isCorrect]

# Exam-facing shapes never carry isCorrect
class ExamOption(BaseModel):
    id: str
    text: str

class ExamQuestion(BaseModel):
    id: str
    text: str
    options: List[ExamOption]
    category: str
    difficulty: str

    @classmethod
    def from_document(cls, doc: dict) -> "ExamQuestion":
        return cls(
            id=doc["id"],
            text=doc["text"],
            options=[ExamOption(id=opt["id"], text=opt["text"]) for opt in doc.get("options", [])],
            category=doc.get("category", "General"),
            difficulty=doc.get("difficulty", "Medium"),
        )
