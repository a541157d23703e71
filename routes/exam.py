# routes/exam.py
from fastapi import APIRouter, HTTPException, Depends, Request
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from datetime import datetime
from typing import List, Optional
import time
import uuid
import logging

import config
from database import get_db
from models.exam import AttemptHistory, ExamSubmission, ExamResult
from models.question import ExamQuestion, Question
from .auth import get_current_user
from .scoring import score_answers
from .seed_data import SAMPLE_QUESTIONS

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/exam", tags=["exam"])


def parse_limit(limit: Optional[str]) -> int:
    """Lenient limit parsing: junk or non-positive values fall back to the default."""
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return config.DEFAULT_QUESTION_LIMIT
    if value <= 0:
        return config.DEFAULT_QUESTION_LIMIT
    return min(value, config.MAX_QUESTION_LIMIT)


async def sample_questions(db, size: int) -> List[ExamQuestion]:
    docs = await db.questions.aggregate([{"$sample": {"size": size}}]).to_list(None)
    seen = set()
    questions = []
    for doc in docs:
        # $sample can repeat a document on large collections
        if doc["id"] in seen:
            continue
        seen.add(doc["id"])
        questions.append(ExamQuestion.from_document(doc))
    return questions


def build_question_document(data: dict) -> dict:
    question = Question(**data)
    now = datetime.utcnow()
    doc = question.model_dump(exclude={"id"})
    doc["id"] = str(uuid.uuid4())
    for option in doc["options"]:
        option["id"] = str(uuid.uuid4())
    doc["createdAt"] = now
    doc["updatedAt"] = now
    correct_count = len(question.correct_options())
    if correct_count != 1:
        logger.warning(f"Question '{question.text}' has {correct_count} correct options")
    return doc


@router.get("/questions")
async def get_exam_questions(limit: Optional[str] = None, current_user: dict = Depends(get_current_user), db=Depends(get_db)):
    size = parse_limit(limit)
    try:
        questions = await sample_questions(db, size)
    except PyMongoError as e:
        logger.error(f"Error fetching questions: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching questions")
    logger.info(f"Sampled {len(questions)}/{size} questions for user {current_user['id']}")
    return {"questions": [q.model_dump() for q in questions]}


@router.post("/submit", response_model=ExamResult)
async def submit_exam(request: Request, current_user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        payload = await request.json()
    except ValueError:
        # not JSON at all, or not UTF-8
        raise HTTPException(status_code=400, detail="Invalid answers format")
    if not isinstance(payload, dict) or not isinstance(payload.get("answers"), list):
        raise HTTPException(status_code=400, detail="Invalid answers format")
    try:
        submission = ExamSubmission.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid answers format")

    question_ids = list({answer.questionId for answer in submission.answers})
    try:
        questions = await db.questions.find({"id": {"$in": question_ids}}).to_list(None)
        result = score_answers(submission.answers, questions)
        attempt = {
            "examId": f"exam_{int(time.time() * 1000)}",
            "score": result.score,
            "totalQuestions": result.totalQuestions,
            "completedAt": datetime.utcnow(),
        }
        await db.users.update_one({"id": current_user["id"]}, {"$push": {"examAttempts": attempt}})
    except PyMongoError as e:
        logger.error(f"Error submitting exam: {str(e)}")
        raise HTTPException(status_code=500, detail="Error submitting exam")

    logger.info(
        f"User {current_user['id']} scored {result.score}/{result.totalQuestions} "
        f"({result.percentage}%, passed={result.passed})"
    )
    return result


@router.get("/attempts", response_model=AttemptHistory)
async def get_attempts(current_user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        user = await db.users.find_one({"id": current_user["id"]})
    except PyMongoError as e:
        logger.error(f"Error fetching attempts: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching attempts")
    attempts = (user or {}).get("examAttempts", [])
    return {"attempts": list(reversed(attempts))}


@router.get("/settings")
async def get_exam_settings():
    return {
        "questionLimit": config.DEFAULT_QUESTION_LIMIT,
        "durationSeconds": config.EXAM_DURATION_SECONDS,
        "passingPercentage": config.PASSING_PERCENTAGE,
    }


@router.post("/seed-questions")
async def seed_questions(db=Depends(get_db)):
    try:
        existing = await db.questions.count_documents({})
        if existing > 0:
            return {"message": "Questions already seeded", "count": existing}

        docs = [build_question_document(data) for data in SAMPLE_QUESTIONS]
        await db.questions.insert_many(docs)
    except PyMongoError as e:
        logger.error(f"Error seeding questions: {str(e)}")
        raise HTTPException(status_code=500, detail="Error seeding questions")

    logger.info(f"Seeded {len(docs)} questions")
    return {"message": "Questions seeded successfully", "count": len(docs)}
