# config.py
import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "exam_portal_db")

JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    logger.warning("JWT_SECRET not set, falling back to the development secret")
    JWT_SECRET = "dev-secret-change-me"
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Exam rules
DEFAULT_QUESTION_LIMIT = int(os.getenv("EXAM_QUESTION_LIMIT", "10"))
MAX_QUESTION_LIMIT = 50
EXAM_DURATION_SECONDS = int(os.getenv("EXAM_DURATION_SECONDS", str(30 * 60)))
PASSING_PERCENTAGE = 60
