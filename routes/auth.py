# routes/auth.py
from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pymongo.errors import DuplicateKeyError
from datetime import datetime, timedelta
import bcrypt
import uuid
import logging

import config
from database import get_db
from models.user import RegisterRequest, LoginRequest, UserPublic, AuthResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

CREDENTIALS_ERROR = {"status_code": 401, "headers": {"WWW-Authenticate": "Bearer"}}


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(user_id: str) -> str:
    expires = datetime.utcnow() + timedelta(minutes=config.JWT_EXPIRE_MINUTES)
    return jwt.encode({"id": user_id, "exp": expires}, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def public_user(user: dict) -> UserPublic:
    return UserPublic(id=user["id"], username=user["username"], email=user["email"])


async def get_user_by_id(db, user_id: str):
    user = await db.users.find_one({"id": user_id})
    if not user:
        logger.warning(f"User not found for id: {user_id}")
    return user


async def get_current_user(token: str = Depends(oauth2_scheme), db=Depends(get_db)) -> dict:
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.error(f"JWTError: {str(e)}")
        raise HTTPException(detail="Invalid token", **CREDENTIALS_ERROR)
    user_id = payload.get("id")
    if not user_id:
        logger.error("Invalid token: missing user id")
        raise HTTPException(detail="Invalid token", **CREDENTIALS_ERROR)
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(detail="User not found", **CREDENTIALS_ERROR)
    return {"id": user["id"], "username": user["username"], "email": user["email"]}


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest, db=Depends(get_db)):
    email = request.email.strip().lower()
    logger.info(f"Registration attempt for email: {email}")

    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")

    user = {
        "id": str(uuid.uuid4()),
        "username": request.username.strip(),
        "email": email,
        "password": hash_password(request.password),
        "createdAt": datetime.utcnow(),
        "examAttempts": [],
    }
    try:
        await db.users.insert_one(user)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="User already exists")

    return AuthResponse(token=create_access_token(user["id"]), user=public_user(user))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db=Depends(get_db)):
    email = request.email.strip().lower()
    logger.info(f"Login attempt for email: {email}")

    user = await db.users.find_one({"email": email})
    if not user or not verify_password(request.password, user["password"]):
        logger.warning(f"Invalid credentials for email: {email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return AuthResponse(token=create_access_token(user["id"]), user=public_user(user))


@router.get("/me")
async def get_current_user_endpoint(current_user: dict = Depends(get_current_user)):
    return {"user": current_user}
