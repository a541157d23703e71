# models/user.py
from pydantic import BaseModel, Field

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)

class LoginRequest(BaseModel):
    email: str
    password: str

class UserPublic(BaseModel):
    id: str
    username: str
    email: str

class AuthResponse(BaseModel):
    token: str
    user: UserPublic
