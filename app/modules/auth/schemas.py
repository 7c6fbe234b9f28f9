from pydantic import BaseModel, EmailStr, Field
from typing import List

from app.core.types import NameStr
from app.modules.users.schemas import UserResponse
from app.modules.workspaces.schemas import WorkspaceSummary


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: NameStr


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class MeResponse(UserResponse):
    workspaces: List[WorkspaceSummary] = []
