from pydantic import BaseModel
from datetime import datetime

from app.core.types import NameStr


class UserUpdate(BaseModel):
    name: NameStr


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    created_at: datetime


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
