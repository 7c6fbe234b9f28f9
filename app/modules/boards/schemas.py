from pydantic import BaseModel
from datetime import datetime

from app.core.types import NameStr


class BoardCreate(BaseModel):
    name: NameStr


class BoardUpdate(BaseModel):
    name: NameStr


class BoardResponse(BaseModel):
    id: str
    name: str
    workspace_id: str
    created_at: datetime
