from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Literal
from datetime import datetime

TaskStatusLiteral = Literal["pending", "completed"]

class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatusLiteral = "pending"

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

class TaskUpdate(BaseModel):
    # Partial update; fields left out are not touched
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatusLiteral] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            raise ValueError("Title is required")
        return value

    # Only runs when the client sent the key, so None here means an explicit null
    @field_validator("status")
    @classmethod
    def status_not_null(cls, value):
        if value is None:
            raise ValueError("Status cannot be null")
        return value

class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatusLiteral
    user_id: int
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

class TaskStats(BaseModel):
    total: int
    pending: int
    completed: int
