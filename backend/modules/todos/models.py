"""
Todos module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Todo(BaseModel):
    """A todo item owned by one user."""

    id: int
    user_id: int = Field(..., description="Owner's user ID")
    title: str
    completed: bool = False
    created_at: Optional[datetime] = None


class CreateTodoRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=255)


class UpdateTodoRequest(BaseModel):
    """Partial update. Omitted or null fields are left unchanged."""

    title: Optional[str] = Field(None, max_length=255)
    completed: Optional[bool] = None
