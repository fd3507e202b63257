from datetime import datetime
from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class RecordOfWorkCreate(CamelModel):
    session_id: int
    topic: str = Field(min_length=1)
    subtopics: Optional[str] = None
    description: Optional[str] = None
    resources: Optional[str] = None
    assignment: Optional[str] = None
    notes: Optional[str] = None


class RecordOfWorkUpdate(CamelModel):
    nullable_fields = frozenset({"subtopics", "description", "resources", "assignment", "notes"})

    topic: Optional[str] = Field(default=None, min_length=1)
    subtopics: Optional[str] = None
    description: Optional[str] = None
    resources: Optional[str] = None
    assignment: Optional[str] = None
    notes: Optional[str] = None


class RecordOfWorkOut(RecordOfWorkCreate):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
