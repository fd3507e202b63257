from datetime import datetime
from pydantic import Field, field_validator, model_validator
from typing import List, Literal, Optional

from app.schemas.base import CamelModel, naive_utc


class ClassCreate(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    course_id: int
    department_id: int
    section_id: Optional[int] = None
    level_id: int
    term_id: int
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    unit_ids: List[int] = []

    normalize_dates = field_validator("start_date", "end_date")(naive_utc)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class ClassUpdate(CamelModel):
    nullable_fields = frozenset({"section_id", "description", "status"})

    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    course_id: Optional[int] = None
    department_id: Optional[int] = None
    section_id: Optional[int] = None
    level_id: Optional[int] = None
    term_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    description: Optional[str] = None
    # manual override; null clears it
    status: Optional[Literal["cancelled"]] = None

    normalize_dates = field_validator("start_date", "end_date")(naive_utc)


class ClassOut(CamelModel):
    id: int
    name: str
    code: str
    course_id: int
    department_id: int
    section_id: Optional[int] = None
    level_id: int
    term_id: int
    start_date: datetime
    end_date: datetime
    status: str
    description: Optional[str] = None
    current_students: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
