from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel


class UnitCreate(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    course_id: int
    teacher_id: Optional[int] = None
    class_ids: List[int] = []


class UnitUpdate(CamelModel):
    nullable_fields = frozenset({"teacher_id"})

    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    course_id: Optional[int] = None
    teacher_id: Optional[int] = None


class UnitOut(CamelModel):
    id: int
    name: str
    code: str
    course_id: int
    teacher_id: Optional[int] = None


class UnitDetail(UnitOut):
    course_name: str
    level_name: str
    teacher_name: Optional[str] = None
    session_count: int = 0
    enrollment_count: Optional[int] = None


class UnitAssignment(CamelModel):
    unit_ids: List[int] = Field(min_length=1)


class ClassAssignment(CamelModel):
    class_ids: List[int] = Field(min_length=1)
