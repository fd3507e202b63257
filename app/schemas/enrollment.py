from datetime import datetime
from pydantic import Field
from typing import List, Literal, Optional

from app.schemas.base import CamelModel

EnrollmentStatus = Literal["active", "completed", "dropped", "withdrawn"]


class EnrollmentBatchCreate(CamelModel):
    student_ids: List[int] = Field(min_length=1)
    class_id: int
    # default to the class's own course / term
    course_id: Optional[int] = None
    term_id: Optional[int] = None


class EnrollmentUpdate(CamelModel):
    nullable_fields = frozenset({"final_grade"})

    status: Optional[EnrollmentStatus] = None
    final_grade: Optional[str] = None


class EnrollmentOut(CamelModel):
    id: int
    student_id: int
    class_id: int
    course_id: int
    term_id: int
    enrollment_date: Optional[datetime] = None
    status: str
    final_grade: Optional[str] = None
    created_at: Optional[datetime] = None


class EnrollmentWithStudent(EnrollmentOut):
    student_name: Optional[str] = None
    student_username: Optional[str] = None
    student_email: Optional[str] = None
