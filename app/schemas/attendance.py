from pydantic import BaseModel, Field, StrictBool, StrictInt
from datetime import datetime
from typing import Any, List, Optional

from app.schemas.base import CamelModel
from app.schemas.unit_session import SessionWithUnit


class AttendanceCreate(CamelModel):
    session_id: int
    student_id: int
    is_present: bool = False
    marked_by_self: bool = False
    marked_by_teacher: bool = False


class AttendanceUpdate(CamelModel):
    is_present: StrictBool


class AttendanceOut(CamelModel):
    id: int
    session_id: int
    student_id: int
    is_present: bool
    marked_by_self: bool
    marked_by_teacher: bool
    marked_at: datetime
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None


class StudentAttendanceRecord(AttendanceOut):
    session: Optional[SessionWithUnit] = None


class BulkAttendanceEntry(CamelModel):
    student_id: StrictInt
    is_present: StrictBool


class BulkAttendanceIn(CamelModel):
    session_id: int
    # entries are validated one by one so a bad entry does not sink the batch
    attendance: List[Any]


class ClassBrief(BaseModel):
    id: int
    name: str


class SessionStudent(CamelModel):
    id: int
    username: str
    full_name: str
    email: str
    class_: ClassBrief = Field(alias="class")


class BulkAttendanceResult(CamelModel):
    message: str
    records: List[AttendanceOut]
    # entries that were skipped, with the reason
    errors: List[Any] = []
