# app/db/__init__.py
# Importing app.db guarantees every model is registered on Base.metadata

from app.db.base import Base
from app.db.models import (
    User,
    Department,
    Section,
    Level,
    Course,
    Unit,
    UnitClassAssignment,
    AcademicTerm,
    UnitSchedule,
    UnitSession,
    SchoolClass,
    Enrollment,
    Attendance,
    RecordOfWork,
)

__all__ = [
    "Base", "User", "Department", "Section", "Level", "Course", "Unit",
    "UnitClassAssignment", "AcademicTerm", "UnitSchedule", "UnitSession",
    "SchoolClass", "Enrollment", "Attendance", "RecordOfWork",
]
