from app.db.base import Base
from app.db.models.user import User
from app.db.models.department import Department
from app.db.models.section import Section
from app.db.models.level import Level
from app.db.models.course import Course
from app.db.models.unit import Unit, UnitClassAssignment
from app.db.models.academic_term import AcademicTerm
from app.db.models.unit_schedule import UnitSchedule
from app.db.models.unit_session import UnitSession
from app.db.models.school_class import SchoolClass
from app.db.models.enrollment import Enrollment
from app.db.models.attendance import Attendance
from app.db.models.record_of_work import RecordOfWork

__all__ = [
    "Base", "User", "Department", "Section", "Level", "Course", "Unit",
    "UnitClassAssignment", "AcademicTerm", "UnitSchedule", "UnitSession",
    "SchoolClass", "Enrollment", "Attendance", "RecordOfWork",
]
