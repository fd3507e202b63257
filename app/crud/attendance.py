# app/crud/attendance.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.core.timeutils import utcnow
from app.db.models.attendance import Attendance
from app.db.models.unit_session import UnitSession
from app.db.models.unit import Unit, UnitClassAssignment
from app.db.models.course import Course
from app.db.models.enrollment import Enrollment
from app.db.models.school_class import SchoolClass
from app.db.models.user import User
from app.crud.utils import as_dict, save_changes
from app.crud.unit_session import session_with_unit

logger = logging.getLogger(__name__)

UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def get_attendance(db: Session, attendance_id: int):
    return db.query(Attendance).filter(Attendance.id == attendance_id).first()


def get_attendance_record(db: Session, session_id: int, student_id: int):
    return (
        db.query(Attendance)
        .filter(Attendance.session_id == session_id, Attendance.student_id == student_id)
        .first()
    )


def mark_attendance(
    db: Session,
    session_id: int,
    student_id: int,
    is_present: bool,
    marked_by_self: bool = False,
    marked_by_teacher: bool = False,
    marked_at: Optional[datetime] = None,
):
    """Create or overwrite the single (session, student) attendance row.

    Marker flags only ever flip to True, so a teacher correction keeps the
    record of the student having marked themselves.
    """
    marked_at = marked_at or utcnow()
    values = {
        "session_id": session_id,
        "student_id": student_id,
        "is_present": is_present,
        "marked_by_self": marked_by_self,
        "marked_by_teacher": marked_by_teacher,
        "marked_at": marked_at,
    }
    changes = {"is_present": is_present, "marked_at": marked_at}
    if marked_by_self:
        changes["marked_by_self"] = True
    if marked_by_teacher:
        changes["marked_by_teacher"] = True

    insert = UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Attendance).values(**values).on_conflict_do_update(
            index_elements=["session_id", "student_id"], set_=changes
        )
        db.execute(stmt)
    else:
        existing = (
            db.query(Attendance)
            .filter(Attendance.session_id == session_id, Attendance.student_id == student_id)
            .with_for_update()
            .first()
        )
        if existing:
            for field, value in changes.items():
                setattr(existing, field, value)
        else:
            db.add(Attendance(**values))
    db.commit()

    record = get_attendance_record(db, session_id, student_id)
    db.refresh(record)
    return record


def get_attendance_by_session(db: Session, session_id: int):
    return (
        db.query(Attendance)
        .filter(Attendance.session_id == session_id)
        .order_by(Attendance.student_id)
        .all()
    )


def get_attendance_by_student(db: Session, student_id: int):
    """Attendance rows of a student, each with its session, unit and course nested."""
    rows = (
        db.query(Attendance, UnitSession, Unit, Course)
        .outerjoin(UnitSession, UnitSession.id == Attendance.session_id)
        .outerjoin(Unit, Unit.id == UnitSession.unit_id)
        .outerjoin(Course, Course.id == Unit.course_id)
        .filter(Attendance.student_id == student_id)
        .order_by(Attendance.marked_at.desc())
        .all()
    )
    result = []
    for attendance, session, unit, course in rows:
        data = as_dict(attendance)
        data["session"] = (
            session_with_unit(session, unit, course)
            if session is not None and unit is not None and course is not None
            else None
        )
        result.append(data)
    return result


def update_attendance(db: Session, attendance_id: int, is_present: bool, updated_by: int):
    attendance = get_attendance(db, attendance_id)
    if not attendance:
        return None
    return save_changes(db, attendance, {
        "is_present": is_present,
        "marked_by_teacher": True,
        "updated_by": updated_by,
        "updated_at": utcnow(),
    })


def get_students_by_session(db: Session, session_id: int):
    """Students actively enrolled in any class the session's unit is assigned to."""
    rows = (
        db.query(
            User.id,
            User.username,
            User.full_name,
            User.email,
            SchoolClass.id.label("class_id"),
            SchoolClass.name.label("class_name"),
        )
        .select_from(UnitSession)
        .join(UnitClassAssignment, UnitClassAssignment.unit_id == UnitSession.unit_id)
        .join(Enrollment, Enrollment.class_id == UnitClassAssignment.class_id)
        .join(User, User.id == Enrollment.student_id)
        .join(SchoolClass, SchoolClass.id == Enrollment.class_id)
        .filter(UnitSession.id == session_id, Enrollment.status == "active")
        .order_by(User.full_name)
        .all()
    )
    return [
        {
            "id": row.id,
            "username": row.username,
            "full_name": row.full_name,
            "email": row.email,
            "class": {"id": row.class_id, "name": row.class_name},
        }
        for row in rows
    ]
