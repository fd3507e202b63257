import logging
from typing import Iterable, Optional

from sqlalchemy import false, func, select
from sqlalchemy.orm import Session

from app.db.models.unit import Unit
from app.db.models.course import Course
from app.db.models.level import Level
from app.db.models.user import User
from app.db.models.unit_session import UnitSession
from app.db.models.enrollment import Enrollment
from app.db.models.school_class import SchoolClass
from app.crud.utils import as_dict, commit, flush, save_changes, delete_row
from app.crud.school_class import queue_assignments

logger = logging.getLogger(__name__)

UNIT_CONFLICT = "Unit code already exists"


def get_unit(db: Session, unit_id: int):
    return db.query(Unit).filter(Unit.id == unit_id).first()


def get_units_by_course(db: Session, course_id: int):
    return db.query(Unit).filter(Unit.course_id == course_id).order_by(Unit.id).all()


def get_units_by_teacher(db: Session, teacher_id: int):
    return db.query(Unit).filter(Unit.teacher_id == teacher_id).order_by(Unit.id).all()


def create_unit(db: Session, data: dict, class_ids: Iterable[int] = ()):
    unit = Unit(**data)
    db.add(unit)
    flush(db, UNIT_CONFLICT)
    queue_assignments(db, [(unit.id, class_id) for class_id in class_ids])
    commit(db, UNIT_CONFLICT)
    db.refresh(unit)
    logger.info(f"Created unit {unit.code} (id={unit.id})")
    return unit


def update_unit(db: Session, unit_id: int, updates: dict):
    unit = get_unit(db, unit_id)
    if not unit:
        return None
    return save_changes(db, unit, updates, UNIT_CONFLICT)


def delete_unit(db: Session, unit_id: int) -> bool:
    unit = get_unit(db, unit_id)
    if not unit:
        return False
    delete_row(db, unit)
    return True


def unit_visibility_filter(user: User):
    """SQL criterion limiting units to what `user` may list, None for everything."""
    if user.role in ("admin", "super_admin"):
        return None
    if user.role == "teacher":
        return Unit.teacher_id == user.id
    if user.role == "hod":
        return Unit.course_id.in_(
            select(Course.id).where(Course.department_id == user.department_id)
        )
    if user.role == "student":
        return Unit.course_id.in_(
            select(Enrollment.course_id).where(
                Enrollment.student_id == user.id, Enrollment.status == "active"
            )
        )
    return false()


def _detail_query(db: Session):
    return (
        db.query(Unit, Course.name, Level.name, User.full_name)
        .outerjoin(Course, Course.id == Unit.course_id)
        .outerjoin(Level, Level.id == Course.level_id)
        .outerjoin(User, User.id == Unit.teacher_id)
    )


def _session_counts(db: Session, unit_ids) -> dict:
    rows = (
        db.query(UnitSession.unit_id, func.count(UnitSession.id))
        .filter(UnitSession.unit_id.in_(unit_ids))
        .group_by(UnitSession.unit_id)
        .all()
    )
    return dict(rows)


def _enrollment_counts(db: Session, course_ids) -> dict:
    # students enrolled in any class of the unit's course
    rows = (
        db.query(SchoolClass.course_id, func.count(Enrollment.id))
        .join(Enrollment, Enrollment.class_id == SchoolClass.id)
        .filter(SchoolClass.course_id.in_(course_ids))
        .group_by(SchoolClass.course_id)
        .all()
    )
    return dict(rows)


def _details(db: Session, rows):
    units = [row[0] for row in rows]
    if not units:
        return []
    sessions = _session_counts(db, [u.id for u in units])
    enrollments = _enrollment_counts(db, {u.course_id for u in units})
    result = []
    for unit, course_name, level_name, teacher_name in rows:
        data = as_dict(unit)
        data.update(
            course_name=course_name or "Unknown Course",
            level_name=level_name or "Unknown Level",
            teacher_name=teacher_name,
            session_count=sessions.get(unit.id, 0),
            enrollment_count=enrollments.get(unit.course_id, 0),
        )
        result.append(data)
    return result


def get_unit_details(db: Session, unit_id: int) -> Optional[dict]:
    """Unit plus course, level and teacher names resolved at read time."""
    rows = _detail_query(db).filter(Unit.id == unit_id).all()
    if not rows:
        return None
    return _details(db, rows)[0]


def get_units_visible_to(db: Session, user: User):
    query = _detail_query(db)
    criterion = unit_visibility_filter(user)
    if criterion is not None:
        query = query.filter(criterion)
    return _details(db, query.order_by(Unit.id).all())
