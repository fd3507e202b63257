import logging
from typing import Iterable, List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleError
from app.db.models.enrollment import Enrollment
from app.db.models.user import User
from app.crud.utils import add_row, as_dict, save_changes, delete_row

logger = logging.getLogger(__name__)

ACTIVE_CONFLICT = "Student already has an active enrollment"


def get_enrollment(db: Session, enrollment_id: int):
    return db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()


def get_enrollments_by_student(db: Session, student_id: int):
    return db.query(Enrollment).filter(Enrollment.student_id == student_id).order_by(Enrollment.id).all()


def get_active_enrollment(db: Session, student_id: int):
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id, Enrollment.status == "active")
        .first()
    )


def _with_student(db: Session):
    return (
        db.query(Enrollment, User.full_name, User.username, User.email)
        .outerjoin(User, User.id == Enrollment.student_id)
    )


def _student_rows(rows):
    result = []
    for enrollment, full_name, username, email in rows:
        data = as_dict(enrollment)
        data.update(student_name=full_name, student_username=username, student_email=email)
        result.append(data)
    return result


def get_enrollments_by_class(db: Session, class_id: int):
    rows = _with_student(db).filter(Enrollment.class_id == class_id).order_by(Enrollment.id).all()
    return _student_rows(rows)


def get_enrollments_by_course(db: Session, course_id: int):
    rows = _with_student(db).filter(Enrollment.course_id == course_id).order_by(Enrollment.id).all()
    return _student_rows(rows)


def get_all_enrollments(db: Session):
    return _student_rows(_with_student(db).order_by(Enrollment.id).all())


def create_enrollment(db: Session, data: dict):
    if data.get("status", "active") == "active" and get_active_enrollment(db, data["student_id"]):
        raise BusinessRuleError(ACTIVE_CONFLICT)
    return add_row(db, Enrollment(**data), ACTIVE_CONFLICT)


def enroll_students(
    db: Session,
    student_ids: Iterable[int],
    class_id: int,
    course_id: int,
    term_id: int,
) -> Tuple[List[Enrollment], List[str]]:
    """Enroll each student independently.

    A student is refused when they do not exist, already have an enrollment in
    this class, or hold an active enrollment in another class. Returns the
    created enrollments and one message per refused student.
    """
    created, errors = [], []
    for student_id in student_ids:
        student = db.query(User).filter(User.id == student_id).first()
        if not student or student.role != "student":
            errors.append(f"Student ID {student_id} not found")
            continue
        existing = get_enrollments_by_student(db, student_id)
        if any(e.class_id == class_id for e in existing):
            errors.append(f"{student.full_name} is already enrolled in this class")
            continue
        if any(e.status == "active" for e in existing):
            errors.append(f"{student.full_name} is already enrolled in another class")
            continue
        try:
            enrollment = add_row(db, Enrollment(
                student_id=student_id,
                class_id=class_id,
                course_id=course_id,
                term_id=term_id,
                status="active",
            ))
        except BusinessRuleError:
            errors.append(f"{student.full_name} is already enrolled in another class")
            continue
        created.append(enrollment)

    logger.info(f"Enrolled {len(created)} student(s) in class {class_id}, {len(errors)} refused")
    return created, errors


def update_enrollment(db: Session, enrollment_id: int, updates: dict):
    enrollment = get_enrollment(db, enrollment_id)
    if not enrollment:
        return None
    if updates.get("status") == "active" and enrollment.status != "active":
        if get_active_enrollment(db, enrollment.student_id):
            raise BusinessRuleError(ACTIVE_CONFLICT)
    return save_changes(db, enrollment, updates, ACTIVE_CONFLICT)


def delete_enrollment(db: Session, enrollment_id: int) -> bool:
    enrollment = get_enrollment(db, enrollment_id)
    if not enrollment:
        return False
    delete_row(db, enrollment)
    return True
