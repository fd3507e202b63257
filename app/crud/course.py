from sqlalchemy.orm import Session
from app.db.models.course import Course
from app.db.models.level import Level
from app.crud.utils import add_row, save_changes, delete_row


def get_course(db: Session, course_id: int):
    return db.query(Course).filter(Course.id == course_id).first()


def get_all_courses(db: Session):
    """Courses with the name of their level resolved."""
    rows = (
        db.query(Course, Level.name)
        .outerjoin(Level, Level.id == Course.level_id)
        .order_by(Course.id)
        .all()
    )
    return [
        {
            "id": course.id,
            "name": course.name,
            "code": course.code,
            "level_id": course.level_id,
            "department_id": course.department_id,
            "section_id": course.section_id,
            "level_name": level_name or "Unknown Level",
        }
        for course, level_name in rows
    ]


def get_courses_by_level(db: Session, level_id: int):
    return db.query(Course).filter(Course.level_id == level_id).order_by(Course.id).all()


def get_courses_by_department(db: Session, department_id: int):
    return db.query(Course).filter(Course.department_id == department_id).order_by(Course.id).all()


def create_course(db: Session, data: dict):
    return add_row(db, Course(**data), "Course code already exists")


def update_course(db: Session, course_id: int, updates: dict):
    course = get_course(db, course_id)
    if not course:
        return None
    return save_changes(db, course, updates, "Course code already exists")


def delete_course(db: Session, course_id: int) -> bool:
    course = get_course(db, course_id)
    if not course:
        return False
    delete_row(db, course)
    return True
