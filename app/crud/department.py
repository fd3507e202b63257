from sqlalchemy import select
from sqlalchemy.orm import Session
from app.db.models.department import Department
from app.db.models.section import Section
from app.db.models.level import Level
from app.db.models.course import Course
from app.crud.utils import add_row, save_changes, delete_row


def get_department(db: Session, department_id: int):
    return db.query(Department).filter(Department.id == department_id).first()


def get_all_departments(db: Session):
    return db.query(Department).order_by(Department.id).all()


def create_department(db: Session, data: dict):
    return add_row(db, Department(**data), "Department code already exists")


def update_department(db: Session, department_id: int, updates: dict):
    department = get_department(db, department_id)
    if not department:
        return None
    return save_changes(db, department, updates, "Department code already exists")


def delete_department(db: Session, department_id: int) -> bool:
    # dependents (sections, courses, classes) are left as they are
    department = get_department(db, department_id)
    if not department:
        return False
    delete_row(db, department)
    return True


# Sections

def get_section(db: Session, section_id: int):
    return db.query(Section).filter(Section.id == section_id).first()


def get_all_sections(db: Session):
    return db.query(Section).order_by(Section.id).all()


def get_sections_by_department(db: Session, department_id: int):
    return db.query(Section).filter(Section.department_id == department_id).order_by(Section.id).all()


def create_section(db: Session, data: dict):
    return add_row(db, Section(**data))


def update_section(db: Session, section_id: int, updates: dict):
    section = get_section(db, section_id)
    if not section:
        return None
    return save_changes(db, section, updates)


def delete_section(db: Session, section_id: int) -> bool:
    section = get_section(db, section_id)
    if not section:
        return False
    delete_row(db, section)
    return True


# Levels

def get_level(db: Session, level_id: int):
    return db.query(Level).filter(Level.id == level_id).first()


def get_all_levels(db: Session):
    return db.query(Level).order_by(Level.id).all()


def create_level(db: Session, data: dict):
    return add_row(db, Level(**data))


def update_level(db: Session, level_id: int, updates: dict):
    level = get_level(db, level_id)
    if not level:
        return None
    return save_changes(db, level, updates)


def delete_level(db: Session, level_id: int) -> bool:
    level = get_level(db, level_id)
    if not level:
        return False
    delete_row(db, level)
    return True


def get_levels_by_department(db: Session, department_id: int):
    """Levels that at least one course of the department is offered at."""
    level_ids = select(Course.level_id).where(Course.department_id == department_id)
    return db.query(Level).filter(Level.id.in_(level_ids)).order_by(Level.id).all()


def get_levels_by_section(db: Session, section_id: int):
    level_ids = select(Course.level_id).where(Course.section_id == section_id)
    return db.query(Level).filter(Level.id.in_(level_ids)).order_by(Level.id).all()
