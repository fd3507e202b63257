import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.timeutils import utcnow
from app.db.models.school_class import SchoolClass
from app.db.models.enrollment import Enrollment
from app.db.models.unit import Unit, UnitClassAssignment
from app.crud.utils import as_dict, commit, flush, save_changes, delete_row

logger = logging.getLogger(__name__)

CLASS_CONFLICT = "Class code already exists"


def calculate_class_status(
    start_date: datetime,
    end_date: datetime,
    now: datetime,
    stored_status: Optional[str] = None,
) -> str:
    """upcoming -> active -> completed, both ends inclusive for "active".

    A manually cancelled class stays cancelled whatever the dates say.
    """
    if stored_status == "cancelled":
        return "cancelled"
    if now < start_date:
        return "upcoming"
    if now <= end_date:
        return "active"
    return "completed"


def _with_counts(db: Session):
    counts = (
        db.query(Enrollment.class_id.label("class_id"), func.count(Enrollment.id).label("n"))
        .group_by(Enrollment.class_id)
        .subquery()
    )
    return (
        db.query(SchoolClass, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.class_id == SchoolClass.id)
    )


def _derive(school_class: SchoolClass, enrolled: int, now: datetime) -> dict:
    data = as_dict(school_class)
    data["status"] = calculate_class_status(
        school_class.start_date, school_class.end_date, now, school_class.status
    )
    data["current_students"] = enrolled
    return data


def get_class(db: Session, class_id: int):
    return db.query(SchoolClass).filter(SchoolClass.id == class_id).first()


def get_class_details(db: Session, class_id: int, now: Optional[datetime] = None):
    row = _with_counts(db).filter(SchoolClass.id == class_id).first()
    if not row:
        return None
    return _derive(row[0], row[1], now or utcnow())


def get_all_classes(db: Session, now: Optional[datetime] = None):
    """Every class with its live status and enrollment count, one query."""
    now = now or utcnow()
    rows = _with_counts(db).order_by(SchoolClass.id).all()
    return [_derive(c, n, now) for c, n in rows]


def get_classes_by_course(db: Session, course_id: int, now: Optional[datetime] = None):
    now = now or utcnow()
    rows = _with_counts(db).filter(SchoolClass.course_id == course_id).order_by(SchoolClass.id).all()
    return [_derive(c, n, now) for c, n in rows]


def get_classes_by_term(db: Session, term_id: int, now: Optional[datetime] = None):
    now = now or utcnow()
    rows = _with_counts(db).filter(SchoolClass.term_id == term_id).order_by(SchoolClass.id).all()
    return [_derive(c, n, now) for c, n in rows]


def create_class(db: Session, data: dict, unit_ids: Iterable[int] = ()):
    school_class = SchoolClass(**data)
    db.add(school_class)
    flush(db, CLASS_CONFLICT)
    queue_assignments(db, [(unit_id, school_class.id) for unit_id in unit_ids])
    commit(db, CLASS_CONFLICT)
    db.refresh(school_class)
    logger.info(f"Created class {school_class.code} (id={school_class.id})")
    return school_class


def update_class(db: Session, class_id: int, updates: dict):
    school_class = get_class(db, class_id)
    if not school_class:
        return None
    return save_changes(db, school_class, updates, CLASS_CONFLICT)


def delete_class(db: Session, class_id: int) -> bool:
    school_class = get_class(db, class_id)
    if not school_class:
        return False
    delete_row(db, school_class)
    return True


# Unit <-> class assignments

def queue_assignments(db: Session, pairs) -> int:
    """Queue (unit_id, class_id) pairs that are not assigned yet. No commit."""
    pairs = list(dict.fromkeys(pairs))
    if not pairs:
        return 0
    unit_ids = {unit_id for unit_id, _ in pairs}
    class_ids = {class_id for _, class_id in pairs}
    existing = set(
        db.query(UnitClassAssignment.unit_id, UnitClassAssignment.class_id)
        .filter(
            UnitClassAssignment.unit_id.in_(unit_ids),
            UnitClassAssignment.class_id.in_(class_ids),
        )
        .all()
    )
    added = 0
    for unit_id, class_id in pairs:
        if (unit_id, class_id) in existing:
            continue
        db.add(UnitClassAssignment(unit_id=unit_id, class_id=class_id))
        added += 1
    return added


def assign_units_to_class(db: Session, class_id: int, unit_ids: Iterable[int]) -> int:
    added = queue_assignments(db, [(unit_id, class_id) for unit_id in unit_ids])
    commit(db, "Unit is already assigned to this class")
    return added


def assign_unit_to_classes(db: Session, unit_id: int, class_ids: Iterable[int]) -> int:
    added = queue_assignments(db, [(unit_id, class_id) for class_id in class_ids])
    commit(db, "Unit is already assigned to this class")
    return added


def get_units_for_class(db: Session, class_id: int):
    return (
        db.query(Unit)
        .join(UnitClassAssignment, UnitClassAssignment.unit_id == Unit.id)
        .filter(UnitClassAssignment.class_id == class_id)
        .order_by(Unit.id)
        .all()
    )


def get_classes_for_unit(db: Session, unit_id: int, now: Optional[datetime] = None):
    now = now or utcnow()
    rows = (
        _with_counts(db)
        .join(UnitClassAssignment, UnitClassAssignment.class_id == SchoolClass.id)
        .filter(UnitClassAssignment.unit_id == unit_id)
        .order_by(SchoolClass.id)
        .all()
    )
    return [_derive(c, n, now) for c, n in rows]
