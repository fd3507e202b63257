import logging

from sqlalchemy.orm import Session

from app.db.models.unit_schedule import UnitSchedule
from app.db.models.unit import Unit
from app.db.models.academic_term import AcademicTerm
from app.schemas.schedule import DAY_NAMES
from app.crud.utils import add_row, as_dict, save_changes, delete_row

logger = logging.getLogger(__name__)


def get_unit_schedule(db: Session, schedule_id: int):
    return db.query(UnitSchedule).filter(UnitSchedule.id == schedule_id).first()


def create_unit_schedule(db: Session, data: dict):
    schedule = add_row(db, UnitSchedule(**data))
    logger.info(
        f"Unit {schedule.unit_id} scheduled on {DAY_NAMES[schedule.day_of_week]} "
        f"{schedule.start_time}-{schedule.end_time}"
    )
    return schedule


def _with_day(schedule: UnitSchedule) -> dict:
    data = as_dict(schedule)
    data["day_name"] = DAY_NAMES[schedule.day_of_week]
    data["type"] = "recurring"
    return data


def get_schedules_by_unit(db: Session, unit_id: int, active_only: bool = False):
    query = db.query(UnitSchedule).filter(UnitSchedule.unit_id == unit_id)
    if active_only:
        query = query.filter(UnitSchedule.is_active.is_(True))
    return query.order_by(UnitSchedule.day_of_week, UnitSchedule.start_time).all()


def get_schedules_with_day(db: Session, unit_id: int):
    return [_with_day(s) for s in get_schedules_by_unit(db, unit_id)]


def get_all_unit_schedules(db: Session):
    """Every schedule with unit and term names resolved."""
    rows = (
        db.query(UnitSchedule, Unit.name, Unit.code, AcademicTerm.name)
        .outerjoin(Unit, Unit.id == UnitSchedule.unit_id)
        .outerjoin(AcademicTerm, AcademicTerm.id == UnitSchedule.term_id)
        .order_by(UnitSchedule.day_of_week, UnitSchedule.start_time)
        .all()
    )
    result = []
    for schedule, unit_name, unit_code, term_name in rows:
        data = _with_day(schedule)
        data.update(unit_name=unit_name, unit_code=unit_code, term_name=term_name)
        result.append(data)
    return result


def get_schedules_by_teacher(db: Session, teacher_id: int):
    schedules = (
        db.query(UnitSchedule)
        .join(Unit, Unit.id == UnitSchedule.unit_id)
        .filter(Unit.teacher_id == teacher_id)
        .order_by(UnitSchedule.day_of_week, UnitSchedule.start_time)
        .all()
    )
    return [_with_day(s) for s in schedules]


def update_unit_schedule_status(db: Session, schedule_id: int, is_active: bool):
    schedule = get_unit_schedule(db, schedule_id)
    if not schedule:
        return None
    return save_changes(db, schedule, {"is_active": is_active})


def delete_unit_schedule(db: Session, schedule_id: int) -> bool:
    schedule = get_unit_schedule(db, schedule_id)
    if not schedule:
        return False
    delete_row(db, schedule)
    return True
